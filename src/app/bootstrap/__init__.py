"""Bootstrap da aplicação: inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, validate_runtime_settings

    # Na inicialização do serviço
    initialize_app()
    validate_runtime_settings()
"""

from __future__ import annotations

import logging

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_sharepoint_settings,
    get_veriff_settings,
)
from utils.errors import ConfigurationError

logger = logging.getLogger(__name__)


def _log_secrets() -> tuple[str, ...]:
    """Valores que nunca podem aparecer em log."""
    secrets = [*get_veriff_settings().shared_secrets, get_sharepoint_settings().client_secret]
    return tuple(secret for secret in secrets if secret)


def initialize_app() -> None:
    """Inicializa a aplicação com todas as configurações necessárias.

    Deve ser chamada uma vez no início do serviço.

    Configura:
    - Logging estruturado JSON com correlation_id
    - Mascaramento dos shared secrets e do client secret
    """
    base = get_base_settings()
    configure_logging(
        level=base.log_level,
        service_name=base.service_name,
        correlation_id_getter=get_correlation_id,
        secrets=_log_secrets(),
    )


def initialize_test_app() -> None:
    """Inicializa a aplicação para testes (nível DEBUG)."""
    base = get_base_settings()
    configure_logging(
        level="DEBUG",
        service_name=f"{base.service_name}_test",
        correlation_id_getter=get_correlation_id,
        secrets=_log_secrets(),
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Credenciais, URL base e versão da Veriff são obrigatórias em qualquer
    ambiente. Erros do SharePoint derrubam o boot só em staging/production;
    em development ficam como alerta.

    Raises:
        ConfigurationError: Configuração insuficiente para subir o processo.
    """
    base = get_base_settings()
    errors = [f"base: {error}" for error in base.validate()]
    errors.extend(f"veriff: {error}" for error in get_veriff_settings().validate())
    fatal = list(errors)

    sharepoint_errors = [
        f"sharepoint: {error}" for error in get_sharepoint_settings().validate()
    ]
    errors.extend(sharepoint_errors)
    if base.is_strict:
        fatal.extend(sharepoint_errors)

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if fatal:
        details = "\n".join(f"- {error}" for error in fatal)
        raise ConfigurationError(f"Configuração inválida para {base.environment}:\n{details}")
