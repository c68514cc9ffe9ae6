"""Settings do conector Veriff.

Credenciais (pares apiKey/sharedSecretKey), URL base e versão dos
registry checks. Sem qualquer um deles o processo não sobe.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class VeriffSettings:
    """Configurações do conector Veriff.

    Attributes:
        api_keys: Pares (public key, shared secret) na ordem configurada
        api_base_url: URL base da Station API (inclui /v1)
        api_version: Versão enviada aos registry checks (INE/CURP)
        request_timeout_seconds: Timeout por chamada upstream
        media_concurrency: Downloads/uploads de mídia simultâneos por attempt
        webhook_processing_mode: inline (status HTTP reflete o handler) ou async
        api_keys_error: Erro de parsing de VERIFF_API_KEYS, se houver
    """

    api_keys: tuple[tuple[str, str], ...] = ()
    api_base_url: str = ""
    api_version: str = ""
    request_timeout_seconds: float = 30.0
    media_concurrency: int = 4
    webhook_processing_mode: str = "inline"
    api_keys_error: str = ""

    @property
    def shared_secrets(self) -> tuple[str, ...]:
        """Secrets configurados (usados para mascarar logs)."""
        return tuple(secret for _, secret in self.api_keys)

    def validate(self) -> list[str]:
        """Valida configurações mínimas do conector.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if self.api_keys_error:
            errors.append(f"VERIFF_API_KEYS inválido: {self.api_keys_error}")
        elif not self.api_keys:
            errors.append("VERIFF_API_KEYS não configurado")

        if not self.api_base_url:
            errors.append("VERIFF_BASE_URL não configurado")

        if not self.api_version:
            errors.append("VERIFF_VERSION não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("VERIFF_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.media_concurrency < 1:
            errors.append("VERIFF_MEDIA_CONCURRENCY deve ser >= 1")

        if self.webhook_processing_mode not in ("async", "inline"):
            errors.append("VERIFF_WEBHOOK_PROCESSING_MODE deve ser 'async' ou 'inline'")

        return errors


def parse_api_keys(raw: str) -> tuple[tuple[str, str], ...]:
    """Converte o JSON de credenciais em pares (apiKey, sharedSecretKey).

    Formato esperado:
        [{"apiKey": "...", "sharedSecretKey": "..."}, ...]

    Raises:
        ValueError: Se o JSON for inválido ou algum item estiver incompleto.
    """
    if not raw.strip():
        return ()
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError("json_invalido") from exc

    if not isinstance(data, list):
        raise ValueError("esperada_lista_de_pares")

    pairs: list[tuple[str, str]] = []
    for position, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(f"item_{position}_nao_e_objeto")
        api_key = item.get("apiKey")
        shared_secret = item.get("sharedSecretKey")
        if not isinstance(api_key, str) or not api_key:
            raise ValueError(f"item_{position}_sem_apiKey")
        if not isinstance(shared_secret, str) or not shared_secret:
            raise ValueError(f"item_{position}_sem_sharedSecretKey")
        pairs.append((api_key, shared_secret))
    return tuple(pairs)


def _load_from_env() -> VeriffSettings:
    """Carrega VeriffSettings de variáveis de ambiente.

    Aceita os nomes legados (API_KEYS, BASE_URL, VERSION) como fallback.
    """
    raw_keys = os.getenv("VERIFF_API_KEYS", os.getenv("API_KEYS", ""))
    api_keys: tuple[tuple[str, str], ...] = ()
    api_keys_error = ""
    try:
        api_keys = parse_api_keys(raw_keys)
    except ValueError as exc:
        api_keys_error = str(exc)

    return VeriffSettings(
        api_keys=api_keys,
        api_base_url=os.getenv("VERIFF_BASE_URL", os.getenv("BASE_URL", "")).rstrip("/"),
        api_version=os.getenv("VERIFF_VERSION", os.getenv("VERSION", "")),
        request_timeout_seconds=float(os.getenv("VERIFF_REQUEST_TIMEOUT_SECONDS", "30")),
        media_concurrency=int(os.getenv("VERIFF_MEDIA_CONCURRENCY", "4")),
        webhook_processing_mode=os.getenv("VERIFF_WEBHOOK_PROCESSING_MODE", "inline").lower(),
        api_keys_error=api_keys_error,
    )


@lru_cache(maxsize=1)
def get_veriff_settings() -> VeriffSettings:
    """Retorna instância cacheada de VeriffSettings."""
    return _load_from_env()
