"""Settings do repositório de documentos (SharePoint).

Credenciais de app-only (client credentials) e localização do site.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

SHAREPOINT_PRINCIPAL_ID: str = "00000003-0000-0ff1-ce00-000000000000"
SHAREPOINT_TOKEN_URL: str = "https://accounts.accesscontrol.windows.net/{tenant_id}/tokens/OAuth/2"
DEFAULT_ROOT_FOLDER: str = "KYC Details"


@dataclass(frozen=True)
class SharePointSettings:
    """Configurações do SharePoint.

    Attributes:
        tenant_id: ID do tenant Azure AD
        client_id: ID do app registrado
        client_secret: Secret do app registrado
        resource: Principal do SharePoint Online
        site_domain: Domínio do site (ex: contoso.sharepoint.com)
        subsite: Nome do site sob /sites
        root_folder: Pasta raiz onde as sessões são gravadas
        request_timeout_seconds: Timeout por requisição
        max_retries: Tentativas em falhas transitórias (429/5xx/timeout)
    """

    tenant_id: str = ""
    client_id: str = ""
    client_secret: str = ""
    resource: str = SHAREPOINT_PRINCIPAL_ID
    site_domain: str = ""
    subsite: str = ""
    root_folder: str = DEFAULT_ROOT_FOLDER
    request_timeout_seconds: float = 60.0
    max_retries: int = 3

    @property
    def site_url(self) -> str:
        """URL absoluta do site."""
        return f"https://{self.site_domain}/sites/{self.subsite}"

    @property
    def token_url(self) -> str:
        """Endpoint OAuth do Azure ACS para o tenant."""
        return SHAREPOINT_TOKEN_URL.format(tenant_id=self.tenant_id)

    def validate(self) -> list[str]:
        """Valida configurações mínimas do SharePoint.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        required = {
            "SHAREPOINT_TENANT_ID": self.tenant_id,
            "SHAREPOINT_CLIENT_ID": self.client_id,
            "SHAREPOINT_CLIENT_SECRET": self.client_secret,
            "SHAREPOINT_SITE_DOMAIN": self.site_domain,
            "SHAREPOINT_SUBSITE": self.subsite,
        }
        errors.extend(f"{name} não configurado" for name, value in required.items() if not value)

        if self.request_timeout_seconds <= 0:
            errors.append("SHAREPOINT_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("SHAREPOINT_MAX_RETRIES deve ser >= 0")

        return errors


def _env(name: str, legacy: str, default: str = "") -> str:
    return os.getenv(name, os.getenv(legacy, default))


def _load_from_env() -> SharePointSettings:
    """Carrega SharePointSettings de variáveis de ambiente."""
    return SharePointSettings(
        tenant_id=_env("SHAREPOINT_TENANT_ID", "TENANT_ID"),
        client_id=_env("SHAREPOINT_CLIENT_ID", "CLIENT_ID"),
        client_secret=_env("SHAREPOINT_CLIENT_SECRET", "CLIENT_SECRET"),
        resource=_env("SHAREPOINT_RESOURCE", "RESOURCE", SHAREPOINT_PRINCIPAL_ID),
        site_domain=_env("SHAREPOINT_SITE_DOMAIN", "SITE_DOMAIN"),
        subsite=_env("SHAREPOINT_SUBSITE", "SUBSITE"),
        root_folder=os.getenv("SHAREPOINT_ROOT_FOLDER", DEFAULT_ROOT_FOLDER),
        request_timeout_seconds=float(os.getenv("SHAREPOINT_REQUEST_TIMEOUT_SECONDS", "60")),
        max_retries=int(os.getenv("SHAREPOINT_MAX_RETRIES", "3")),
    )


@lru_cache(maxsize=1)
def get_sharepoint_settings() -> SharePointSettings:
    """Retorna instância cacheada de SharePointSettings."""
    return _load_from_env()
