"""Agregador de settings do serviço.

Re-exporta as settings de cada domínio. Cada arquivo isola um conjunto
de variáveis de ambiente.
"""

from __future__ import annotations

from config.settings.base import (
    DEFAULT_SERVICE_NAME,
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.sharepoint import (
    DEFAULT_ROOT_FOLDER,
    SharePointSettings,
    get_sharepoint_settings,
)
from config.settings.veriff import (
    VeriffSettings,
    get_veriff_settings,
    parse_api_keys,
)

__all__ = [
    "DEFAULT_ROOT_FOLDER",
    "DEFAULT_SERVICE_NAME",
    "BaseSettings",
    "Environment",
    "SharePointSettings",
    "VeriffSettings",
    "get_base_settings",
    "get_sharepoint_settings",
    "get_veriff_settings",
    "parse_api_keys",
]
