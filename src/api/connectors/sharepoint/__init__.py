"""Conector SharePoint - repositório de documentos das sessões KYC."""

from .client import SharePointClient, SharePointContext, to_jsonable

__all__ = ["SharePointClient", "SharePointContext", "to_jsonable"]
