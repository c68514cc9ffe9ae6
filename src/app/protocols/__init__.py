"""Protocolos e contratos do core da aplicação."""

from .document_store import DocumentStoreProtocol
from .veriff_client import VeriffClientProtocol

__all__ = [
    "DocumentStoreProtocol",
    "VeriffClientProtocol",
]
