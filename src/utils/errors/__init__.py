"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    ConfigurationError,
    DocumentStoreError,
    InfrastructureError,
)

__all__ = [
    "ConfigurationError",
    "DocumentStoreError",
    "InfrastructureError",
]
