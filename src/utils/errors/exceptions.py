"""Exceções compartilhadas entre camadas."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Configuração obrigatória ausente ou inválida no startup."""


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class DocumentStoreError(InfrastructureError):
    """Falha ao criar pasta ou enviar arquivo para o repositório de documentos."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
