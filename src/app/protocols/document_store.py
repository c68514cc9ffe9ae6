"""Contrato do repositório de documentos (pastas + arquivos)."""

from __future__ import annotations

from typing import Any, Protocol


class DocumentStoreProtocol(Protocol):
    """Destino dos documentos de uma sessão.

    Implementações concretas precisam estar preparadas (autenticadas)
    antes do primeiro uso.
    """

    async def ensure_folder(self, path: str) -> None: ...

    async def upload_file(
        self,
        folder: str,
        file_name: str,
        content: bytes,
        content_type: str,
    ) -> None: ...

    async def upload_json(self, folder: str, file_name: str, value: Any) -> bool: ...
