"""Modelos de resposta da Station API usados pelo serviço."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    import httpx


class MediaItem(BaseModel):
    """Metadados de uma imagem ou vídeo; o binário é baixado sob demanda."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(..., description="ID da mídia (UUID v4).")
    context: str = Field(default="", description="Contexto (ex: document-front, face).")
    name: str = Field(default="", description="Nome do arquivo na Veriff.")
    duration_seconds: float | None = Field(default=None, alias="duration")
    url: str = Field(default="", description="URL de download na Station API.")
    size_bytes: int | None = Field(default=None, alias="size")
    mime_type: str | None = Field(default=None, alias="mimetype")


class MediaList(BaseModel):
    """Lista de mídias de uma sessão, attempt ou endereço."""

    model_config = ConfigDict(extra="allow")

    status: str = ""
    images: list[MediaItem] = Field(default_factory=list)
    videos: list[MediaItem] = Field(default_factory=list)

    @property
    def items(self) -> list[MediaItem]:
        return [*self.images, *self.videos]


class Attempt(BaseModel):
    """Uma tentativa de verificação dentro da sessão."""

    model_config = ConfigDict(extra="allow")

    id: str
    status: str | None = None


@dataclass
class MediaStream:
    """Corpo binário de uma mídia ainda não lido.

    O chamador deve consumir (`read`/`iter_bytes`) ou fechar (`aclose`)
    o stream; o uso como context manager garante o fechamento.
    """

    content_type: str
    _response: httpx.Response = field(repr=False)

    @property
    def subtype(self) -> str:
        """Extensão derivada do content type (image/jpeg → jpeg)."""
        main = self.content_type.split(";", 1)[0].strip()
        return main.split("/", 1)[1] if "/" in main else "bin"

    async def iter_bytes(self) -> AsyncIterator[bytes]:
        try:
            async for chunk in self._response.aiter_bytes():
                yield chunk
        finally:
            await self._response.aclose()

    async def read(self) -> bytes:
        """Drena o stream inteiro e fecha a resposta."""
        try:
            return await self._response.aread()
        finally:
            await self._response.aclose()

    async def aclose(self) -> None:
        await self._response.aclose()

    async def __aenter__(self) -> MediaStream:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
