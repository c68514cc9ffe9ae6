"""Cliente REST do SharePoint para gravar documentos de sessões KYC.

Construção em duas fases:
    client = SharePointClient(settings)      # síncrono, sem IO
    await client.prepare()                    # token OAuth + form digest

Todas as operações de pasta/arquivo exigem `prepare()` antes.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from pydantic import BaseModel

from api.connectors.http_base import HttpClient, HttpClientConfig, HttpError
from utils.errors import DocumentStoreError

if TYPE_CHECKING:
    import httpx

    from config.settings import SharePointSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SharePointContext:
    """Credenciais de sessão obtidas em `prepare()`."""

    access_token: str
    form_digest: str


class SharePointClient(HttpClient):
    """Uploader de pastas e arquivos no SharePoint Online."""

    def __init__(
        self,
        settings: SharePointSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        config = HttpClientConfig(
            timeout_seconds=settings.request_timeout_seconds,
            max_retries=settings.max_retries,
        )
        super().__init__(config, transport=transport)
        self._settings = settings
        self._context: SharePointContext | None = None

    @property
    def is_prepared(self) -> bool:
        return self._context is not None

    async def prepare(self) -> SharePointContext:
        """Obtém access token e form digest.

        Raises:
            DocumentStoreError: Se alguma das chamadas falhar.
        """
        access_token = await self._fetch_access_token()
        form_digest = await self._fetch_form_digest(access_token)
        self._context = SharePointContext(access_token=access_token, form_digest=form_digest)
        logger.info("sharepoint_prepared", extra={"site_domain": self._settings.site_domain})
        return self._context

    # ── Pastas ────────────────────────────────────────────────────────────

    async def folder_exists(self, path: str) -> bool:
        url = (
            f"{self._settings.site_url}/_api/web/"
            f"GetFolderByServerRelativeUrl('{self._server_relative(path)}')/Exists"
        )
        response = await self._call("GET", url, "checking folder existence", accept="application/json")
        try:
            return bool(response.json().get("value"))
        except (json.JSONDecodeError, AttributeError) as exc:
            raise DocumentStoreError("SharePoint API error while checking folder existence") from exc

    async def create_folder(self, path: str) -> None:
        url = f"{self._settings.site_url}/_api/web/Folders/add('{self._server_relative(path)}')"
        await self._call(
            "POST",
            url,
            "creating folder",
            extra_headers={"Content-Type": "application/json;odata=verbose"},
        )
        logger.info("sharepoint_folder_created", extra={"depth": len(_segments(path))})

    async def ensure_folder(self, path: str) -> None:
        """Cria cada segmento ausente do caminho, do mais raso ao mais fundo."""
        segments = _segments(path)
        for depth in range(1, len(segments) + 1):
            partial = "/".join(segments[:depth])
            if not await self.folder_exists(partial):
                await self.create_folder(partial)

    # ── Arquivos ──────────────────────────────────────────────────────────

    async def upload_file(
        self,
        folder: str,
        file_name: str,
        content: bytes,
        content_type: str,
    ) -> None:
        """Envia um arquivo (sobrescreve se já existir)."""
        url = (
            f"{self._settings.site_url}/_api/web/"
            f"GetFolderByServerRelativeUrl('{self._server_relative(folder)}')/"
            f"Files/Add(url='{_escape_odata(file_name)}', overwrite=true)"
        )
        await self._call(
            "POST",
            url,
            "uploading file",
            content=content,
            extra_headers={"Content-Type": content_type},
        )
        logger.info(
            "sharepoint_file_uploaded",
            extra={"content_type": content_type, "size_bytes": len(content)},
        )

    async def upload_json(self, folder: str, file_name: str, value: Any) -> bool:
        """Serializa `value` como JSON e envia.

        Returns:
            False quando `value` é None (nada é enviado).
        """
        if value is None:
            logger.info("sharepoint_json_skipped_empty", extra={"file_name": file_name})
            return False
        content = json.dumps(to_jsonable(value), ensure_ascii=False).encode("utf-8")
        await self.upload_file(folder, file_name, content, "application/json")
        return True

    # ── Internos ──────────────────────────────────────────────────────────

    def _server_relative(self, path: str) -> str:
        relative = "/".join([self._settings.subsite, *_segments(path)])
        return _escape_odata(relative)

    def _require_context(self) -> SharePointContext:
        if self._context is None:
            raise DocumentStoreError("SharePointClient.prepare() não foi chamado")
        return self._context

    async def _call(
        self,
        method: str,
        url: str,
        operation: str,
        *,
        content: bytes | None = None,
        accept: str = "application/json;odata=verbose",
        extra_headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        context = self._require_context()
        headers = {
            "Authorization": f"Bearer {context.access_token}",
            "Accept": accept,
            "X-RequestDigest": context.form_digest,
            **(extra_headers or {}),
        }
        try:
            return await self.request_with_backoff(method, url, headers=headers, content=content)
        except HttpError as exc:
            raise _to_store_error(exc, operation) from exc

    async def _fetch_access_token(self) -> str:
        settings = self._settings
        data = {
            "grant_type": "client_credentials",
            "client_id": f"{settings.client_id}@{settings.tenant_id}",
            "client_secret": settings.client_secret,
            "resource": f"{settings.resource}/{settings.site_domain}@{settings.tenant_id}",
        }
        try:
            response = await self.request_with_backoff(
                "POST",
                settings.token_url,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                data=data,
            )
        except HttpError as exc:
            raise _to_store_error(exc, "fetching access token") from exc

        token = _json_field(response, "access_token")
        if not token:
            raise DocumentStoreError("Failed to fetch access token from SharePoint.")
        return token

    async def _fetch_form_digest(self, access_token: str) -> str:
        try:
            response = await self.request_with_backoff(
                "POST",
                f"{self._settings.site_url}/_api/contextinfo",
                headers={
                    "Authorization": f"Bearer {access_token}",
                    "Accept": "application/json",
                },
            )
        except HttpError as exc:
            raise _to_store_error(exc, "fetching form digest value") from exc

        digest = _json_field(response, "FormDigestValue")
        if not digest:
            raise DocumentStoreError("Failed to fetch Form Digest Value from SharePoint.")
        return digest.split(",", 1)[0]


def to_jsonable(value: Any) -> Any:
    """Converte modelos pydantic (inclusive aninhados em listas/dicts) para JSON."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, list):
        return [to_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {key: to_jsonable(item) for key, item in value.items()}
    return value


def _segments(path: str) -> list[str]:
    return [segment for segment in path.strip("/").split("/") if segment]


def _escape_odata(value: str) -> str:
    # Aspas simples são escapadas dobrando; o resto vai percent-encoded
    return quote(value.replace("'", "''"), safe="/@ ")


def _json_field(response: httpx.Response, name: str) -> str | None:
    try:
        data = response.json()
    except json.JSONDecodeError:
        return None
    value = data.get(name) if isinstance(data, dict) else None
    return value if isinstance(value, str) and value else None


def _to_store_error(exc: HttpError, operation: str) -> DocumentStoreError:
    detail = _sharepoint_error_message(exc.body) or str(exc)
    logger.warning(
        "sharepoint_request_failed",
        extra={"operation": operation, "status_code": exc.status_code},
    )
    return DocumentStoreError(
        f"SharePoint API error while {operation}: {detail}",
        status_code=exc.status_code,
    )


def _sharepoint_error_message(body: str | None) -> str | None:
    """Extrai `error.message.value` (formato OData verbose)."""
    if not body:
        return None
    try:
        data = json.loads(body)
    except json.JSONDecodeError:
        return None
    error = data.get("error") if isinstance(data, dict) else None
    if not isinstance(error, dict):
        return None
    message = error.get("message")
    if isinstance(message, dict):
        value = message.get("value")
        return value if isinstance(value, str) else None
    return message if isinstance(message, str) else None
