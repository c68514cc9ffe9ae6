"""Testes do cliente SharePoint com httpx.MockTransport."""

from __future__ import annotations

import json
from collections.abc import Callable
from urllib.parse import parse_qs

import httpx
import pytest

from api.connectors.sharepoint import SharePointClient
from config.settings import SharePointSettings
from utils.errors import DocumentStoreError

SETTINGS = SharePointSettings(
    tenant_id="tenant",
    client_id="client",
    client_secret="secret",
    site_domain="contoso.sharepoint.com",
    subsite="kyc",
    max_retries=0,
)


def _router(
    routes: dict[str, Callable[[httpx.Request], httpx.Response]],
    seen: list[httpx.Request],
) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        for marker, respond in routes.items():
            if marker in request.url.path:
                return respond(request)
        return httpx.Response(200, json={})

    return handler


def _auth_routes() -> dict[str, Callable[[httpx.Request], httpx.Response]]:
    return {
        "/tokens/OAuth/2": lambda _: httpx.Response(200, json={"access_token": "token-1"}),
        "/_api/contextinfo": lambda _: httpx.Response(
            200, json={"FormDigestValue": "digest-1,18 Oct 2026"}
        ),
    }


async def _prepared_client(
    routes: dict[str, Callable[[httpx.Request], httpx.Response]],
    seen: list[httpx.Request],
) -> SharePointClient:
    client = SharePointClient(
        SETTINGS,
        transport=httpx.MockTransport(_router({**_auth_routes(), **routes}, seen)),
    )
    await client.prepare()
    return client


@pytest.mark.asyncio
async def test_prepare_fetches_token_and_form_digest() -> None:
    seen: list[httpx.Request] = []
    client = SharePointClient(SETTINGS, transport=httpx.MockTransport(_router(_auth_routes(), seen)))

    context = await client.prepare()

    assert context.access_token == "token-1"
    assert context.form_digest == "digest-1"
    token_request, digest_request = seen
    assert str(token_request.url) == (
        "https://accounts.accesscontrol.windows.net/tenant/tokens/OAuth/2"
    )
    form = parse_qs(token_request.content.decode("utf-8"))
    assert form["grant_type"] == ["client_credentials"]
    assert form["client_id"] == ["client@tenant"]
    assert form["resource"] == [
        "00000003-0000-0ff1-ce00-000000000000/contoso.sharepoint.com@tenant"
    ]
    assert digest_request.headers["Authorization"] == "Bearer token-1"
    await client.aclose()


@pytest.mark.asyncio
async def test_prepare_without_token_raises() -> None:
    client = SharePointClient(
        SETTINGS,
        transport=httpx.MockTransport(lambda _: httpx.Response(200, json={})),
    )

    with pytest.raises(DocumentStoreError, match="access token"):
        await client.prepare()
    await client.aclose()


@pytest.mark.asyncio
async def test_operations_require_prepare() -> None:
    client = SharePointClient(SETTINGS, transport=httpx.MockTransport(lambda _: httpx.Response(200)))

    with pytest.raises(DocumentStoreError):
        await client.folder_exists("KYC Details")


@pytest.mark.asyncio
async def test_ensure_folder_creates_only_missing_segments() -> None:
    seen: list[httpx.Request] = []

    def exists(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"value": "('kyc/KYC Details')" in request.url.path})

    client = await _prepared_client({"/Exists": exists}, seen)
    await client.ensure_folder("KYC Details/Successful/Ana Lima_sess-1")

    created = [r.url.path for r in seen if "/Folders/add" in r.url.path]
    assert created == [
        "/sites/kyc/_api/web/Folders/add('kyc/KYC Details/Successful')",
        "/sites/kyc/_api/web/Folders/add('kyc/KYC Details/Successful/Ana Lima_sess-1')",
    ]
    add_request = next(r for r in seen if "/Folders/add" in r.url.path)
    assert add_request.headers["X-RequestDigest"] == "digest-1"
    assert add_request.headers["Authorization"] == "Bearer token-1"
    await client.aclose()


@pytest.mark.asyncio
async def test_upload_file_posts_binary_with_content_type() -> None:
    seen: list[httpx.Request] = []
    client = await _prepared_client({}, seen)

    await client.upload_file("KYC Details/x", "document-front.jpeg", b"\xff\xd8", "image/jpeg")

    upload = seen[-1]
    assert upload.method == "POST"
    assert upload.url.path.endswith(
        "GetFolderByServerRelativeUrl('kyc/KYC Details/x')/Files/Add(url='document-front.jpeg', overwrite=true)"
    )
    assert upload.content == b"\xff\xd8"
    assert upload.headers["Content-Type"] == "image/jpeg"
    await client.aclose()


@pytest.mark.asyncio
async def test_upload_json_skips_none() -> None:
    seen: list[httpx.Request] = []
    client = await _prepared_client({}, seen)
    requests_before = len(seen)

    assert await client.upload_json("KYC Details/x", "ineData.json", None) is False
    assert len(seen) == requests_before
    await client.aclose()


@pytest.mark.asyncio
async def test_upload_json_serializes_value() -> None:
    seen: list[httpx.Request] = []
    client = await _prepared_client({}, seen)

    assert await client.upload_json("KYC Details/x", "personInfo.json", {"firstName": "Ana"})

    upload = seen[-1]
    assert json.loads(upload.content) == {"firstName": "Ana"}
    assert upload.headers["Content-Type"] == "application/json"
    await client.aclose()


@pytest.mark.asyncio
async def test_sharepoint_error_message_is_surfaced() -> None:
    seen: list[httpx.Request] = []

    def fail(_: httpx.Request) -> httpx.Response:
        return httpx.Response(
            403, json={"error": {"code": "-2147024891", "message": {"value": "Access denied."}}}
        )

    client = await _prepared_client({"/Files/Add": fail}, seen)

    with pytest.raises(DocumentStoreError, match="Access denied.") as exc_info:
        await client.upload_file("KYC Details", "a.json", b"{}", "application/json")
    assert exc_info.value.status_code == 403
    await client.aclose()


@pytest.mark.asyncio
async def test_transient_error_is_retried(monkeypatch: pytest.MonkeyPatch) -> None:
    async def _no_sleep(*_: object) -> None:
        return None

    monkeypatch.setattr("api.connectors.http_base._backoff_sleep", _no_sleep)
    attempts = 0

    def flaky(_: httpx.Request) -> httpx.Response:
        nonlocal attempts
        attempts += 1
        if attempts == 1:
            return httpx.Response(503, text="busy")
        return httpx.Response(200, json={})

    settings = SharePointSettings(**{**SETTINGS.__dict__, "max_retries": 2})
    seen: list[httpx.Request] = []
    client = SharePointClient(
        settings,
        transport=httpx.MockTransport(_router({**_auth_routes(), "/Files/Add": flaky}, seen)),
    )
    await client.prepare()
    await client.upload_file("KYC Details", "a.json", b"{}", "application/json")

    assert attempts == 2
    await client.aclose()
