"""Testes dos endpoints de health e readiness."""

from __future__ import annotations

import json
from types import SimpleNamespace

import pytest
from starlette.requests import Request

from api.routes.health import router as health_router
from api.routes.health.router import health_check, readiness_check


def _build_request_with_state(state: SimpleNamespace) -> Request:
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/ready",
        "raw_path": b"/ready",
        "query_string": b"",
        "headers": [],
        "app": SimpleNamespace(state=state),
    }

    async def _receive() -> dict[str, object]:
        return {"type": "http.request", "body": b"", "more_body": False}

    return Request(scope, _receive)


def _settings(errors: list[str]) -> SimpleNamespace:
    return SimpleNamespace(validate=lambda: list(errors))


@pytest.fixture
def configure(monkeypatch: pytest.MonkeyPatch):
    def _configure(
        *,
        veriff_errors: list[str] | None = None,
        sharepoint_errors: list[str] | None = None,
        strict: bool = False,
    ) -> None:
        monkeypatch.setattr(
            health_router, "get_veriff_settings", lambda: _settings(veriff_errors or [])
        )
        monkeypatch.setattr(
            health_router, "get_sharepoint_settings", lambda: _settings(sharepoint_errors or [])
        )
        monkeypatch.setattr(
            health_router,
            "get_base_settings",
            lambda: SimpleNamespace(is_strict=strict, service_name="kyc_sync"),
        )

    return _configure


def _client() -> SimpleNamespace:
    return SimpleNamespace(credentials=[("k1", "s1"), ("k2", "s2")])


@pytest.mark.asyncio
async def test_health_reports_service_name(configure) -> None:
    configure()

    response = await health_check()

    assert response.status == "healthy"
    assert response.service == "kyc_sync"


@pytest.mark.asyncio
async def test_readiness_returns_ready_when_configured(configure) -> None:
    configure()
    request = _build_request_with_state(SimpleNamespace(veriff_client=_client()))

    response = await readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 200
    assert payload["status"] == "ready"
    assert payload["checks"]["veriff"]["status"] == "ok"
    assert payload["checks"]["veriff"]["credentials"] == 2
    assert payload["checks"]["sharepoint"]["status"] == "ok"


@pytest.mark.asyncio
async def test_readiness_fails_without_veriff_client(configure) -> None:
    configure()
    request = _build_request_with_state(SimpleNamespace())

    response = await readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 503
    assert payload["checks"]["veriff"]["error"] == "client_not_initialized"


@pytest.mark.asyncio
async def test_readiness_fails_with_invalid_veriff_configuration(configure) -> None:
    configure(veriff_errors=["VERIFF_API_KEYS not configured"])
    request = _build_request_with_state(SimpleNamespace(veriff_client=_client()))

    response = await readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 503
    assert payload["checks"]["veriff"]["error"] == "invalid_configuration"


@pytest.mark.asyncio
async def test_missing_sharepoint_is_degraded_outside_strict_environments(configure) -> None:
    configure(sharepoint_errors=["SHAREPOINT_SITE_URL not configured"])
    request = _build_request_with_state(SimpleNamespace(veriff_client=_client()))

    response = await readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 200
    assert payload["checks"]["sharepoint"]["status"] == "degraded"


@pytest.mark.asyncio
async def test_missing_sharepoint_fails_in_strict_environments(configure) -> None:
    configure(sharepoint_errors=["SHAREPOINT_SITE_URL not configured"], strict=True)
    request = _build_request_with_state(SimpleNamespace(veriff_client=_client()))

    response = await readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 503
    assert payload["status"] == "not_ready"
    assert payload["checks"]["sharepoint"]["status"] == "failed"
