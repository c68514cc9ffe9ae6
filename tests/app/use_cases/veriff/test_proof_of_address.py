"""Testes do handler de comprovante de endereço."""

from __future__ import annotations

import pytest

from api.connectors.veriff.models import Attempt, MediaItem, MediaList
from api.connectors.veriff.webhook import SessionReference
from app.use_cases.veriff import HandlerStatus, ProofOfAddressHandler
from tests.fakes.fake_document_store import FakeDocumentStore
from tests.fakes.fake_veriff_client import FakeVeriffClient


def _client(**overrides: object) -> FakeVeriffClient:
    values: dict[str, object] = {
        "decision": {"verification": {"code": 9001}},
        "person": {"firstName": "Ana", "lastName": "Lima"},
        "media": MediaList(),
        "watchlist": {"status": "clear"},
        "ine": {"status": "ok"},
        "curp": {"status": "ok"},
        "attempts": [Attempt(id="att-1")],
        "attempt_media": {"att-1": MediaList(images=[MediaItem(id="img-1", context="face")])},
        "address_media": {
            "addr-9": MediaList(images=[MediaItem(id="am-1", context="address-front")])
        },
        "blobs": {
            "img-1": (b"face", "image/jpeg"),
            "am-1": (b"%PDF", "application/pdf"),
        },
    }
    values.update(overrides)
    return FakeVeriffClient(**values)  # type: ignore[arg-type]


def _handler(client: FakeVeriffClient, store: FakeDocumentStore) -> ProofOfAddressHandler:
    return ProofOfAddressHandler(client, store, version="1.0.0", root_folder="KYC Details")


@pytest.mark.asyncio
async def test_documents_uploaded_to_session_folder() -> None:
    store = FakeDocumentStore()

    result = await _handler(_client(), store).execute(
        SessionReference(session_id="sess-1", address_id="addr-9")
    )

    folder = "KYC Details/Ana Lima_sess-1"
    assert result.status is HandlerStatus.UPLOADED
    assert result.folder == folder
    assert {
        path for path in store.files if path.startswith(f"{folder}/")
    } == {
        f"{folder}/personInfo.json",
        f"{folder}/mediaList.json",
        f"{folder}/sessionDecision.json",
        f"{folder}/watchlistScreening.json",
    }


@pytest.mark.asyncio
async def test_address_and_attempt_media_under_kyc_folder() -> None:
    store = FakeDocumentStore()
    client = _client()

    result = await _handler(client, store).execute(
        SessionReference(session_id="sess-1", address_id="addr-9")
    )

    kyc = "KYC Details/Ana Lima_KYC"
    assert store.files[f"{kyc}/addr-9/ProofOfAddress/address-front.pdf"] == (
        b"%PDF",
        "application/pdf",
    )
    assert f"{kyc}/att-1/ProofOfAddress/face.jpeg" in store.files
    assert client.called("get_address_media_by_id") == [("am-1",)]
    assert result.media_files == 2


@pytest.mark.asyncio
async def test_without_address_id_only_attempt_media() -> None:
    store = FakeDocumentStore()
    client = _client()

    result = await _handler(client, store).execute(SessionReference(session_id="sess-1"))

    assert client.called("get_address_media") == []
    assert result.media_files == 1


@pytest.mark.asyncio
async def test_unavailable_address_media_is_skipped() -> None:
    store = FakeDocumentStore()

    result = await _handler(_client(address_media={}), store).execute(
        SessionReference(session_id="sess-1", address_id="addr-9")
    )

    assert result.status is HandlerStatus.UPLOADED
    assert result.media_files == 1
    assert "KYC Details/Ana Lima_KYC/addr-9/ProofOfAddress" not in store.folders


@pytest.mark.asyncio
async def test_missing_person_is_insufficient_data() -> None:
    store = FakeDocumentStore()

    result = await _handler(_client(person={"lastName": "Lima"}), store).execute(
        SessionReference(session_id="sess-1", address_id="addr-9")
    )

    assert result.status is HandlerStatus.INSUFFICIENT_DATA
    assert store.files == {}
