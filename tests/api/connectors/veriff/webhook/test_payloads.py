"""Testes da extração do session id dos payloads."""

from __future__ import annotations

import pytest

from api.connectors.veriff.webhook import (
    InvalidPayloadError,
    extract_session_id,
    parse_address_reference,
    parse_verification_reference,
)


def test_session_id_from_nested_verification() -> None:
    assert extract_session_id({"verification": {"id": "sess-1"}, "id": "other"}) == "sess-1"


def test_session_id_from_bare_id() -> None:
    assert extract_session_id({"id": "addr-session"}) == "addr-session"


def test_missing_session_id_raises() -> None:
    with pytest.raises(InvalidPayloadError, match="missing_session_id"):
        extract_session_id({"verification": {}})


def test_verification_reference_carries_code() -> None:
    reference = parse_verification_reference({"verification": {"id": "sess-1", "code": 7002}})

    assert reference.session_id == "sess-1"
    assert reference.code == 7002


def test_verification_reference_accepts_code_at_top_level() -> None:
    reference = parse_verification_reference({"id": "sess-1", "code": "7001"})

    assert reference.code == 7001


def test_address_reference() -> None:
    reference = parse_address_reference({"id": "sess-1", "addressId": "addr-9"})

    assert reference.session_id == "sess-1"
    assert reference.address_id == "addr-9"
    assert parse_address_reference({"id": "sess-1"}).address_id is None
