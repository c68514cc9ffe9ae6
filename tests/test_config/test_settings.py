"""Testes para config.settings (Veriff, SharePoint e base)."""

from __future__ import annotations

import pytest

from config.settings import (
    BaseSettings,
    SharePointSettings,
    VeriffSettings,
    get_base_settings,
    get_sharepoint_settings,
    get_veriff_settings,
    parse_api_keys,
)

_KEYS_JSON = (
    '[{"apiKey": "k1", "sharedSecretKey": "s1"},'
    ' {"apiKey": "k2", "sharedSecretKey": "s2"}]'
)

_ENV_VARS = (
    "ENVIRONMENT",
    "SERVICE_NAME",
    "LOG_LEVEL",
    "VERIFF_API_KEYS",
    "API_KEYS",
    "VERIFF_BASE_URL",
    "BASE_URL",
    "VERIFF_VERSION",
    "VERSION",
    "VERIFF_WEBHOOK_PROCESSING_MODE",
    "SHAREPOINT_TENANT_ID",
    "TENANT_ID",
    "SHAREPOINT_CLIENT_ID",
    "SHAREPOINT_CLIENT_SECRET",
    "SHAREPOINT_SITE_DOMAIN",
    "SHAREPOINT_SUBSITE",
    "SHAREPOINT_ROOT_FOLDER",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_base_settings.cache_clear()
    get_veriff_settings.cache_clear()
    get_sharepoint_settings.cache_clear()
    yield
    get_base_settings.cache_clear()
    get_veriff_settings.cache_clear()
    get_sharepoint_settings.cache_clear()


class TestParseApiKeys:
    def test_parses_pairs_in_order(self) -> None:
        assert parse_api_keys(_KEYS_JSON) == (("k1", "s1"), ("k2", "s2"))

    def test_blank_value_is_empty(self) -> None:
        assert parse_api_keys("  ") == ()

    @pytest.mark.parametrize(
        ("raw", "message"),
        [
            ("{not json", "json_invalido"),
            ('{"apiKey": "k1"}', "esperada_lista_de_pares"),
            ('["k1"]', "item_0_nao_e_objeto"),
            ('[{"sharedSecretKey": "s1"}]', "item_0_sem_apiKey"),
            ('[{"apiKey": "k1", "sharedSecretKey": ""}]', "item_0_sem_sharedSecretKey"),
        ],
    )
    def test_rejects_malformed_values(self, raw: str, message: str) -> None:
        with pytest.raises(ValueError, match=message):
            parse_api_keys(raw)


class TestVeriffSettings:
    def test_loads_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VERIFF_API_KEYS", _KEYS_JSON)
        monkeypatch.setenv("VERIFF_BASE_URL", "https://station.example/v1/")
        monkeypatch.setenv("VERIFF_VERSION", "1.0.0")

        settings = get_veriff_settings()

        assert settings.api_keys == (("k1", "s1"), ("k2", "s2"))
        assert settings.api_base_url == "https://station.example/v1"
        assert settings.api_version == "1.0.0"
        assert settings.webhook_processing_mode == "inline"
        assert settings.shared_secrets == ("s1", "s2")
        assert settings.validate() == []

    def test_legacy_names_are_accepted(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("API_KEYS", _KEYS_JSON)
        monkeypatch.setenv("BASE_URL", "https://station.example/v1")
        monkeypatch.setenv("VERSION", "2.0.0")

        settings = get_veriff_settings()

        assert len(settings.api_keys) == 2
        assert settings.api_version == "2.0.0"
        assert settings.validate() == []

    def test_missing_values_are_reported(self) -> None:
        errors = get_veriff_settings().validate()

        assert any("VERIFF_API_KEYS" in error for error in errors)
        assert any("VERIFF_BASE_URL" in error for error in errors)
        assert any("VERIFF_VERSION" in error for error in errors)

    def test_invalid_keys_json_is_reported(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VERIFF_API_KEYS", "{broken")

        settings = get_veriff_settings()

        assert settings.api_keys == ()
        assert any("json_invalido" in error for error in settings.validate())

    def test_invalid_processing_mode(self) -> None:
        settings = VeriffSettings(
            api_keys=(("k1", "s1"),),
            api_base_url="https://station.example/v1",
            api_version="1.0.0",
            webhook_processing_mode="batch",
        )

        assert settings.validate() == [
            "VERIFF_WEBHOOK_PROCESSING_MODE deve ser 'async' ou 'inline'"
        ]


class TestSharePointSettings:
    def test_loads_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TENANT_ID", "tenant")
        monkeypatch.setenv("SHAREPOINT_CLIENT_ID", "client")
        monkeypatch.setenv("SHAREPOINT_CLIENT_SECRET", "secret")
        monkeypatch.setenv("SHAREPOINT_SITE_DOMAIN", "contoso.sharepoint.com")
        monkeypatch.setenv("SHAREPOINT_SUBSITE", "kyc")

        settings = get_sharepoint_settings()

        assert settings.validate() == []
        assert settings.site_url == "https://contoso.sharepoint.com/sites/kyc"
        assert settings.token_url.endswith("/tenant/tokens/OAuth/2")
        assert settings.root_folder == "KYC Details"

    def test_missing_values_are_reported(self) -> None:
        errors = SharePointSettings().validate()

        assert "SHAREPOINT_TENANT_ID não configurado" in errors
        assert "SHAREPOINT_SUBSITE não configurado" in errors


class TestBaseSettings:
    def test_defaults(self) -> None:
        settings = get_base_settings()

        assert settings.environment == "development"
        assert settings.service_name == "kyc_sync"
        assert settings.is_strict is False

    @pytest.mark.parametrize("value", ["prod", "production", "staging", "stage"])
    def test_strict_environments(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        monkeypatch.setenv("ENVIRONMENT", value)

        assert get_base_settings().is_strict is True

    def test_empty_service_name_is_invalid(self) -> None:
        assert BaseSettings(service_name="").validate() == ["SERVICE_NAME não pode ser vazio"]
