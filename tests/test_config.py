"""Tests for Settings validation and the Twilio provider wrapper."""

import pytest

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from hotel_ivr.config import Settings
from hotel_ivr.provider import ProviderNotConfigured, TwilioProvider


@pytest.fixture
def catalog_csv(tmp_path):
    path = tmp_path / "hotel_rooms.csv"
    path.write_text("room_type,status,price_per_night,view_type\n", encoding="utf-8")
    return str(path)


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        config = Settings(_env_file=None)
        assert config.port == 3000
        assert config.tts_voice == "Polly.Amy-Neural"
        assert config.speech_language == "en-US"
        assert config.rooms_csv_path == "hotel_rooms.csv"

    def test_port_from_env(self, monkeypatch):
        monkeypatch.setenv("PORT", "8123")
        assert Settings(_env_file=None).port == 8123

    def test_no_warnings_when_complete(self, catalog_csv):
        config = Settings(
            _env_file=None,
            rooms_csv_path=catalog_csv,
            twilio_account_sid="AC123",
            twilio_auth_token="secret",
        )
        assert config.validate_startup() == []

    def test_warns_missing_credentials(self, catalog_csv):
        config = Settings(
            _env_file=None,
            rooms_csv_path=catalog_csv,
            twilio_account_sid="",
            twilio_auth_token="",
        )
        warnings = config.validate_startup()
        assert any("TWILIO_ACCOUNT_SID" in w for w in warnings)

    def test_warns_placeholder_credentials(self, catalog_csv):
        config = Settings(
            _env_file=None,
            rooms_csv_path=catalog_csv,
            twilio_account_sid="AC...",
            twilio_auth_token="secret",
        )
        assert any("placeholder" in w for w in config.validate_startup())

    def test_warns_missing_catalog(self, tmp_path):
        config = Settings(
            _env_file=None,
            rooms_csv_path=str(tmp_path / "missing.csv"),
            twilio_account_sid="AC123",
            twilio_auth_token="secret",
        )
        assert any("missing.csv" in w for w in config.validate_startup())

    def test_missing_workflow_raises(self, tmp_path, catalog_csv):
        config = Settings(
            _env_file=None,
            rooms_csv_path=catalog_csv,
            workflow_path=str(tmp_path / "nope.jsonl"),
        )
        with pytest.raises(ValueError, match="Workflow definition"):
            config.validate_startup()


class TestTwilioProvider:
    def test_not_configured(self):
        provider = TwilioProvider("", "")
        assert provider.configured is False
        with pytest.raises(ProviderNotConfigured):
            provider.client

    def test_client_built_from_explicit_credentials(self):
        provider = TwilioProvider("AC123", "secret")
        assert provider.configured is True
        client = provider.client
        assert client.username == "AC123"
        assert client.password == "secret"

    def test_client_is_reused(self):
        provider = TwilioProvider("AC123", "secret")
        assert provider.client is provider.client
