"""Tests for application settings."""

import pytest

from app.backend.config import Settings

ENV_VARS = (
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "STRIPE_SECRET_KEY",
    "STRIPE_PRICE_ID",
    "STRIPE_AMOUNT",
    "STRIPE_CURRENCY",
    "DOMAIN",
    "PORT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    """Tests for default values."""

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.openai_api_key is None
        assert settings.stripe_secret_key is None
        assert settings.openai_model == "gpt-4o"
        assert settings.stripe_amount == 1000
        assert settings.stripe_currency == "usd"
        assert settings.stripe_timeout == 30.0
        assert settings.port == 5001
        assert settings.public_domain == "http://localhost:5001"

    def test_public_domain_follows_port(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("PORT", "8080")
        assert Settings(_env_file=None).public_domain == "http://localhost:8080"

    def test_domain_overrides_localhost(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("DOMAIN", "https://contracts.example.com/")
        assert Settings(_env_file=None).public_domain == "https://contracts.example.com"


class TestPriceSelection:
    """Tests for Stripe price configuration."""

    def test_price_id_with_prefix_used(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("STRIPE_PRICE_ID", "price_1Abc")
        assert Settings(_env_file=None).configured_price_id == "price_1Abc"

    def test_price_id_without_prefix_ignored(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("STRIPE_PRICE_ID", "prod_1Abc")
        assert Settings(_env_file=None).configured_price_id is None

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("2500", 2500), ("", 1000), ("0", 1000), ("-5", 1000), ("ten", 1000)],
    )
    def test_amount_fallback(self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: int):
        monkeypatch.setenv("STRIPE_AMOUNT", raw)
        assert Settings(_env_file=None).stripe_amount == expected

    def test_blank_currency_defaults_to_usd(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("STRIPE_CURRENCY", "")
        assert Settings(_env_file=None).stripe_currency == "usd"
