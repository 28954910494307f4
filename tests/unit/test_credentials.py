"""Tests for the Telegram credential stores."""

from __future__ import annotations

import pytest

from src.telegram.credentials import (
    TOKEN_ENV_VAR,
    CredentialsError,
    EnvCredentialStore,
    StaticCredentialStore,
)


def test_static_store_returns_token() -> None:
    store = StaticCredentialStore("123:ABC")
    assert store.get_telegram_credentials().access_token == "123:ABC"


def test_static_store_rejects_empty_token() -> None:
    with pytest.raises(CredentialsError):
        StaticCredentialStore("")


def test_env_store_reads_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(TOKEN_ENV_VAR, "456:DEF")
    assert EnvCredentialStore().get_telegram_credentials().access_token == "456:DEF"


def test_env_store_custom_variable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OTHER_BOT_TOKEN", "789:GHI")
    store = EnvCredentialStore(env_var="OTHER_BOT_TOKEN")
    assert store.get_telegram_credentials().access_token == "789:GHI"


def test_env_store_missing_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(TOKEN_ENV_VAR, raising=False)
    with pytest.raises(CredentialsError, match=TOKEN_ENV_VAR):
        EnvCredentialStore().get_telegram_credentials()


def test_token_not_in_repr() -> None:
    credentials = StaticCredentialStore("123:SECRET").get_telegram_credentials()
    assert "SECRET" not in repr(credentials)
