"""Credential store for the Telegram Bot API token."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict, Field

TOKEN_ENV_VAR = "TELEGRAM_ACCESS_TOKEN"


class CredentialsError(Exception):
    pass


class TelegramApiCredentials(BaseModel):
    model_config = ConfigDict(frozen=True)

    access_token: str = Field(min_length=1, repr=False)


class CredentialStore(ABC):
    """Source of the bot token attached to every API call."""

    @abstractmethod
    def get_telegram_credentials(self) -> TelegramApiCredentials:
        ...


class StaticCredentialStore(CredentialStore):
    def __init__(self, access_token: str) -> None:
        if not access_token:
            raise CredentialsError("Telegram access token is empty")
        self._credentials = TelegramApiCredentials(access_token=access_token)

    def get_telegram_credentials(self) -> TelegramApiCredentials:
        return self._credentials


class EnvCredentialStore(CredentialStore):
    """Reads the token from the environment on every lookup."""

    def __init__(self, env_var: str = TOKEN_ENV_VAR) -> None:
        self.env_var = env_var

    def get_telegram_credentials(self) -> TelegramApiCredentials:
        token = os.environ.get(self.env_var, "")
        if not token:
            raise CredentialsError(f"Telegram credentials missing: {self.env_var} is not set")
        return TelegramApiCredentials(access_token=token)
