"""Authenticated request helper for the Telegram Bot API.

Attaches the bot token from a credential store, sends the JSON body and
translates Telegram error responses. No retry: every failure propagates to the
caller.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx

from src.telegram.credentials import CredentialStore, EnvCredentialStore

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.telegram.org"
_DEFAULT_TIMEOUT_SECONDS = 30.0


class TelegramApiError(Exception):
    """Raised when the Bot API answers with an error description."""

    def __init__(
        self, message: str, status_code: int | None = None, description: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.description = description
        super().__init__(message)


class InvalidCredentialsError(TelegramApiError):
    pass


class ClientConfigError(Exception):
    pass


def _error_description(resp: httpx.Response) -> str | None:
    try:
        payload = resp.json()
    except ValueError:
        return None
    if isinstance(payload, dict) and payload.get("description"):
        return str(payload["description"])
    return None


class TelegramApiClient:
    """Sends one Bot API call per ``request``."""

    def __init__(
        self,
        credentials: CredentialStore,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = _DEFAULT_TIMEOUT_SECONDS,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._credentials = credentials
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http_client = http_client

    @classmethod
    def from_env(
        cls,
        credentials: CredentialStore | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> TelegramApiClient:
        """Create a client configured from environment variables."""
        base_url = os.environ.get("TELEGRAM_API_BASE_URL", DEFAULT_BASE_URL)
        raw_timeout = os.environ.get("TELEGRAM_API_TIMEOUT", str(_DEFAULT_TIMEOUT_SECONDS))
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ClientConfigError(
                f"TELEGRAM_API_TIMEOUT must be a number of seconds, got {raw_timeout!r}",
            ) from None
        return cls(
            credentials=credentials or EnvCredentialStore(),
            base_url=base_url,
            timeout=timeout,
            http_client=http_client,
        )

    def _url(self, endpoint: str) -> str:
        token = self._credentials.get_telegram_credentials().access_token
        return f"{self._base_url}/bot{token}/{endpoint}"

    async def request(
        self,
        method: str,
        endpoint: str,
        body: dict[str, Any] | None = None,
        qs: dict[str, Any] | None = None,
    ) -> Any:
        """Call ``endpoint`` and return the decoded JSON response.

        HTTP 401 raises InvalidCredentialsError; other error responses that
        carry a ``description`` raise TelegramApiError with that description,
        other error statuses raise it with the reason phrase. Transport errors
        pass through as-is.
        """
        url = self._url(endpoint)
        kwargs: dict[str, Any] = {"json": body or {}, "params": qs or None}

        if self._http_client is not None:
            resp = await self._http_client.request(method, url, **kwargs)
        else:
            async with httpx.AsyncClient(verify=True, timeout=self._timeout) as client:
                resp = await client.request(method, url, **kwargs)

        logger.debug("Telegram %s %s -> %d", method, endpoint, resp.status_code)
        return self._handle_response(resp)

    @staticmethod
    def _handle_response(resp: httpx.Response) -> Any:
        if resp.status_code == 401:
            raise InvalidCredentialsError(
                "The Telegram credentials are not valid!", status_code=401,
            )
        if resp.status_code >= 400:
            description = _error_description(resp)
            if description:
                raise TelegramApiError(
                    f"Telegram error response [{resp.status_code}]: {description}",
                    status_code=resp.status_code,
                    description=description,
                )
            # httpx's own status error would embed the token-bearing URL
            raise TelegramApiError(
                f"Telegram error response [{resp.status_code}]: {resp.reason_phrase}",
                status_code=resp.status_code,
            )
        return resp.json()
