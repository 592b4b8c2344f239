"""Thin HTTP client for the Discord REST API."""

from __future__ import annotations

import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)

API_BASE = "https://discord.com/api/v10"
DEFAULT_TIMEOUT = 5.0


class DiscordHTTPError(Exception):
    """Non-success response or transport failure talking to Discord.

    ``status`` is ``None`` for transport failures (timeouts, DNS, resets).
    """

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class DiscordClient:
    """
    Send authenticated requests to Discord.

    Bot calls carry ``Authorization: Bot <token>``; user calls made on behalf
    of an OAuth login pass ``bearer=`` instead.

    :param bot_token: Bot token, may be empty for OAuth-only usage.
    :param timeout: Per-request timeout in seconds.
    :param session: Optional preconfigured :class:`requests.Session`.
    """

    def __init__(
        self,
        bot_token: str | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        base_url: str = API_BASE,
        session: requests.Session | None = None,
    ) -> None:
        self.bot_token = bot_token or None
        self.timeout = timeout
        self.base_url = base_url.rstrip("/")
        self.http = session or requests.Session()

    def request(
        self,
        method: str,
        path: str,
        *,
        bearer: str | None = None,
        json: Any = None,
        data: dict[str, Any] | None = None,
    ) -> Any:
        """Perform a request and return the decoded JSON body (``None`` on 204).

        :raises DiscordHTTPError: On transport errors and non-2xx responses.
        """
        headers: dict[str, str] = {}
        if bearer:
            headers["Authorization"] = f"Bearer {bearer}"
        elif self.bot_token:
            headers["Authorization"] = f"Bot {self.bot_token}"

        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            resp = self.http.request(
                method, url, headers=headers, json=json, data=data, timeout=self.timeout
            )
        except requests.RequestException as exc:
            logger.warning("discord.transport_error", extra={"endpoint": path})
            raise DiscordHTTPError(f"{method} {path} failed: {exc}") from exc

        if not resp.ok:
            raise DiscordHTTPError(f"{method} {path} returned {resp.status_code}", resp.status_code)
        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise DiscordHTTPError(f"{method} {path} returned invalid JSON", resp.status_code) from exc
