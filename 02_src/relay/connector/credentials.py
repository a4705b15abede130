"""App credentials for authenticating outbound connector calls."""

import asyncio
import time

import httpx

from ..logging_config import get_logger

logger = get_logger(__name__)

TOKEN_URL = "https://login.microsoftonline.com/botframework.com/oauth2/v2.0/token"
TOKEN_SCOPE = "https://api.botframework.com/.default"
# Refresh this many seconds before the token actually expires
EXPIRY_MARGIN = 300


class AppCredentials:
    """Client-credentials token source. Without an app id, no token is used."""

    def __init__(
        self,
        app_id: str | None,
        app_password: str | None,
        client: httpx.AsyncClient,
        token_url: str = TOKEN_URL,
    ):
        self._app_id = app_id
        self._app_password = app_password
        self._client = client
        self._token_url = token_url
        self._token: str | None = None
        self._expires_at = 0.0
        self._lock = asyncio.Lock()

    @property
    def enabled(self) -> bool:
        return bool(self._app_id)

    async def get_token(self) -> str | None:
        """Return a valid bearer token, fetching a new one when needed."""
        if not self.enabled:
            return None

        async with self._lock:
            if self._token and time.monotonic() < self._expires_at:
                return self._token

            response = await self._client.post(
                self._token_url,
                data={
                    "grant_type": "client_credentials",
                    "client_id": self._app_id,
                    "client_secret": self._app_password or "",
                    "scope": TOKEN_SCOPE,
                },
            )
            response.raise_for_status()
            payload = response.json()

            self._token = payload["access_token"]
            expires_in = int(payload.get("expires_in", 3600))
            self._expires_at = time.monotonic() + max(0, expires_in - EXPIRY_MARGIN)
            logger.debug(f"Connector token refreshed, valid for {expires_in}s")
            return self._token
