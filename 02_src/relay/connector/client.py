"""Outbound connector REST client."""

from typing import Protocol
from urllib.parse import quote

import httpx

from ..logging_config import get_logger
from ..models import Activity, ResourceResponse
from .credentials import AppCredentials

logger = get_logger(__name__)


class ConnectorError(RuntimeError):
    """The connector refused or failed to deliver an activity."""


class IConnectorClient(Protocol):
    """Delivers outbound activities to the chat platform."""

    async def send_activity(self, activity: Activity) -> ResourceResponse:
        """Send one activity into its conversation."""
        ...


class ConnectorClient:
    """Posts activities to the conversation endpoint of the activity's service URL."""

    def __init__(
        self,
        credentials: AppCredentials | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float = 15.0,
    ):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._credentials = credentials or AppCredentials(None, None, self._client)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def send_activity(self, activity: Activity) -> ResourceResponse:
        """Send to the conversation, as a reply when reply_to_id is set."""
        if not activity.service_url:
            raise ConnectorError("Activity has no service_url")
        if activity.conversation is None:
            raise ConnectorError("Activity has no conversation")

        url = (
            f"{activity.service_url.rstrip('/')}/v3/conversations/"
            f"{quote(activity.conversation.id, safe='')}/activities"
        )
        if activity.reply_to_id:
            url += f"/{quote(activity.reply_to_id, safe='')}"

        headers = {}
        token = await self._credentials.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = await self._client.post(
                url, json=activity.to_wire(), headers=headers
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise ConnectorError(f"Failed to send activity to {url}: {e}") from e

        if not response.content:
            return ResourceResponse()
        return ResourceResponse.model_validate(response.json())
