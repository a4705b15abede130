"""Inbound activity to engine input conversion."""

import json
from dataclasses import dataclass

from ..logging_config import get_logger
from ..models import Activity, EngineInput

logger = get_logger(__name__)

CHANNEL_PREFIX = "botframework-"


@dataclass
class ClientInfo:
    """Country and locale reported by the channel, when present."""

    country: str | None = None
    locale: str | None = None


def split_name(full_name: str) -> tuple[str, str]:
    """Return (given_name, last_name) derived from a display name.

    last_name is not a surname: it is the first len(given_name) + 1
    characters of the full name (given name plus the separating space).
    """
    given_name = full_name.split(" ")[0]
    if len(full_name) > len(given_name):
        cut = len(given_name) + 1
    else:
        cut = len(given_name)
    return given_name, full_name[:cut]


def read_client_info(activity: Activity) -> ClientInfo:
    """Read country and locale from the first entity of the activity."""
    if not activity.entities:
        logger.warning(
            f"Activity {activity.id} has no entities, country and locale unknown"
        )
        return ClientInfo()
    entity = activity.entities[0]
    return ClientInfo(country=entity.country, locale=entity.locale)


def build_engine_input(activity: Activity, sheet_id: str | None) -> EngineInput:
    """Translate a platform activity into the engine's input schema."""
    sender = activity.from_property
    full_name = (sender.name if sender else None) or ""
    given_name, last_name = split_name(full_name)
    client_info = read_client_info(activity)

    attachments_json = None
    if activity.attachments is not None:
        attachments_json = json.dumps(
            activity.attachments, separators=(",", ":"), ensure_ascii=False
        )

    return EngineInput(
        text=activity.text or "",
        channel=f"{CHANNEL_PREFIX}{activity.channel_id}",
        sheet_id=sheet_id,
        display_name=full_name,
        given_name=given_name,
        last_name=last_name,
        country_code=client_info.country,
        locale=client_info.locale,
        attachments_json=attachments_json,
    )
