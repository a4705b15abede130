"""Remote engine request/response records."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class EngineInput:
    """One user input, in the engine's vocabulary. Built fresh per turn."""

    text: str
    channel: str
    sheet_id: str | None
    display_name: str
    given_name: str
    last_name: str
    country_code: str | None = None
    locale: str | None = None
    attachments_json: str | None = None

    def to_params(self) -> dict[str, str]:
        """Engine request parameters, excluding the user text."""
        params = {
            "channel": self.channel,
            "sheetId": self.sheet_id,
            "displayName": self.display_name,
            "lastName": self.last_name,
            "givenName": self.given_name,
            "name": self.given_name,
            "countryCode": self.country_code,
            "locale": self.locale,
            "botframeworkAttachments": self.attachments_json,
        }
        return {key: value for key, value in params.items() if value is not None}


@dataclass
class EngineOutput:
    """Engine answer for one input."""

    session_id: str
    text: str
    parameters: dict[str, Any] = field(default_factory=dict)
    emotion: str | None = None
    link: str | None = None
