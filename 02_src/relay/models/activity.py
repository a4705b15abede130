"""Connector wire schema (Bot Framework activity protocol)."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ActivityTypes(str, Enum):
    """Activity types the relay distinguishes."""

    MESSAGE = "message"
    CONVERSATION_UPDATE = "conversationUpdate"
    EVENT = "event"
    TRACE = "trace"


class ConnectorModel(BaseModel):
    """Base for camelCase connector payloads; unknown fields are preserved."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_wire(self) -> dict[str, Any]:
        """Serialize with connector field names, dropping unset values."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class ChannelAccount(ConnectorModel):
    id: str | None = None
    name: str | None = None
    role: str | None = None


class ConversationAccount(ConnectorModel):
    id: str
    name: str | None = None
    is_group: bool | None = None
    conversation_type: str | None = None
    tenant_id: str | None = None


class Entity(ConnectorModel):
    """Metadata entity; channels send client info (locale, country) here."""

    type: str | None = None
    locale: str | None = None
    country: str | None = None


class ResourceResponse(ConnectorModel):
    id: str | None = None


class ConversationReference(ConnectorModel):
    """Everything needed to address a conversation later, without an inbound activity."""

    activity_id: str | None = None
    user: ChannelAccount | None = None
    bot: ChannelAccount | None = None
    conversation: ConversationAccount
    channel_id: str | None = None
    locale: str | None = None
    service_url: str | None = None

    def get_continuation_activity(self) -> "Activity":
        """Synthesize the event activity used to resume this conversation."""
        return Activity(
            type=ActivityTypes.EVENT.value,
            name="ContinueConversation",
            id=self.activity_id,
            channel_id=self.channel_id,
            service_url=self.service_url,
            conversation=self.conversation,
            recipient=self.bot,
            from_property=self.user,
            locale=self.locale,
        )


class Activity(ConnectorModel):
    """A single inbound or outbound event in a conversation."""

    type: str = ActivityTypes.MESSAGE.value
    id: str | None = None
    timestamp: datetime | None = None
    service_url: str | None = None
    channel_id: str | None = None
    from_property: ChannelAccount | None = Field(default=None, alias="from")
    conversation: ConversationAccount | None = None
    recipient: ChannelAccount | None = None
    reply_to_id: str | None = None
    locale: str | None = None
    text: str | None = None
    attachments: list[dict[str, Any]] | None = None
    suggested_actions: dict[str, Any] | None = None
    entities: list[Entity] | None = None
    members_added: list[ChannelAccount] | None = None
    members_removed: list[ChannelAccount] | None = None
    # Trace and event activities
    name: str | None = None
    label: str | None = None
    value_type: str | None = None
    value: Any = None

    def get_conversation_reference(self) -> ConversationReference:
        """Capture the addressing information of this inbound activity."""
        if self.conversation is None:
            raise ValueError("Activity has no conversation")
        return ConversationReference(
            activity_id=self.id,
            user=self.from_property,
            bot=self.recipient,
            conversation=self.conversation,
            channel_id=self.channel_id,
            locale=self.locale,
            service_url=self.service_url,
        )
