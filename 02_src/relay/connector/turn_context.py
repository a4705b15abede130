"""Turn context: the inbound activity plus a way to answer it."""

from typing import TYPE_CHECKING, Any

from ..models import (
    Activity,
    ActivityTypes,
    ConversationReference,
    ResourceResponse,
)

if TYPE_CHECKING:
    from .adapter import BotAdapter

EMULATOR_CHANNEL = "emulator"


def apply_conversation_reference(
    activity: Activity, reference: ConversationReference
) -> Activity:
    """Address an outgoing activity to the referenced conversation."""
    update: dict[str, Any] = {
        "channel_id": reference.channel_id,
        "service_url": reference.service_url,
        "conversation": reference.conversation,
        "from_property": reference.bot,
        "recipient": reference.user,
        "reply_to_id": reference.activity_id,
    }
    if activity.locale is None and reference.locale:
        update["locale"] = reference.locale
    return activity.model_copy(update=update)


class TurnContext:
    """State and send surface for processing one inbound activity."""

    def __init__(self, adapter: "BotAdapter", activity: Activity):
        self.adapter = adapter
        self.activity = activity
        # Per-turn cache shared by state stores
        self.turn_state: dict[str, Any] = {}
        self.sent_activities: list[Activity] = []

    @property
    def responded(self) -> bool:
        return bool(self.sent_activities)

    async def send_activity(
        self, activity_or_text: Activity | str
    ) -> ResourceResponse | None:
        """Send a reply into the turn's conversation."""
        if isinstance(activity_or_text, str):
            activity = Activity(type=ActivityTypes.MESSAGE.value, text=activity_or_text)
        else:
            activity = activity_or_text

        outgoing = apply_conversation_reference(
            activity, self.activity.get_conversation_reference()
        )
        response = await self.adapter.send_activity(self, outgoing)
        self.sent_activities.append(outgoing)
        return response

    async def send_trace_activity(
        self,
        name: str,
        value: Any = None,
        value_type: str | None = None,
        label: str | None = None,
    ) -> ResourceResponse | None:
        """Send a diagnostic trace. Only the emulator channel receives traces."""
        if self.activity.channel_id != EMULATOR_CHANNEL:
            return None
        trace = Activity(
            type=ActivityTypes.TRACE.value,
            name=name,
            value=value,
            value_type=value_type,
            label=label,
        )
        return await self.send_activity(trace)
