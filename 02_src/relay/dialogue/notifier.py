"""Proactive notification to every known conversation."""

from dataclasses import dataclass, field

from ..connector import BotAdapter, TurnContext
from ..logging_config import get_logger
from ..state import IConversationReferenceStore

logger = get_logger(__name__)

NOTIFICATION_MESSAGE = (
    "This is a proactive message... If you eat something & nobody see you eat it, "
    "it has no calories."
)


@dataclass
class NotifyResult:
    """Delivery summary of one broadcast."""

    sent: int = 0
    failed: list[str] = field(default_factory=list)


class ProactiveNotifier:
    """Sends one message into each stored conversation."""

    def __init__(self, adapter: BotAdapter, references: IConversationReferenceStore):
        self._adapter = adapter
        self._references = references

    async def notify_all(self, message: str | None = None) -> NotifyResult:
        """Broadcast message. A failing conversation does not stop the others."""
        text = message or NOTIFICATION_MESSAGE
        result = NotifyResult()

        async def send(context: TurnContext) -> None:
            await context.send_activity(text)

        for reference in await self._references.list_all():
            conversation_id = reference.conversation.id
            try:
                await self._adapter.continue_conversation(reference, send)
                result.sent += 1
            except Exception as e:
                logger.error(
                    f"Proactive message to {conversation_id} failed: {e}",
                    exc_info=True,
                    extra={"conversation_id": conversation_id},
                )
                result.failed.append(conversation_id)

        logger.info(
            f"Proactive notification sent to {result.sent} conversation(s), "
            f"{len(result.failed)} failed"
        )
        return result
