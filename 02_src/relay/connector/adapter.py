"""Connector adapter: runs turns and applies the turn-error policy."""

from typing import Awaitable, Callable

from ..logging_config import get_logger, turn_fields
from ..models import Activity, ConversationReference, ResourceResponse
from ..state import ConversationStateStore
from .client import IConnectorClient
from .turn_context import TurnContext

logger = get_logger(__name__)


TurnLogic = Callable[[TurnContext], Awaitable[None]]

TURN_ERROR_MESSAGES = (
    "The bot encountered an error or bug.",
    "To continue to run this bot, please fix the bot source code.",
)


class BotAdapter:
    """Bridges inbound activities to turn logic and outbound activities to the connector."""

    def __init__(
        self,
        connector: IConnectorClient,
        conversation_state: ConversationStateStore,
    ):
        self._connector = connector
        self._conversation_state = conversation_state

    async def send_activity(
        self, context: TurnContext, activity: Activity
    ) -> ResourceResponse:
        """Deliver one outgoing activity."""
        return await self._connector.send_activity(activity)

    async def process_activity(self, activity: Activity, logic: TurnLogic) -> TurnContext:
        """Run logic for an inbound activity. Uncaught errors reset the conversation."""
        context = TurnContext(self, activity)
        try:
            await logic(context)
        except Exception as error:
            await self.on_turn_error(context, error)
        return context

    async def continue_conversation(
        self, reference: ConversationReference, logic: TurnLogic
    ) -> TurnContext:
        """Run logic in an existing conversation without an inbound message."""
        context = TurnContext(self, reference.get_continuation_activity())
        await logic(context)
        return context

    async def on_turn_error(self, context: TurnContext, error: Exception) -> None:
        """Apologize to the user and wipe the conversation's persisted state."""
        logger.error(
            f"[on_turn_error] unhandled error: {error}",
            exc_info=error,
            extra=turn_fields(context.activity),
        )

        try:
            await context.send_trace_activity(
                "OnTurnError Trace",
                str(error),
                "https://www.botframework.com/schemas/error",
                "TurnError",
            )
            for text in TURN_ERROR_MESSAGES:
                await context.send_activity(text)
        finally:
            await self._conversation_state.delete(context)
