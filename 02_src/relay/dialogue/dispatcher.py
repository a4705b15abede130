"""Turn dispatcher: routes inbound activities through the engine pipeline."""

from ..connector import TurnContext
from ..engine import EngineError, IEngineClient
from ..logging_config import get_logger, turn_fields
from ..models import (
    Activity,
    ActivityTypes,
    EngineTurnResult,
    TurnStatus,
)
from ..state import ConversationStateStore, IConversationReferenceStore
from .chunker import build_reply_chunks
from .normalizer import build_engine_input

logger = get_logger(__name__)

PROACTIVE_GREETING = (
    "Proactive Greeting. Hi! Calling '/api/notify?msg=This is a notification' "
    "will proactively message everyone who has previously messaged this bot."
)


class TurnDispatcher:
    """Relays conversation turns to the remote engine."""

    def __init__(
        self,
        engine: IEngineClient,
        conversation_state: ConversationStateStore,
        references: IConversationReferenceStore,
        sheet_id: str | None = None,
    ):
        self._engine = engine
        self._conversation_state = conversation_state
        self._references = references
        self._sheet_id = sheet_id

    async def on_turn(self, context: TurnContext) -> None:
        """Dispatch by activity type, then save state changes."""
        activity = context.activity
        await self._references.add(activity.get_conversation_reference())

        if activity.type == ActivityTypes.MESSAGE:
            await self.handle_message(context)
        elif activity.type == ActivityTypes.CONVERSATION_UPDATE:
            await self._on_members_added(context)
        else:
            logger.info(f"[{activity.type} event detected]")

        await self._conversation_state.save_changes(context)

    async def _on_members_added(self, context: TurnContext) -> None:
        activity = context.activity
        new_members = [
            member
            for member in activity.members_added or []
            if member.id != activity.recipient.id
        ]
        if not new_members:
            return

        logger.info(f"{len(new_members)} member(s) added to {activity.conversation.id}")
        await context.send_activity(PROACTIVE_GREETING)

        # Empty input makes the engine answer with its greeting
        for _ in new_members:
            await self.handle_message(context)

    async def handle_message(self, context: TurnContext) -> EngineTurnResult:
        """Send the activity to the engine and relay its answer as chunks."""
        activity = context.activity
        engine_input = build_engine_input(activity, self._sheet_id)
        log_fields = turn_fields(activity)
        logger.info(
            f"Got message '{engine_input.text}' from channel {activity.channel_id}",
            extra=log_fields,
        )

        session_id = await self._conversation_state.get_session_id(context)

        try:
            output = await self._engine.send_input(session_id, engine_input)
        except EngineError as e:
            logger.error(
                f"Failed when sending input to engine: {e}",
                exc_info=True,
                extra=log_fields,
            )
            return EngineTurnResult(
                status=TurnStatus.ENGINE_FAILED, session_id=session_id, error=e
            )

        logger.info(
            f"Got engine response '{output.text}' for session {output.session_id}",
            extra=turn_fields(activity, output.session_id),
        )
        await self._conversation_state.set_session_id(context, output.session_id)

        chunks = build_reply_chunks(output.text, output.parameters)
        for chunk in chunks:
            await context.send_activity(
                Activity(
                    type=ActivityTypes.MESSAGE.value,
                    text=chunk.text,
                    attachments=chunk.attachments,
                    suggested_actions=chunk.suggested_actions,
                )
            )

        return EngineTurnResult(
            status=TurnStatus.REPLIED, session_id=output.session_id, chunks=chunks
        )
