"""Per-conversation session store with turn-scoped caching."""

from dataclasses import dataclass
from typing import Any, Protocol

from ..logging_config import get_logger
from ..models import Activity, ConversationState
from ..storage import IStorage

logger = get_logger(__name__)


class ITurnScope(Protocol):
    """The parts of a turn context the state store relies on."""

    activity: Activity
    turn_state: dict[str, Any]


@dataclass
class _CachedState:
    state: ConversationState
    dirty: bool = False


class ConversationStateStore:
    """Loads conversation state once per turn and writes it back at turn end.

    Mutations only touch the cached copy until save_changes() is called.
    """

    CACHE_KEY = "relay.conversation_state"

    def __init__(self, storage: IStorage):
        self._storage = storage

    @staticmethod
    def _conversation_id(context: ITurnScope) -> str:
        conversation = context.activity.conversation
        if conversation is None or not conversation.id:
            raise ValueError("Activity is missing conversation.id")
        return conversation.id

    async def load(self, context: ITurnScope) -> ConversationState:
        """Return the turn's cached state, reading storage on first access."""
        cached = context.turn_state.get(self.CACHE_KEY)
        if cached is None:
            conversation_id = self._conversation_id(context)
            state = await self._storage.get_conversation_state(conversation_id)
            if state is None:
                state = ConversationState(conversation_id=conversation_id)
            cached = _CachedState(state=state)
            context.turn_state[self.CACHE_KEY] = cached
        return cached.state

    async def get_session_id(self, context: ITurnScope) -> str | None:
        state = await self.load(context)
        return state.session_id

    async def set_session_id(self, context: ITurnScope, session_id: str) -> None:
        state = await self.load(context)
        if state.session_id != session_id:
            state.session_id = session_id
            context.turn_state[self.CACHE_KEY].dirty = True

    async def save_changes(self, context: ITurnScope) -> None:
        """Persist the cached state if this turn changed it."""
        cached = context.turn_state.get(self.CACHE_KEY)
        if cached is None or not cached.dirty:
            return
        await self._storage.save_conversation_state(cached.state)
        cached.dirty = False

    async def delete(self, context: ITurnScope) -> None:
        """Drop all persisted state for the turn's conversation."""
        conversation_id = self._conversation_id(context)
        context.turn_state.pop(self.CACHE_KEY, None)
        await self._storage.delete_conversation_state(conversation_id)
        logger.info(f"Conversation state cleared for {conversation_id}")
