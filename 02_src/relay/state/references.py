"""Conversation reference storage for proactive messaging."""

from datetime import datetime, timedelta, timezone
from typing import Protocol

from ..logging_config import get_logger
from ..models import ConversationReference
from ..storage import IStorage

logger = get_logger(__name__)


class IConversationReferenceStore(Protocol):
    """Known conversations that can receive proactive messages."""

    async def add(self, reference: ConversationReference) -> None:
        """Insert or refresh a reference."""
        ...

    async def list_all(self) -> list[ConversationReference]:
        """Return all live references."""
        ...


class ConversationReferenceStore:
    """Storage-backed reference map with age and size limits."""

    def __init__(
        self,
        storage: IStorage,
        max_entries: int | None = None,
        max_age: timedelta | None = None,
    ):
        self._storage = storage
        self._max_entries = max_entries
        self._max_age = max_age

    async def add(self, reference: ConversationReference) -> None:
        """Insert or refresh a reference, evicting the oldest beyond max_entries."""
        await self._storage.save_conversation_reference(
            reference, datetime.now(timezone.utc)
        )
        if self._max_entries is not None:
            evicted = await self._storage.trim_conversation_references(
                self._max_entries
            )
            if evicted:
                logger.info(f"Evicted {evicted} conversation reference(s) over capacity")

    async def list_all(self) -> list[ConversationReference]:
        """Return all references refreshed within max_age."""
        await self.prune()
        return await self._storage.get_conversation_references()

    async def prune(self) -> int:
        """Delete expired references. Return count deleted."""
        if self._max_age is None:
            return 0
        cutoff = datetime.now(timezone.utc) - self._max_age
        deleted = await self._storage.delete_conversation_references_before(cutoff)
        if deleted:
            logger.info(f"Pruned {deleted} expired conversation reference(s)")
        return deleted
