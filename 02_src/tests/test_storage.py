"""Tests for Storage."""

from datetime import datetime, timedelta, timezone

import pytest

from relay.models import ConversationAccount, ConversationReference, ConversationState
from relay.storage import Storage


def reference(conversation_id: str) -> ConversationReference:
    return ConversationReference(
        activity_id="a-1",
        conversation=ConversationAccount(id=conversation_id),
        channel_id="msteams",
        service_url="https://smba.example.com/",
    )


class TestStorageInit:
    """Tests for Storage initialization."""

    async def test_init_creates_tables(self, storage):
        """Test that init creates all tables."""
        async with storage._conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table'"
        ) as cursor:
            tables = [row[0] for row in await cursor.fetchall()]
            assert "conversation_states" in tables
            assert "conversation_references" in tables

    async def test_use_before_init_raises(self):
        st = Storage(":memory:")
        with pytest.raises(RuntimeError, match="not initialized"):
            await st.get_conversation_state("conv-1")


class TestStorageConversationState:
    """Tests for ConversationState storage."""

    async def test_get_missing_state(self, storage):
        assert await storage.get_conversation_state("conv-1") is None

    async def test_save_and_get(self, storage):
        await storage.save_conversation_state(
            ConversationState(conversation_id="conv-1", session_id="s-1")
        )

        state = await storage.get_conversation_state("conv-1")
        assert state == ConversationState(conversation_id="conv-1", session_id="s-1")

    async def test_save_overwrites(self, storage):
        await storage.save_conversation_state(ConversationState("conv-1", "s-1"))
        await storage.save_conversation_state(ConversationState("conv-1", "s-2"))

        state = await storage.get_conversation_state("conv-1")
        assert state.session_id == "s-2"

    async def test_delete(self, storage):
        await storage.save_conversation_state(ConversationState("conv-1", "s-1"))
        await storage.save_conversation_state(ConversationState("conv-2", "s-2"))

        await storage.delete_conversation_state("conv-1")

        assert await storage.get_conversation_state("conv-1") is None
        assert await storage.get_conversation_state("conv-2") is not None


class TestStorageConversationReferences:
    """Tests for ConversationReference storage."""

    async def test_save_and_list_oldest_first(self, storage):
        now = datetime.now(timezone.utc)
        await storage.save_conversation_reference(reference("b"), now)
        await storage.save_conversation_reference(reference("a"), now - timedelta(hours=1))

        refs = await storage.get_conversation_references()

        assert [r.conversation.id for r in refs] == ["a", "b"]
        assert refs[0].service_url == "https://smba.example.com/"

    async def test_save_refreshes_existing(self, storage):
        now = datetime.now(timezone.utc)
        await storage.save_conversation_reference(reference("a"), now - timedelta(hours=2))
        await storage.save_conversation_reference(reference("b"), now - timedelta(hours=1))
        await storage.save_conversation_reference(reference("a"), now)

        refs = await storage.get_conversation_references()
        assert [r.conversation.id for r in refs] == ["b", "a"]

    async def test_delete_before_cutoff(self, storage):
        now = datetime.now(timezone.utc)
        await storage.save_conversation_reference(reference("old"), now - timedelta(days=40))
        await storage.save_conversation_reference(reference("new"), now)

        deleted = await storage.delete_conversation_references_before(
            now - timedelta(days=30)
        )

        assert deleted == 1
        refs = await storage.get_conversation_references()
        assert [r.conversation.id for r in refs] == ["new"]

    async def test_trim_keeps_newest(self, storage):
        now = datetime.now(timezone.utc)
        for i, name in enumerate(["a", "b", "c", "d"]):
            await storage.save_conversation_reference(
                reference(name), now + timedelta(minutes=i)
            )

        deleted = await storage.trim_conversation_references(2)

        assert deleted == 2
        refs = await storage.get_conversation_references()
        assert [r.conversation.id for r in refs] == ["c", "d"]
