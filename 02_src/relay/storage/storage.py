"""SQLite storage implementation."""

import asyncio
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

import aiosqlite

from ..config import resolve_db_path
from ..models import ConversationReference, ConversationState


class IStorage(Protocol):
    """Persistent storage for conversation data (SQLite)."""

    async def init(self) -> None:
        """Initialize database and create tables."""
        ...

    async def close(self) -> None:
        """Close database connection."""
        ...

    # ConversationState
    async def save_conversation_state(self, state: ConversationState) -> None:
        """Save conversation state."""
        ...

    async def get_conversation_state(
        self, conversation_id: str
    ) -> ConversationState | None:
        """Get conversation state."""
        ...

    async def delete_conversation_state(self, conversation_id: str) -> None:
        """Delete conversation state."""
        ...

    # ConversationReferences
    async def save_conversation_reference(
        self, reference: ConversationReference, updated_at: datetime
    ) -> None:
        """Insert or refresh a conversation reference."""
        ...

    async def get_conversation_references(self) -> list[ConversationReference]:
        """Get all conversation references (oldest first)."""
        ...

    async def delete_conversation_references_before(self, cutoff: datetime) -> int:
        """Delete references not refreshed since cutoff. Return count deleted."""
        ...

    async def trim_conversation_references(self, max_entries: int) -> int:
        """Keep only the newest max_entries references. Return count deleted."""
        ...


class Storage:
    """SQLite storage implementation."""

    def __init__(self, db_path: str | Path | None = None):
        if db_path is None:
            self._db_path = resolve_db_path()
        else:
            self._db_path = resolve_db_path(db_path)
        self._conn: aiosqlite.Connection | None = None
        # Serializes execute+commit pairs across concurrent turns
        self._lock = asyncio.Lock()

    async def init(self) -> None:
        """Initialize database and create tables."""
        self._conn = await aiosqlite.connect(self._db_path)

        schema_path = Path(__file__).parent / "schema.sql"
        with open(schema_path, "r", encoding="utf-8") as f:
            schema_sql = f.read()
        await self._conn.executescript(schema_sql)
        await self._conn.commit()

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    def _require_conn(self) -> aiosqlite.Connection:
        if not self._conn:
            raise RuntimeError("Storage not initialized")
        return self._conn

    # ConversationState
    async def save_conversation_state(self, state: ConversationState) -> None:
        """Save conversation state."""
        conn = self._require_conn()

        async with self._lock:
            await conn.execute(
                """
                INSERT OR REPLACE INTO conversation_states
                (conversation_id, session_id, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                """,
                (state.conversation_id, state.session_id),
            )
            await conn.commit()

    async def get_conversation_state(
        self, conversation_id: str
    ) -> ConversationState | None:
        """Get conversation state."""
        conn = self._require_conn()

        cursor = await conn.execute(
            """
            SELECT conversation_id, session_id
            FROM conversation_states
            WHERE conversation_id = ?
            """,
            (conversation_id,),
        )
        row = await cursor.fetchone()

        if not row:
            return None

        return ConversationState(conversation_id=row[0], session_id=row[1])

    async def delete_conversation_state(self, conversation_id: str) -> None:
        """Delete conversation state."""
        conn = self._require_conn()

        async with self._lock:
            await conn.execute(
                "DELETE FROM conversation_states WHERE conversation_id = ?",
                (conversation_id,),
            )
            await conn.commit()

    # ConversationReferences
    async def save_conversation_reference(
        self, reference: ConversationReference, updated_at: datetime
    ) -> None:
        """Insert or refresh a conversation reference."""
        conn = self._require_conn()

        async with self._lock:
            await conn.execute(
                """
                INSERT OR REPLACE INTO conversation_references
                (conversation_id, reference, updated_at)
                VALUES (?, ?, ?)
                """,
                (
                    reference.conversation.id,
                    reference.model_dump_json(by_alias=True, exclude_none=True),
                    _to_utc_iso(updated_at),
                ),
            )
            await conn.commit()

    async def get_conversation_references(self) -> list[ConversationReference]:
        """Get all conversation references (oldest first)."""
        conn = self._require_conn()

        cursor = await conn.execute(
            """
            SELECT reference
            FROM conversation_references
            ORDER BY updated_at ASC
            """
        )
        rows = await cursor.fetchall()

        return [ConversationReference.model_validate_json(row[0]) for row in rows]

    async def delete_conversation_references_before(self, cutoff: datetime) -> int:
        """Delete references not refreshed since cutoff. Return count deleted."""
        conn = self._require_conn()

        async with self._lock:
            cursor = await conn.execute(
                "DELETE FROM conversation_references WHERE updated_at < ?",
                (_to_utc_iso(cutoff),),
            )
            await conn.commit()
            return cursor.rowcount

    async def trim_conversation_references(self, max_entries: int) -> int:
        """Keep only the newest max_entries references. Return count deleted."""
        conn = self._require_conn()

        async with self._lock:
            cursor = await conn.execute(
                """
                DELETE FROM conversation_references
                WHERE conversation_id NOT IN (
                    SELECT conversation_id
                    FROM conversation_references
                    ORDER BY updated_at DESC
                    LIMIT ?
                )
                """,
                (max_entries,),
            )
            await conn.commit()
            return cursor.rowcount


def _to_utc_iso(value: datetime) -> str:
    # Naive datetimes are treated as UTC so string ordering stays chronological
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")
