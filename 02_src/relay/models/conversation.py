"""Per-conversation state and outbound reply records."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass
class ConversationState:
    """Persisted state of one conversation."""

    conversation_id: str
    session_id: str | None = None


class ExtensionKind(str, Enum):
    """How the engine's rich-content parameter was interpreted."""

    NONE = "none"
    SUGGESTED_ACTIONS = "suggested_actions"
    ATTACHMENT = "attachment"
    INVALID = "invalid"


@dataclass
class ReplyExtension:
    """Rich content attached to the last reply chunk."""

    kind: ExtensionKind
    payload: dict[str, Any] | None = None
    error: str | None = None


@dataclass
class ReplyChunk:
    """One outbound message of a multi-part engine answer."""

    text: str
    attachments: list[dict[str, Any]] | None = None
    suggested_actions: dict[str, Any] | None = None


class TurnStatus(str, Enum):
    """Outcome of one engine round trip."""

    REPLIED = "replied"
    ENGINE_FAILED = "engine_failed"


@dataclass
class EngineTurnResult:
    """What a single pipeline run did, for callers and tests."""

    status: TurnStatus
    session_id: str | None = None
    chunks: list[ReplyChunk] | None = None
    error: Exception | None = None
