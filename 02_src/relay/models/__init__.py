"""Core data models for the engine relay."""

from .activity import (
    Activity,
    ActivityTypes,
    ChannelAccount,
    ConversationAccount,
    ConversationReference,
    Entity,
    ResourceResponse,
)
from .conversation import (
    ConversationState,
    EngineTurnResult,
    ExtensionKind,
    ReplyChunk,
    ReplyExtension,
    TurnStatus,
)
from .engine import EngineInput, EngineOutput

__all__ = [
    # Connector wire schema
    "Activity",
    "ActivityTypes",
    "ChannelAccount",
    "ConversationAccount",
    "ConversationReference",
    "Entity",
    "ResourceResponse",
    # Conversation
    "ConversationState",
    "EngineTurnResult",
    "ExtensionKind",
    "ReplyChunk",
    "ReplyExtension",
    "TurnStatus",
    # Engine
    "EngineInput",
    "EngineOutput",
]
