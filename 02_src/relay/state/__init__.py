"""Conversation state module."""

from .conversation_state import ConversationStateStore
from .references import ConversationReferenceStore, IConversationReferenceStore

__all__ = [
    "ConversationStateStore",
    "ConversationReferenceStore",
    "IConversationReferenceStore",
]
