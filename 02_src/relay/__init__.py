"""Engine relay: chat connector activities to a remote dialog engine and back."""

from .app import Application, IApplication
from .config import Settings
from .connector import BotAdapter, ConnectorClient, IConnectorClient, TurnContext
from .dialogue import ProactiveNotifier, TurnDispatcher
from .engine import EngineClient, EngineError, IEngineClient
from .models import (
    Activity,
    ActivityTypes,
    ConversationReference,
    ConversationState,
    EngineInput,
    EngineOutput,
    ReplyChunk,
)
from .state import ConversationReferenceStore, ConversationStateStore
from .storage import IStorage, Storage

__all__ = [
    # Application
    "Application",
    "IApplication",
    "Settings",
    # Models
    "Activity",
    "ActivityTypes",
    "ConversationReference",
    "ConversationState",
    "EngineInput",
    "EngineOutput",
    "ReplyChunk",
    # Components
    "IStorage",
    "Storage",
    "ConversationStateStore",
    "ConversationReferenceStore",
    "IEngineClient",
    "EngineClient",
    "EngineError",
    "IConnectorClient",
    "ConnectorClient",
    "BotAdapter",
    "TurnContext",
    "TurnDispatcher",
    "ProactiveNotifier",
]
