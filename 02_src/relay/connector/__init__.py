"""Connector module."""

from .adapter import TURN_ERROR_MESSAGES, BotAdapter, TurnLogic
from .client import ConnectorClient, ConnectorError, IConnectorClient
from .credentials import AppCredentials
from .turn_context import TurnContext, apply_conversation_reference

__all__ = [
    "AppCredentials",
    "BotAdapter",
    "ConnectorClient",
    "ConnectorError",
    "IConnectorClient",
    "TURN_ERROR_MESSAGES",
    "TurnContext",
    "TurnLogic",
    "apply_conversation_reference",
]
