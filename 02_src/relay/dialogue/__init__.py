"""Dialogue module."""

from .chunker import build_reply_chunks, resolve_extension, split_reply
from .dispatcher import PROACTIVE_GREETING, TurnDispatcher
from .normalizer import build_engine_input, split_name
from .notifier import NOTIFICATION_MESSAGE, NotifyResult, ProactiveNotifier

__all__ = [
    "NOTIFICATION_MESSAGE",
    "NotifyResult",
    "PROACTIVE_GREETING",
    "ProactiveNotifier",
    "TurnDispatcher",
    "build_engine_input",
    "build_reply_chunks",
    "resolve_extension",
    "split_name",
    "split_reply",
]
