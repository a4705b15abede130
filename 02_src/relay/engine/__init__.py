"""Engine module."""

from .client import (
    EngineClient,
    EngineError,
    EngineResponseError,
    EngineTransportError,
    IEngineClient,
)

__all__ = [
    "EngineClient",
    "EngineError",
    "EngineResponseError",
    "EngineTransportError",
    "IEngineClient",
]
