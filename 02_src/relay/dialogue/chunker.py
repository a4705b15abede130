"""Engine answer splitting and rich-content resolution."""

import json
from typing import Any

from ..logging_config import get_logger
from ..models import ExtensionKind, ReplyChunk, ReplyExtension

logger = get_logger(__name__)

CHUNK_DELIMITER = "||"
# Output parameter carrying a serialized card, attachment or suggested actions
EXTENSION_PARAMETER = "msbotframework"


def split_reply(text: str | None) -> list[str]:
    """Split an engine answer into trimmed, non-empty chunks.

    Always returns at least one element: an answer with no content yields [""].
    """
    segments = [segment.strip() for segment in (text or "").split(CHUNK_DELIMITER)]
    joined = CHUNK_DELIMITER.join(segment for segment in segments if segment)
    return joined.strip().split(CHUNK_DELIMITER)


def resolve_extension(raw: Any) -> ReplyExtension:
    """Interpret the engine's rich-content parameter."""
    if raw is None or raw == "":
        return ReplyExtension(kind=ExtensionKind.NONE)

    if isinstance(raw, dict):
        payload = raw
    else:
        try:
            payload = json.loads(raw)
        except (TypeError, ValueError, RecursionError) as e:
            logger.error(f"Failed when parsing attachment JSON: {e}")
            return ReplyExtension(kind=ExtensionKind.INVALID, error=str(e))

    if not isinstance(payload, dict):
        logger.error(
            f"Attachment JSON is a {type(payload).__name__}, expected an object"
        )
        return ReplyExtension(
            kind=ExtensionKind.INVALID, error="extension is not a JSON object"
        )

    if "actions" in payload:
        return ReplyExtension(kind=ExtensionKind.SUGGESTED_ACTIONS, payload=payload)
    return ReplyExtension(kind=ExtensionKind.ATTACHMENT, payload=payload)


def build_reply_chunks(
    text: str | None, parameters: dict[str, Any] | None = None
) -> list[ReplyChunk]:
    """Build outbound chunks; only the last one carries rich content."""
    chunks = [ReplyChunk(text=part) for part in split_reply(text)]

    extension = resolve_extension((parameters or {}).get(EXTENSION_PARAMETER))
    last = chunks[-1]
    if extension.kind == ExtensionKind.SUGGESTED_ACTIONS:
        last.suggested_actions = extension.payload
    elif extension.kind == ExtensionKind.ATTACHMENT:
        last.attachments = [extension.payload]

    return chunks
