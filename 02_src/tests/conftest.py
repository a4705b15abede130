"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from relay.connector import ConnectorError  # noqa: E402
from relay.models import Activity, EngineOutput, ResourceResponse  # noqa: E402


class RecordingConnector:
    """Connector double that records outbound activities."""

    def __init__(self):
        self.sent: list[Activity] = []
        self.unreachable: set[str] = set()

    async def send_activity(self, activity: Activity) -> ResourceResponse:
        if activity.conversation and activity.conversation.id in self.unreachable:
            raise ConnectorError(f"conversation {activity.conversation.id} unreachable")
        self.sent.append(activity)
        return ResourceResponse(id=f"sent-{len(self.sent)}")

    @property
    def texts(self) -> list[str | None]:
        return [a.text for a in self.sent]


def build_activity(
    type: str = "message",
    text: str | None = "Hello",
    conversation_id: str = "conv-1",
    from_name: str | None = "John Smith",
    channel_id: str = "msteams",
    entities: list[dict] | None = None,
    members_added: list[dict] | None = None,
    attachments: list[dict] | None = None,
    recipient: dict | None = None,
    with_entities: bool = True,
) -> Activity:
    """Build an inbound activity the way the connector would post it."""
    payload: dict[str, Any] = {
        "type": type,
        "id": "activity-1",
        "serviceUrl": "https://smba.example.com/emea/",
        "channelId": channel_id,
        "from": {"id": "user-1", "name": from_name},
        "conversation": {"id": conversation_id},
        "recipient": recipient if recipient is not None else {"id": "bot-1", "name": "Bot"},
        "text": text,
    }
    if with_entities:
        payload["entities"] = entities or [
            {"type": "clientInfo", "locale": "en-US", "country": "US"}
        ]
    if members_added is not None:
        payload["membersAdded"] = members_added
    if attachments is not None:
        payload["attachments"] = attachments
    return Activity.model_validate(payload)


@pytest.fixture
def make_activity():
    """Factory for inbound activities."""
    return build_activity


@pytest_asyncio.fixture
async def storage():
    """Create in-memory storage for testing."""
    from relay.storage import Storage

    st = Storage(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def conversation_state(storage):
    """Create ConversationStateStore with storage."""
    from relay.state import ConversationStateStore

    return ConversationStateStore(storage)


@pytest.fixture
def references(storage):
    """Create ConversationReferenceStore with storage."""
    from relay.state import ConversationReferenceStore

    return ConversationReferenceStore(storage)


@pytest.fixture
def mock_engine():
    """Create mock engine client."""
    engine = Mock()
    engine.send_input = AsyncMock(
        return_value=EngineOutput(session_id="session-1", text="Test response")
    )
    return engine


@pytest.fixture
def connector():
    """Create recording connector client."""
    return RecordingConnector()


@pytest.fixture
def adapter(connector, conversation_state):
    """Create BotAdapter with recording connector."""
    from relay.connector import BotAdapter

    return BotAdapter(connector, conversation_state)


@pytest.fixture
def dispatcher(mock_engine, conversation_state, references):
    """Create TurnDispatcher for testing."""
    from relay.dialogue import TurnDispatcher

    return TurnDispatcher(
        engine=mock_engine,
        conversation_state=conversation_state,
        references=references,
        sheet_id="sheet-1",
    )


@pytest_asyncio.fixture
async def app(mock_engine, connector):
    """Create and start an Application with in-memory storage."""
    from relay.app import Application
    from relay.config import Settings

    application = Application(
        Settings(engine_url="http://engine.test/", sheet_id="sheet-1", db_path=":memory:"),
        engine_client=mock_engine,
        connector_client=connector,
    )
    await application.start()
    yield application
    await application.stop()
