"""Application bootstrap and lifecycle management."""

from datetime import timedelta
from typing import Protocol

import httpx

from .config import Settings
from .connector import (
    AppCredentials,
    BotAdapter,
    ConnectorClient,
    IConnectorClient,
    TurnContext,
)
from .dialogue import NotifyResult, ProactiveNotifier, TurnDispatcher
from .engine import EngineClient, IEngineClient
from .logging_config import get_logger
from .models import Activity
from .state import ConversationReferenceStore, ConversationStateStore
from .storage import IStorage, Storage

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def process_activity(self, activity: Activity) -> TurnContext:
        """Run one inbound activity through the dispatcher."""
        ...

    async def notify(self, message: str | None = None) -> NotifyResult:
        """Send a proactive message to every known conversation."""
        ...


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        settings: Settings | None = None,
        engine_client: IEngineClient | None = None,
        connector_client: IConnectorClient | None = None,
    ):
        self._settings = settings or Settings.from_env()

        # Injected collaborators replace the HTTP clients (tests, alternative engines)
        self._engine: IEngineClient | None = engine_client
        self._connector: IConnectorClient | None = connector_client

        # Components (will be initialized in start())
        self._storage: IStorage | None = None
        self._conversation_state: ConversationStateStore | None = None
        self._references: ConversationReferenceStore | None = None
        self._adapter: BotAdapter | None = None
        self._dispatcher: TurnDispatcher | None = None
        self._notifier: ProactiveNotifier | None = None
        self._owned_engine: EngineClient | None = None
        self._http_client: httpx.AsyncClient | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")
        settings = self._settings

        # 1. Storage (no dependencies)
        self._storage = Storage(settings.db_path)
        await self._storage.init()
        logger.info("Storage initialized")

        # 2. State stores (depend on Storage)
        self._conversation_state = ConversationStateStore(self._storage)
        self._references = ConversationReferenceStore(
            self._storage,
            max_entries=settings.reference_max_entries,
            max_age=timedelta(days=settings.reference_max_age_days),
        )

        # 3. Remote clients (no internal dependencies)
        if self._engine is None:
            engine = EngineClient(
                engine_url=settings.engine_url,
                timeout=settings.engine_timeout,
                connect_retries=settings.engine_connect_retries,
            )
            self._owned_engine = engine
            self._engine = engine
        logger.info("Engine client initialized")

        if self._connector is None:
            # One HTTP client shared by token requests and activity posts
            http_client = httpx.AsyncClient(timeout=15.0)
            self._http_client = http_client
            self._connector = ConnectorClient(
                credentials=AppCredentials(
                    settings.app_id, settings.app_password, http_client
                ),
                client=http_client,
            )

        # 4. Adapter (depends on connector + conversation state)
        self._adapter = BotAdapter(self._connector, self._conversation_state)

        # 5. Dispatcher and notifier (depend on everything above)
        self._dispatcher = TurnDispatcher(
            engine=self._engine,
            conversation_state=self._conversation_state,
            references=self._references,
            sheet_id=settings.sheet_id,
        )
        self._notifier = ProactiveNotifier(self._adapter, self._references)
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
        if self._owned_engine:
            await self._owned_engine.close()
            self._owned_engine = None
        if self._storage:
            await self._storage.close()
            logger.info("Storage closed")

    async def process_activity(self, activity: Activity) -> TurnContext:
        """Run one inbound activity through the dispatcher."""
        return await self.adapter.process_activity(activity, self.dispatcher.on_turn)

    async def notify(self, message: str | None = None) -> NotifyResult:
        """Send a proactive message to every known conversation."""
        if not self._notifier:
            raise RuntimeError("Application not started")
        return await self._notifier.notify_all(message)

    @property
    def storage(self) -> IStorage:
        """Get storage instance."""
        if not self._storage:
            raise RuntimeError("Application not started")
        return self._storage

    @property
    def adapter(self) -> BotAdapter:
        """Get adapter instance."""
        if not self._adapter:
            raise RuntimeError("Application not started")
        return self._adapter

    @property
    def dispatcher(self) -> TurnDispatcher:
        """Get dispatcher instance."""
        if not self._dispatcher:
            raise RuntimeError("Application not started")
        return self._dispatcher

    @property
    def conversation_state(self) -> ConversationStateStore:
        """Get conversation state store."""
        if not self._conversation_state:
            raise RuntimeError("Application not started")
        return self._conversation_state
