"""Messaging API routes."""

from fastapi import APIRouter, HTTPException

from ...app import IApplication
from ...logging_config import get_logger
from ...models import Activity

logger = get_logger(__name__)


def create_messaging_router(app: IApplication) -> APIRouter:
    """Create messaging router."""
    router = APIRouter(prefix="/api", tags=["messaging"])

    @router.post("/messages")
    async def receive_activity(activity: Activity) -> dict:
        """Receive a connector activity and run the turn."""
        try:
            await app.process_activity(activity)
            return {}
        except Exception as e:
            # Only reached when the turn-error policy itself failed
            logger.error(f"Activity {activity.id} could not be processed: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail=str(e))

    return router
