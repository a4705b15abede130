"""Proactive notification routes."""

from fastapi import APIRouter, Query
from fastapi.responses import HTMLResponse

from ...app import IApplication

NOTIFY_ACK_HTML = (
    "<html><body><h1>Proactive messages have been sent.</h1></body></html>"
)


def create_notify_router(app: IApplication) -> APIRouter:
    """Create notify router."""
    router = APIRouter(prefix="/api", tags=["notify"])

    @router.get("/notify", response_class=HTMLResponse)
    async def notify(
        msg: str | None = Query(None, description="Override the notification text"),
    ) -> HTMLResponse:
        """Message every known conversation."""
        await app.notify(msg)
        return HTMLResponse(content=NOTIFY_ACK_HTML, status_code=200)

    return router
