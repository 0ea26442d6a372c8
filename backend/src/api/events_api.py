# backend/src/api/events_api.py

from typing import AsyncIterator, Awaitable, Callable

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from backend.src.api.dependencies import get_notifier
from backend.src.core.config import EVENT_KEEPALIVE_SECONDS
from backend.src.core.logger import get_logger
from backend.src.core.notifier import FileLifecycleNotifier, Subscription

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["events"])


async def event_stream(
    subscription: Subscription,
    is_disconnected: Callable[[], Awaitable[bool]],
    keepalive_seconds: float = EVENT_KEEPALIVE_SECONDS,
) -> AsyncIterator[str]:
    """
    Yield server-sent-events messages for one subscriber until it disconnects.

    The subscription is released when the generator finishes, whether the
    client went away or the response was cancelled.
    """
    try:
        yield ": connected\n\n"
        while not await is_disconnected():
            event = await subscription.get(timeout=keepalive_seconds)
            if event is None:
                yield ": keepalive\n\n"
                continue
            yield event.to_sse()
    finally:
        subscription.release()
        logger.info("Event stream closed")


@router.get("/events")
async def events(request: Request, notifier: FileLifecycleNotifier = Depends(get_notifier)):
    """Long-lived stream of fileUploaded / fileDeleted events."""
    subscription = notifier.subscribe()
    logger.info(f"Event stream opened ({notifier.subscriber_count} listening)")
    return StreamingResponse(
        event_stream(subscription, request.is_disconnected),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
