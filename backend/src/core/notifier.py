"""
FileLifecycleNotifier - in-process publish/subscribe for file lifecycle events.

One notifier instance is created per application and handed to the routes
that need it. Every subscriber owns a bounded asyncio queue; ``publish`` puts
the event on each registered queue in registration order and returns
immediately. Nothing is buffered for subscribers that register later.

Usage:
    with notifier.subscribe() as subscription:
        event = await subscription.get(timeout=15)
"""

import asyncio
from typing import List, Optional, Union

from backend.src.core.config import SUBSCRIBER_QUEUE_SIZE
from backend.src.core.logger import get_logger
from backend.src.core.models import FileLifecycleEvent, LifecycleEventKind

logger = get_logger(__name__)


class Subscription:
    """Handle for one registered listener. Release it to unregister."""

    def __init__(self, notifier: "FileLifecycleNotifier", maxsize: int):
        self._notifier = notifier
        self.queue: "asyncio.Queue[FileLifecycleEvent]" = asyncio.Queue(maxsize=maxsize)
        self.active = True

    def deliver(self, event: FileLifecycleEvent) -> bool:
        """Queue an event for this subscriber. Returns False if it was dropped."""
        if not self.active:
            return False
        try:
            self.queue.put_nowait(event)
        except asyncio.QueueFull:
            logger.warning(f"Subscriber queue full, dropping {event.kind.value} event for '{event.file_identity}'")
            return False
        return True

    async def get(self, timeout: Optional[float] = None) -> Optional[FileLifecycleEvent]:
        """Wait for the next event; None if ``timeout`` seconds pass first."""
        try:
            return await asyncio.wait_for(self.queue.get(), timeout)
        except asyncio.TimeoutError:
            return None

    def release(self) -> None:
        if self.active:
            self.active = False
            self._notifier._unregister(self)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


class FileLifecycleNotifier:
    """Fan-out of uploaded/deleted events to the currently connected listeners."""

    def __init__(self, queue_size: int = SUBSCRIBER_QUEUE_SIZE):
        self._queue_size = queue_size
        self._subscribers: List[Subscription] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self) -> Subscription:
        subscription = Subscription(self, self._queue_size)
        self._subscribers.append(subscription)
        logger.debug(f"Subscriber registered ({self.subscriber_count} active)")
        return subscription

    def _unregister(self, subscription: Subscription) -> None:
        try:
            self._subscribers.remove(subscription)
        except ValueError:
            return
        logger.debug(f"Subscriber released ({self.subscriber_count} active)")

    def publish(self, kind: Union[LifecycleEventKind, str], file_identity: str) -> int:
        """
        Deliver an event to every registered subscriber, in registration order.

        Never raises because of a subscriber: a closed or overflowing one
        simply misses the event.

        Returns:
            Number of subscribers that received the event.
        """
        event = FileLifecycleEvent(LifecycleEventKind(kind), file_identity)
        delivered = 0
        # Iterate over a snapshot; a subscriber may release during delivery
        for subscription in list(self._subscribers):
            try:
                if subscription.deliver(event):
                    delivered += 1
            except RuntimeError as e:
                # The subscriber's event loop is already closed
                logger.warning(f"Dropping {event.kind.value} event for a closed subscriber: {e}")
                subscription.release()
        logger.info(f"Published {event.kind.value} '{file_identity}' to {delivered} subscriber(s)")
        return delivered
