"""
In-process notification relay.

Routers publish an event after every successful content mutation; each
connected SSE client owns a bounded queue that receives a copy. Delivery is
fire-and-forget and at-most-once: publishing never blocks, and a subscriber
whose queue is full simply misses the event.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any, Optional, Set

from pydantic import BaseModel

from lanmic_site.core.logging_config import get_logger
from lanmic_site.core.models.io.misc import RelayEvent
from lanmic_site.server.core.config import settings

logger = get_logger(__name__)


class ResourceEvents:
    """Event names emitted for one content resource."""

    def __init__(self, prefix: str, toggle_suffix: str = "active") -> None:
        self.created = f"{prefix}-created"
        self.updated = f"{prefix}-updated"
        self.deleted = f"{prefix}-deleted"
        self.toggled = f"{prefix}-{toggle_suffix}"


BLOG_EVENTS = ResourceEvents("blog", toggle_suffix="published")
TEAM_EVENTS = ResourceEvents("team-member")
EXECUTIVE_EVENTS = ResourceEvents("executive-leadership")
TESTIMONIAL_EVENTS = ResourceEvents("testimonial")


class Subscription:
    """A subscriber's bounded inbox."""

    def __init__(self, maxsize: int, user_id: Optional[int] = None) -> None:
        self.queue: asyncio.Queue[RelayEvent] = asyncio.Queue(maxsize=maxsize)
        self.user_id = user_id
        self.dropped = 0

    async def get(self) -> RelayEvent:
        return await self.queue.get()


class EventRelay:
    """Fan out events to every live subscription."""

    def __init__(self, queue_size: Optional[int] = None) -> None:
        self.queue_size = queue_size or settings.relay.queue_size
        self._subscriptions: Set[Subscription] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, user_id: Optional[int] = None) -> Subscription:
        subscription = Subscription(self.queue_size, user_id=user_id)
        self._subscriptions.add(subscription)
        logger.info(f"Relay subscriber joined (user={user_id}, total={self.subscriber_count})")
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        self._subscriptions.discard(subscription)
        logger.info(f"Relay subscriber left (total={self.subscriber_count})")

    def publish(self, event_type: str, data: Any = None) -> int:
        """Queue an event for every subscriber.

        Args:
            event_type: Event name such as ``blog-created``
            data: JSON-serializable payload; pydantic models are dumped by alias

        Returns:
            Number of subscribers the event was queued for
        """
        if isinstance(data, BaseModel):
            data = data.model_dump(mode="json", by_alias=True)
        event = RelayEvent(type=event_type, data=data, timestamp=datetime.now(timezone.utc))

        delivered = 0
        for subscription in list(self._subscriptions):
            try:
                subscription.queue.put_nowait(event)
                delivered += 1
            except asyncio.QueueFull:
                subscription.dropped += 1
                logger.warning(f"Relay queue full; dropped '{event_type}' for subscriber (user={subscription.user_id})")
        logger.debug(f"Broadcast '{event_type}' to {delivered} subscriber(s)")
        return delivered


# Global singleton
_relay: Optional[EventRelay] = None


def get_event_relay() -> EventRelay:
    global _relay
    if _relay is None:
        _relay = EventRelay()
    return _relay
