"""
Notification Relay Endpoint.

Server-Sent Events stream of content mutations. Clients may connect
anonymously; a valid access token only marks the connection as
authenticated.
"""

import asyncio
import json
from typing import Any, AsyncIterator, Dict

from fastapi import APIRouter, Request
from sse_starlette.sse import EventSourceResponse

from lanmic_site.core.logging_config import get_logger
from lanmic_site.server.core.config import settings
from lanmic_site.server.services.deps import OptionalUser, RelayDep
from lanmic_site.server.services.relay import EventRelay, Subscription

logger = get_logger(__name__)

router = APIRouter()

# Seconds between disconnect checks while the inbox is idle
POLL_INTERVAL_SECONDS = 1.0


async def relay_event_stream(
    request: Request,
    relay: EventRelay,
    subscription: Subscription,
    authenticated: bool,
    poll_interval: float = POLL_INTERVAL_SECONDS,
) -> AsyncIterator[Dict[str, Any]]:
    """Yield SSE messages for one subscription until the client goes away.

    The subscription is always removed from the relay when the generator
    finishes, whether by disconnect, cancellation or error.
    """
    try:
        yield {
            "event": "connected",
            "data": json.dumps({"message": "Connected to notification relay", "authenticated": authenticated}),
        }
        while True:
            if await request.is_disconnected():
                logger.info(f"Relay client disconnected (user={subscription.user_id})")
                break
            try:
                event = await asyncio.wait_for(subscription.get(), timeout=poll_interval)
            except asyncio.TimeoutError:
                continue
            yield {"event": event.type, "data": event.model_dump_json()}
    finally:
        relay.unsubscribe(subscription)


@router.get(
    "",
    summary="Subscribe To Notifications",
    description=(
        "Open a Server-Sent Events stream of content changes. Authentication is optional "
        "(bearer header, cookie or `?token=`). Events are delivered at most once."
    ),
)
async def subscribe_events(request: Request, relay: RelayDep, user: OptionalUser) -> EventSourceResponse:
    subscription = relay.subscribe(user_id=user.id if user else None)
    return EventSourceResponse(
        relay_event_stream(request, relay, subscription, authenticated=user is not None),
        ping=settings.relay.ping_interval_seconds,
    )
