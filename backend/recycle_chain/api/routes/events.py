"""Event Routes — paged reads and a live SSE subscription over the event log.

Invariants:
    - Events are returned oldest first, strictly after `since`
    - The stream never skips a sequence: its cursor advances over filtered-out
      events too, so a kind filter cannot stall it
    - Idle streams emit an SSE comment as keep-alive every poll interval

Design Decisions:
    - Long-poll on LedgerService.wait_for_events instead of a broker: single
      process, the ledger is already the ordering authority
"""

import json
import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from recycle_chain.config import get_settings
from recycle_chain.core.domain_types import EventKind
from recycle_chain.core.ledger_state import LedgerEvent
from recycle_chain.schemas.event import EventPage, EventResponse
from recycle_chain.services.ledger_service import LedgerService, get_ledger_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/events", tags=["events"])

# SSE headers prevent proxy/browser buffering of streamed events.
SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "X-Accel-Buffering": "no",
    "Connection": "keep-alive",
}


def sse_line(event: LedgerEvent) -> str:
    """Format event as SSE frame; id lets clients resume with Last-Event-ID."""
    return (
        f"id: {event.sequence}\n"
        f"data: {json.dumps(event.to_dict(), ensure_ascii=False)}\n\n"
    )


@router.get("", response_model=EventPage)
async def read_events(
    kind: EventKind | None = Query(None),
    since: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=1),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Read the event log after position `since`, optionally by kind."""
    page_limit = get_settings().event_page_limit
    if limit is not None:
        page_limit = min(limit, page_limit)
    events = ledger.read_events(kind, since, page_limit)
    return EventPage(
        events=[EventResponse.from_entity(e) for e in events],
        latest_sequence=ledger.events.latest_sequence,
    )


async def stream_event_frames(
    ledger: LedgerService,
    since: int,
    kind: EventKind | None,
    poll_seconds: float,
):
    """Yield SSE frames forever: backlog first, then live events."""
    cursor = since
    while True:
        events = ledger.read_events(since=cursor)
        if not events:
            events = await ledger.wait_for_events(cursor, poll_seconds)
        if not events:
            yield ": keep-alive\n\n"
            continue
        for event in events:
            cursor = event.sequence
            if kind is None or event.kind == kind:
                yield sse_line(event)


@router.get("/stream")
async def stream_events(
    kind: EventKind | None = Query(None),
    since: int = Query(0, ge=0),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Subscribe to events after `since` as text/event-stream."""
    return StreamingResponse(
        stream_event_frames(
            ledger, since, kind, get_settings().event_stream_poll_seconds,
        ),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
