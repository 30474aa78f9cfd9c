"""Event Log — append-only, sequence-ordered record of accepted operations.

Invariants:
    - Entries are never rewritten or deleted
    - Sequences are strictly increasing; out-of-order appends are rejected
    - One entry per accepted operation, never one per rejected operation
    - read() returns entries with sequence > since, oldest first

Design Decisions:
    - Plain list + bisect: sequences are dense and sorted, so reads are O(log n + k)
    - No IO and no async: subscribers are notified by the shell, not here
"""

from bisect import bisect_right

from recycle_chain.core.domain_types import EventKind
from recycle_chain.core.ledger_state import LedgerEvent


class EventLog:
    """Append-only event store for a single ledger."""

    def __init__(self, events: list[LedgerEvent] | None = None):
        self._events: list[LedgerEvent] = []
        self._sequences: list[int] = []
        if events:
            self.append(events)

    def __len__(self) -> int:
        return len(self._events)

    @property
    def latest_sequence(self) -> int:
        """Sequence of the newest entry, 0 when empty."""
        return self._sequences[-1] if self._sequences else 0

    def append(self, events: list[LedgerEvent]) -> None:
        """Append events. All-or-nothing: validates ordering before appending."""
        last = self.latest_sequence
        for event in events:
            if event.sequence <= last:
                raise ValueError(
                    f"Event sequence {event.sequence} is not after {last}",
                )
            last = event.sequence
        self._events.extend(events)
        self._sequences.extend(e.sequence for e in events)

    def read(
        self,
        kind: EventKind | None = None,
        since: int = 0,
        limit: int | None = None,
    ) -> list[LedgerEvent]:
        """Entries after position `since`, optionally filtered by kind."""
        start = bisect_right(self._sequences, since)
        result: list[LedgerEvent] = []
        for event in self._events[start:]:
            if kind is not None and event.kind != kind:
                continue
            result.append(event)
            if limit is not None and len(result) >= limit:
                break
        return result
