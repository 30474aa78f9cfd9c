"""Event Schemas — event log pages for external subscribers."""

from pydantic import BaseModel

from recycle_chain.core.domain_types import EventKind
from recycle_chain.core.ledger_state import LedgerEvent


class EventResponse(BaseModel):
    sequence: int
    kind: EventKind
    payload: dict

    @classmethod
    def from_entity(cls, event: LedgerEvent) -> "EventResponse":
        return cls(**event.to_dict())


class EventPage(BaseModel):
    events: list[EventResponse]
    latest_sequence: int
