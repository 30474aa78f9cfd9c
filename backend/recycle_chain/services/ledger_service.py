"""Ledger Service — imperative shell around the pure ledger core.

Invariants:
    - Every mutating operation runs under ONE asyncio.Lock: apply -> persist -> publish
    - A rejected or unpersisted operation leaves state, event log and storage untouched
    - The published LedgerState is never mutated, so readers need no lock and always
      see a state fully before or fully after any operation
    - Events are appended in the global order operations were accepted

Design Decisions:
    - Impureim sandwich: pure ledger.apply in the middle, IO (repository, notify) around it
    - Persist-before-publish: the operation row is the source of truth, so state only
      advances once the row is durable
    - asyncio.Condition for subscribers: wait_for_events wakes on every publish
    - Repository is optional: without one the ledger is purely in-memory (tests, demos)
"""

import asyncio
import logging

from recycle_chain.core import queries
from recycle_chain.core.commands import (
    AddProductItems,
    Command,
    CreateProduct,
    RegisterManufacturer,
    TransitionProductItems,
    command_actor,
    command_kind,
)
from recycle_chain.core.domain_types import (
    EventKind, LifecycleAction, ProductId, ProductItemId, ProductStatus,
)
from recycle_chain.core.errors import (
    InvalidTransitionError, LedgerNotReadyError, RecycleChainError,
)
from recycle_chain.core.event_log import EventLog
from recycle_chain.core.ledger import apply
from recycle_chain.core.ledger_state import (
    LedgerEvent, LedgerState, Manufacturer, Product, ProductItem,
)
from recycle_chain.core.lifecycle import next_action
from recycle_chain.core.repository_protocols import OperationRepository

logger = logging.getLogger(__name__)


class LedgerService:
    """Single authoritative ledger instance: serialized writes, snapshot reads."""

    def __init__(self, repository: OperationRepository | None = None):
        self._repository = repository
        self._state = LedgerState()
        self._events = EventLog()
        self._write_lock = asyncio.Lock()
        self._published = asyncio.Condition()

    # --- Startup ---------------------------------------------------------------

    async def load(self) -> int:
        """Rebuild state and events by replaying the persisted operation log.

        Returns the number of operations replayed. A row that no longer applies
        means the log is corrupt; the error propagates and startup fails.
        """
        if self._repository is None:
            return 0
        operations = await self._repository.load_all()
        state, events = LedgerState(), EventLog()
        for sequence, command in operations:
            state, emitted = apply(state, command)
            if state.sequence != sequence:
                raise RuntimeError(
                    f"Operation log gap: expected sequence {state.sequence}, "
                    f"found {sequence}",
                )
            events.append(emitted)
        async with self._write_lock:
            self._state, self._events = state, events
        logger.info(
            "Ledger replayed %d operation(s)", len(operations),
            extra={"sequence": state.sequence, "item_count": state.item_count},
        )
        return len(operations)

    # --- Snapshot access --------------------------------------------------------

    @property
    def state(self) -> LedgerState:
        return self._state

    @property
    def events(self) -> EventLog:
        return self._events

    # --- Mutations ---------------------------------------------------------------

    async def execute(self, command: Command) -> list[LedgerEvent]:
        """Apply, persist and publish one command atomically."""
        operation = command_kind(command)
        actor = command_actor(command)
        async with self._write_lock:
            try:
                new_state, emitted = apply(self._state, command)
            except RecycleChainError as e:
                e.context.operation = operation
                e.context.actor = actor
                logger.warning(
                    f"Rejected {operation}: {e.message}",
                    extra={"operation": operation, "actor": actor, "error_code": e.code},
                )
                raise
            if self._repository is not None:
                await self._repository.append(new_state.sequence, command)
            self._state = new_state
            self._events.append(emitted)
            async with self._published:
                self._published.notify_all()
        logger.info(
            f"Accepted {operation}",
            extra={"operation": operation, "actor": actor, "sequence": new_state.sequence},
        )
        return emitted

    async def register(
        self, identity: str, name: str, location: str, contact: str,
    ) -> Manufacturer:
        await self.execute(RegisterManufacturer(identity, name, location, contact))
        return self._state.manufacturers[identity]

    async def create_product(
        self,
        identity: str,
        name: str,
        toxic_names: list[str],
        toxic_weights: list[int],
    ) -> ProductId:
        events = await self.execute(CreateProduct(
            identity, name, tuple(toxic_names), tuple(toxic_weights),
        ))
        return events[0].payload["product_id"]

    async def add_items(
        self, product_id: int, identity: str, count: int,
    ) -> list[ProductItemId]:
        events = await self.execute(AddProductItems(product_id, identity, count))
        return list(events[0].payload["item_ids"])

    async def transition(
        self,
        action: LifecycleAction,
        item_ids: list[str],
        actor: str | None = None,
    ) -> ProductStatus:
        events = await self.execute(
            TransitionProductItems(action, tuple(item_ids), actor),
        )
        return ProductStatus(events[0].payload["new_status"])

    async def sell_product_items(self, item_ids: list[str], actor: str | None = None):
        return await self.transition(LifecycleAction.SELL, item_ids, actor)

    async def return_product_items(self, item_ids: list[str], actor: str | None = None):
        return await self.transition(LifecycleAction.RETURN, item_ids, actor)

    async def recycle_product_items(self, item_ids: list[str], actor: str | None = None):
        return await self.transition(LifecycleAction.RECYCLE, item_ids, actor)

    async def advance_product_items(
        self,
        item_ids: list[str],
        current_status: ProductStatus,
        actor: str | None = None,
    ) -> ProductStatus:
        """Move items one step forward from the status the caller last observed."""
        action = next_action(current_status)
        if action is None:
            raise InvalidTransitionError(
                "advance", {i: current_status.value for i in item_ids},
            )
        return await self.transition(action, item_ids, actor)

    # --- Queries -----------------------------------------------------------------

    def is_registered(self, identity: str) -> bool:
        return queries.is_registered(self._state, identity)

    def get_manufacturer(self, identity: str) -> Manufacturer:
        return queries.get_manufacturer(self._state, identity)

    def get_product(self, product_id: int) -> Product:
        return queries.get_product(self._state, product_id)

    def get_product_item(self, item_id: str) -> ProductItem:
        return queries.get_product_item(self._state, item_id)

    def list_products(self, manufacturer: str | None = None) -> list[Product]:
        return queries.list_products(self._state, manufacturer)

    def list_product_items(
        self, product_id: int, status: ProductStatus | None = None,
    ) -> list[ProductItem]:
        return queries.list_product_items(self._state, product_id, status)

    def read_events(
        self,
        kind: EventKind | None = None,
        since: int = 0,
        limit: int | None = None,
    ) -> list[LedgerEvent]:
        return self._events.read(kind, since, limit)

    async def wait_for_events(
        self,
        since: int,
        timeout: float,
    ) -> list[LedgerEvent]:
        """Block until an event after `since` is published, or timeout. [] on timeout."""
        async with self._published:
            try:
                await asyncio.wait_for(
                    self._published.wait_for(
                        lambda: self._events.latest_sequence > since,
                    ),
                    timeout,
                )
            except asyncio.TimeoutError:
                return []
        return self._events.read(since=since)


# Singleton (initialized on startup)
_ledger_service: LedgerService | None = None


def init_ledger_service(
    repository: OperationRepository | None = None,
) -> LedgerService:
    global _ledger_service
    _ledger_service = LedgerService(repository)
    return _ledger_service


def get_ledger_service() -> LedgerService:
    """FastAPI dependency for the ledger service."""
    if _ledger_service is None:
        raise LedgerNotReadyError()
    return _ledger_service
