"""Lifecycle State Machine — which status may move to which.

Invariants:
    - Manufactured -> Sold -> Returned -> Recycled, strictly linear, one-directional
    - No skips, no reversals; Recycled is terminal
    - A batch is valid only if EVERY item is known and in an allowed source status
    - validate_batch_transition is PURE: it never mutates state

Design Decisions:
    - Transitions keyed by current status only, not by actor: sale, return and
      recycling happen downstream of the manufacturer (retailer, customer, recycler)
    - Unknown ids are reported before status checks so NotFound wins over InvalidTransition
    - Repeated ids in one batch are invalid: the second occurrence would already
      have left its source status
"""

from recycle_chain.core.domain_types import LifecycleAction, ProductStatus
from recycle_chain.core.errors import (
    EmptyBatchError,
    InvalidTransitionError,
    ProductItemNotFoundError,
    RecycleChainError,
)
from recycle_chain.core.ledger_state import LedgerState


# action -> (allowed source statuses, target status)
TRANSITIONS: dict[LifecycleAction, tuple[frozenset[ProductStatus], ProductStatus]] = {
    LifecycleAction.SELL: (
        frozenset({ProductStatus.MANUFACTURED}), ProductStatus.SOLD,
    ),
    LifecycleAction.RETURN: (
        frozenset({ProductStatus.SOLD}), ProductStatus.RETURNED,
    ),
    LifecycleAction.RECYCLE: (
        frozenset({ProductStatus.RETURNED}), ProductStatus.RECYCLED,
    ),
}

INITIAL_STATUS: ProductStatus = ProductStatus.MANUFACTURED
TERMINAL_STATUS: ProductStatus = ProductStatus.RECYCLED


def allowed_sources(action: LifecycleAction) -> frozenset[ProductStatus]:
    return TRANSITIONS[action][0]


def target_status(action: LifecycleAction) -> ProductStatus:
    return TRANSITIONS[action][1]


def can_transition(current: ProductStatus, action: LifecycleAction) -> bool:
    return current in allowed_sources(action)


def next_action(status: ProductStatus) -> LifecycleAction | None:
    """The action that advances an item from `status`. None once terminal."""
    if status == TERMINAL_STATUS:
        return None
    for action, (sources, _) in TRANSITIONS.items():
        if status in sources:
            return action
    return None


def validate_batch_transition(
    state: LedgerState, item_ids: list[str], action: LifecycleAction,
) -> RecycleChainError | None:
    """Check a whole batch. Returns first error or None; all-or-nothing."""
    if not item_ids:
        return EmptyBatchError()

    missing = [i for i in item_ids if i not in state.items]
    if missing:
        return ProductItemNotFoundError(missing)

    offending: dict[str, str] = {}
    seen: set[str] = set()
    for item_id in item_ids:
        if item_id in seen:
            offending[item_id] = "duplicate"
            continue
        seen.add(item_id)
        status = state.items[item_id].status
        if not can_transition(status, action):
            offending[item_id] = status.value
    if offending:
        return InvalidTransitionError(action.value, offending)
    return None
