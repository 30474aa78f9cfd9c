"""Registration Enforcement — identity preconditions for every manufacturer-gated operation.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Return the error on violation, None on success (caller raises)

Design Decisions:
    - Return errors instead of raising: checks chain with `or`, first error wins,
      and the same checks are reusable by read paths that only need a verdict
"""

from recycle_chain.core.errors import AlreadyRegisteredError, NotRegisteredError
from recycle_chain.core.ledger_state import LedgerState


def check_not_registered(
    state: LedgerState, identity: str,
) -> AlreadyRegisteredError | None:
    """An identity may register exactly once."""
    if identity in state.manufacturers:
        return AlreadyRegisteredError(identity)
    return None


def check_registered(
    state: LedgerState, identity: str,
) -> NotRegisteredError | None:
    """Only registered manufacturers may create products."""
    if identity not in state.manufacturers:
        return NotRegisteredError(identity)
    return None
