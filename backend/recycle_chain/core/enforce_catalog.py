"""Catalog Enforcement — product and item-batch preconditions.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Return the error on violation, None on success
    - validate_add_items chains existence -> ownership -> count, first error wins

Design Decisions:
    - Ownership is checked against Product.manufacturer only; registration is implied
      because only registered manufacturers can own products
"""

from recycle_chain.core.domain_types import MAX_ITEMS_PER_BATCH, MIN_ITEMS_PER_BATCH
from recycle_chain.core.errors import (
    CountOutOfRangeError,
    LengthMismatchError,
    NotOwnerError,
    ProductNotFoundError,
    RecycleChainError,
)
from recycle_chain.core.ledger_state import LedgerState


def check_toxic_lengths(
    toxic_names: list[str], toxic_weights: list[int],
) -> LengthMismatchError | None:
    """Manifest is given as parallel arrays; lengths must agree."""
    if len(toxic_names) != len(toxic_weights):
        return LengthMismatchError(len(toxic_names), len(toxic_weights))
    return None


def check_product_exists(
    state: LedgerState, product_id: int,
) -> ProductNotFoundError | None:
    if product_id not in state.products:
        return ProductNotFoundError(product_id)
    return None


def check_owner(
    state: LedgerState, product_id: int, identity: str,
) -> NotOwnerError | None:
    """Only the owning manufacturer may add units. Assumes the product exists."""
    if state.products[product_id].manufacturer != identity:
        return NotOwnerError(product_id, identity)
    return None


def check_count_in_range(count: int) -> CountOutOfRangeError | None:
    """Batch ceiling bounds the cost of a single call."""
    if not MIN_ITEMS_PER_BATCH <= count <= MAX_ITEMS_PER_BATCH:
        return CountOutOfRangeError(count, MIN_ITEMS_PER_BATCH, MAX_ITEMS_PER_BATCH)
    return None


def validate_add_items(
    state: LedgerState, product_id: int, identity: str, count: int,
) -> RecycleChainError | None:
    """Chain all add-items checks. Returns first error or None."""
    missing = check_product_exists(state, product_id)
    if missing:
        return missing
    return check_owner(state, product_id, identity) or check_count_in_range(count)
