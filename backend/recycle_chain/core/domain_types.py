"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - Identity is an opaque actor key; authenticity is verified outside the core
    - ProductId starts at 1 and is never reused
    - ProductItemId is always "<productId>-<sequenceNumber>", sequence 1-based
    - All valid states encoded as Enums, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - ProductStatus.ordinal is the 0..3 lifecycle position, exposed next to the name in API views
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

Identity = NewType("Identity", str)
ProductId = NewType("ProductId", int)
ProductItemId = NewType("ProductItemId", str)


# ─── Limits ──────────────────────────────────────────────────────

MIN_ITEMS_PER_BATCH: int = 1
MAX_ITEMS_PER_BATCH: int = 10


# ─── Enums ───────────────────────────────────────────────────────

class ProductStatus(str, Enum):
    """Product item lifecycle states, in lifecycle order."""
    MANUFACTURED = "manufactured"
    SOLD = "sold"
    RETURNED = "returned"
    RECYCLED = "recycled"

    @property
    def ordinal(self) -> int:
        return list(ProductStatus).index(self)


class LifecycleAction(str, Enum):
    """The three status-changing operations on product items."""
    SELL = "sell"
    RETURN = "return"
    RECYCLE = "recycle"


class EventKind(str, Enum):
    """Kinds of facts recorded in the event log."""
    MANUFACTURER_REGISTERED = "ManufacturerRegistered"
    PRODUCT_CREATED = "ProductCreated"
    PRODUCT_ITEMS_ADDED = "ProductItemsAdded"
    PRODUCT_ITEMS_STATUS_CHANGED = "ProductItemsStatusChanged"


# ─── Item id helpers ─────────────────────────────────────────────

def format_item_id(product_id: int, sequence_number: int) -> ProductItemId:
    return ProductItemId(f"{product_id}-{sequence_number}")

