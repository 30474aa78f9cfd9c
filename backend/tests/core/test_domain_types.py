"""Domain Types — verifies rich type definitions, enum values and item id format.

Tests:
    - NewType wrappers exist and are callable
    - ProductStatus is the closed, ordered set of four lifecycle states
    - Item ids are "<productId>-<sequence>" with 1-based sequence numbers
"""

from recycle_chain.core.domain_types import (
    Identity, ProductId, ProductItemId,
    ProductStatus, LifecycleAction, EventKind,
    MAX_ITEMS_PER_BATCH, MIN_ITEMS_PER_BATCH,
    format_item_id,
)


def test_identity_types_wrap_primitives():
    assert Identity("0xabc") == "0xabc"
    assert ProductId(3) == 3
    assert ProductItemId("3-1") == "3-1"


def test_product_status_has_four_ordered_states():
    assert list(ProductStatus) == [
        ProductStatus.MANUFACTURED,
        ProductStatus.SOLD,
        ProductStatus.RETURNED,
        ProductStatus.RECYCLED,
    ]


def test_product_status_ordinal_matches_lifecycle_position():
    assert ProductStatus.MANUFACTURED.ordinal == 0
    assert ProductStatus.SOLD.ordinal == 1
    assert ProductStatus.RETURNED.ordinal == 2
    assert ProductStatus.RECYCLED.ordinal == 3


def test_enums_serialize_to_strings():
    assert ProductStatus.SOLD.value == "sold"
    assert LifecycleAction.RECYCLE.value == "recycle"
    assert EventKind.PRODUCT_ITEMS_ADDED.value == "ProductItemsAdded"


def test_event_kind_has_four_kinds():
    assert len(EventKind) == 4


def test_batch_limits():
    assert MIN_ITEMS_PER_BATCH == 1
    assert MAX_ITEMS_PER_BATCH == 10


def test_format_item_id():
    assert format_item_id(1, 1) == "1-1"
    assert format_item_id(12, 30) == "12-30"

