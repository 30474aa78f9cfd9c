"""Ledger — tests for the pure state-transition function.

Tests cover:
    - Registration is one-time; second attempt leaves the record unchanged
    - createProduct precondition order (NotRegistered before LengthMismatch)
    - Sequential product ids from 1, unit count starts at 0
    - addItems id continuation, batch window 1..10, ownership
    - sell/return/recycle chain, skips rejected, atomic batches
    - Input state is never mutated; rejected commands produce nothing
    - Snapshot maps and event payloads are read-only
    - One event per accepted command, stamped with a dense sequence
"""

import pytest

from recycle_chain.core.commands import (
    AddProductItems, CreateProduct, RegisterManufacturer, recycle, return_, sell,
)
from recycle_chain.core.domain_types import EventKind, ProductStatus
from recycle_chain.core.errors import (
    AlreadyRegisteredError,
    CountOutOfRangeError,
    InvalidTransitionError,
    LengthMismatchError,
    NotOwnerError,
    NotRegisteredError,
    ProductItemNotFoundError,
    ProductNotFoundError,
)
from recycle_chain.core.ledger import apply, replay
from recycle_chain.core.ledger_state import LedgerState


def _register(state: LedgerState, identity: str = "M1") -> LedgerState:
    state, _ = apply(state, RegisterManufacturer(identity, "Acme", "Lyon", "acme@example.com"))
    return state


def _seeded(count: int = 2) -> LedgerState:
    """Helper: M1 registered, product 1 created, `count` items added."""
    state = _register(LedgerState())
    state, _ = apply(state, CreateProduct("M1", "P", ("Lead",), (5,)))
    if count:
        state, _ = apply(state, AddProductItems(1, "M1", count))
    return state


# ─── Registration ────────────────────────────────────────────────

def test_register_stores_manufacturer_and_emits_event():
    state, events = apply(
        LedgerState(), RegisterManufacturer("M1", "Acme", "Lyon", "acme@example.com"),
    )
    assert state.manufacturers["M1"].name == "Acme"
    assert len(events) == 1
    assert events[0].kind == EventKind.MANUFACTURER_REGISTERED
    assert events[0].payload == {
        "identity": "M1", "name": "Acme", "location": "Lyon",
        "contact": "acme@example.com",
    }


def test_register_twice_fails_and_keeps_original():
    state = _register(LedgerState())
    with pytest.raises(AlreadyRegisteredError):
        apply(state, RegisterManufacturer("M1", "Other", "Elsewhere", "x"))
    assert state.manufacturers["M1"].name == "Acme"


# ─── Product creation ────────────────────────────────────────────

def test_create_product_requires_registration():
    with pytest.raises(NotRegisteredError):
        apply(LedgerState(), CreateProduct("nobody", "P", ("Lead",), (5,)))


def test_not_registered_checked_before_length_mismatch():
    with pytest.raises(NotRegisteredError):
        apply(LedgerState(), CreateProduct("nobody", "P", ("Lead",), (5, 2)))


def test_create_product_length_mismatch_creates_nothing():
    state = _register(LedgerState())
    with pytest.raises(LengthMismatchError):
        apply(state, CreateProduct("M1", "P", ("Lead",), (5, 2)))
    assert state.product_count == 0
    assert state.next_product_id == 1


def test_create_product_assigns_sequential_ids():
    state = _register(LedgerState())
    state, events = apply(state, CreateProduct("M1", "A", ("Lead", "Mercury"), (5, 2)))
    assert events[0].payload == {"product_id": 1, "name": "A", "owner": "M1"}
    state, events = apply(state, CreateProduct("M1", "B"))
    assert events[0].payload["product_id"] == 2

    product = state.products[1]
    assert product.unit_count == 0
    assert product.manufacturer == "M1"
    assert [(t.name, t.weight) for t in product.toxic_items] == [
        ("Lead", 5), ("Mercury", 2),
    ]


def test_create_product_with_empty_manifest():
    state = _register(LedgerState())
    state, _ = apply(state, CreateProduct("M1", "Clean"))
    assert state.products[1].toxic_items == ()


# ─── Adding items ────────────────────────────────────────────────

def test_add_items_first_batch_ids():
    state = _seeded(count=0)
    state, events = apply(state, AddProductItems(1, "M1", 3))
    assert events[0].payload == {"item_ids": ("1-1", "1-2", "1-3"), "product_id": 1}
    assert state.products[1].unit_count == 3
    assert all(
        state.items[i].status == ProductStatus.MANUFACTURED
        for i in ("1-1", "1-2", "1-3")
    )


def test_add_items_continues_sequence():
    state = _seeded(count=2)
    state, events = apply(state, AddProductItems(1, "M1", 2))
    assert events[0].payload["item_ids"] == ("1-3", "1-4")
    assert state.products[1].unit_count == 4


def test_add_items_sequence_is_per_product():
    state = _seeded(count=2)
    state, _ = apply(state, CreateProduct("M1", "Q"))
    state, events = apply(state, AddProductItems(2, "M1", 1))
    assert events[0].payload["item_ids"] == ("2-1",)


def test_add_items_unknown_product():
    with pytest.raises(ProductNotFoundError):
        apply(_seeded(), AddProductItems(99, "M1", 1))


def test_add_items_non_owner_rejected():
    state = _register(_seeded(count=2), "M2")
    with pytest.raises(NotOwnerError) as exc:
        apply(state, AddProductItems(1, "M2", 1))
    assert "Only the product manufacturer" in exc.value.message
    assert state.products[1].unit_count == 2


def test_add_items_eleven_rejected_ten_accepted():
    state = _seeded(count=0)
    with pytest.raises(CountOutOfRangeError):
        apply(state, AddProductItems(1, "M1", 11))
    assert state.products[1].unit_count == 0

    state, events = apply(state, AddProductItems(1, "M1", 10))
    assert len(events[0].payload["item_ids"]) == 10
    assert state.products[1].unit_count == 10


def test_add_items_zero_rejected():
    with pytest.raises(CountOutOfRangeError):
        apply(_seeded(count=0), AddProductItems(1, "M1", 0))


def test_add_items_ownership_checked_before_count():
    state = _register(_seeded(count=0), "M2")
    with pytest.raises(NotOwnerError):
        apply(state, AddProductItems(1, "M2", 11))


# ─── Transitions ─────────────────────────────────────────────────

def test_end_to_end_sell_one_of_two():
    state = _seeded(count=2)
    state, events = apply(state, sell(["1-1"]))
    assert state.items["1-1"].status == ProductStatus.SOLD
    assert state.items["1-2"].status == ProductStatus.MANUFACTURED
    assert events[0].kind == EventKind.PRODUCT_ITEMS_STATUS_CHANGED
    assert events[0].payload == {"item_ids": ("1-1",), "new_status": "sold"}


def test_sell_twice_fails_and_stays_sold():
    state, _ = apply(_seeded(), sell(["1-1"]))
    with pytest.raises(InvalidTransitionError):
        apply(state, sell(["1-1"]))
    assert state.items["1-1"].status == ProductStatus.SOLD


def test_full_chain_in_order():
    state = _seeded()
    for command, expected in (
        (sell(["1-1"]), ProductStatus.SOLD),
        (return_(["1-1"]), ProductStatus.RETURNED),
        (recycle(["1-1"]), ProductStatus.RECYCLED),
    ):
        state, _ = apply(state, command)
        assert state.items["1-1"].status == expected


def test_skipping_a_step_fails():
    state = _seeded()
    with pytest.raises(InvalidTransitionError):
        apply(state, return_(["1-1"]))
    with pytest.raises(InvalidTransitionError):
        apply(state, recycle(["1-1"]))


def test_recycled_items_cannot_move():
    state = _seeded()
    for command in (sell(["1-1"]), return_(["1-1"]), recycle(["1-1"])):
        state, _ = apply(state, command)
    for command in (sell(["1-1"]), return_(["1-1"]), recycle(["1-1"])):
        with pytest.raises(InvalidTransitionError):
            apply(state, command)


def test_batch_is_all_or_nothing():
    state, _ = apply(_seeded(count=3), sell(["1-2"]))
    with pytest.raises(InvalidTransitionError):
        apply(state, sell(["1-1", "1-2", "1-3"]))
    assert state.items["1-1"].status == ProductStatus.MANUFACTURED
    assert state.items["1-3"].status == ProductStatus.MANUFACTURED


def test_transition_unknown_item():
    with pytest.raises(ProductItemNotFoundError):
        apply(_seeded(), sell(["1-9"]))


def test_transition_not_restricted_to_owner():
    state, _ = apply(_seeded(), sell(["1-1"], actor="retailer"))
    assert state.items["1-1"].status == ProductStatus.SOLD


# ─── Purity and ordering ─────────────────────────────────────────

def test_apply_never_mutates_input_state():
    before = _seeded(count=2)
    after, _ = apply(before, sell(["1-1"]))
    assert before.items["1-1"].status == ProductStatus.MANUFACTURED
    assert after.items["1-1"].status == ProductStatus.SOLD
    assert before.sequence + 1 == after.sequence


def test_untouched_maps_are_shared():
    before = _seeded(count=2)
    after, _ = apply(before, sell(["1-1"]))
    assert after.manufacturers is before.manufacturers
    assert after.products is before.products


def test_state_maps_are_read_only():
    state = _seeded(count=1)
    with pytest.raises(TypeError):
        state.items["1-1"] = None
    with pytest.raises(AttributeError):
        state.manufacturers.clear()
    assert state.item_count == 1
    assert state.product_count == 1


def test_event_payload_is_read_only():
    _, events = apply(_seeded(count=0), AddProductItems(1, "M1", 2))
    payload = events[0].payload
    with pytest.raises(TypeError):
        payload["product_id"] = 9
    with pytest.raises(AttributeError):
        payload["item_ids"].append("9-9")
    assert events[0].to_dict()["payload"]["item_ids"] == ["1-1", "1-2"]


def test_sequence_counts_accepted_operations_only():
    state = _seeded(count=2)
    assert state.sequence == 3
    with pytest.raises(InvalidTransitionError):
        apply(state, return_(["1-1"]))
    state, events = apply(state, sell(["1-1"]))
    assert state.sequence == 4
    assert events[0].sequence == 4


def test_replay_rebuilds_state_and_dense_events():
    commands = [
        RegisterManufacturer("M1", "Acme", "Lyon", "c"),
        CreateProduct("M1", "P", ("Lead",), (5,)),
        AddProductItems(1, "M1", 2),
        sell(["1-1"]),
    ]
    state, events = replay(commands)
    assert [e.sequence for e in events] == [1, 2, 3, 4]
    assert state.items["1-1"].status == ProductStatus.SOLD
    assert state.products[1].unit_count == 2


def test_unknown_command_type_raises_type_error():
    with pytest.raises(TypeError):
        apply(LedgerState(), object())
