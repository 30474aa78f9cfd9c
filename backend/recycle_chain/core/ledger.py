"""Ledger — the deterministic state-transition function behind every mutating operation.

Invariants:
    - apply(state, command) -> (new_state, events); the input state is never mutated
    - Every precondition is checked before anything is built: a raised error means
      zero effect (no new state, no events)
    - Each accepted command advances state.sequence by exactly 1 and emits exactly
      one event stamped with that sequence
    - Item ids continue from Product.unit_count: "<productId>-<unit_count + 1>" ...

Design Decisions:
    - Functional core: the shell owns locking, persistence and the event log
    - Copy-on-write of only the touched maps keeps apply cheap on large ledgers
    - dataclasses.replace over in-place mutation: frozen entities stay frozen
    - Pure match-case dispatch on the command type: no polymorphism on commands
"""

from dataclasses import replace

from recycle_chain.core.commands import (
    AddProductItems,
    Command,
    CreateProduct,
    RegisterManufacturer,
    TransitionProductItems,
)
from recycle_chain.core.domain_types import (
    EventKind, Identity, ProductId, ProductItemId, format_item_id,
)
from recycle_chain.core.enforce_catalog import check_toxic_lengths, validate_add_items
from recycle_chain.core.enforce_registration import (
    check_not_registered, check_registered,
)
from recycle_chain.core.ledger_state import (
    LedgerEvent, LedgerState, Manufacturer, Product, ProductItem, ToxicItem,
)
from recycle_chain.core.lifecycle import (
    INITIAL_STATUS, target_status, validate_batch_transition,
)


# New state plus the events it emitted
Applied = tuple[LedgerState, list[LedgerEvent]]


def apply(state: LedgerState, command: Command) -> Applied:
    """Apply one command. Raises RecycleChainError when a precondition fails."""
    match command:
        case RegisterManufacturer():
            return _register(state, command)
        case CreateProduct():
            return _create_product(state, command)
        case AddProductItems():
            return _add_items(state, command)
        case TransitionProductItems():
            return _transition(state, command)
    raise TypeError(f"Unsupported ledger command: {type(command).__name__}")


def _register(state: LedgerState, command: RegisterManufacturer) -> Applied:
    error = check_not_registered(state, command.identity)
    if error:
        raise error

    identity = Identity(command.identity)
    manufacturer = Manufacturer(
        identity=identity,
        name=command.name,
        location=command.location,
        contact=command.contact,
    )
    sequence = state.sequence + 1
    new_state = replace(
        state,
        manufacturers={**state.manufacturers, identity: manufacturer},
        sequence=sequence,
    )
    event = LedgerEvent(sequence, EventKind.MANUFACTURER_REGISTERED, {
        "identity": identity,
        "name": command.name,
        "location": command.location,
        "contact": command.contact,
    })
    return new_state, [event]


def _create_product(state: LedgerState, command: CreateProduct) -> Applied:
    error = (
        check_registered(state, command.identity)
        or check_toxic_lengths(list(command.toxic_names), list(command.toxic_weights))
    )
    if error:
        raise error

    product_id = ProductId(state.next_product_id)
    product = Product(
        id=product_id,
        name=command.name,
        toxic_items=tuple(
            ToxicItem(name, weight)
            for name, weight in zip(command.toxic_names, command.toxic_weights)
        ),
        manufacturer=Identity(command.identity),
    )
    sequence = state.sequence + 1
    new_state = replace(
        state,
        products={**state.products, product_id: product},
        next_product_id=product_id + 1,
        sequence=sequence,
    )
    event = LedgerEvent(sequence, EventKind.PRODUCT_CREATED, {
        "product_id": product_id,
        "name": command.name,
        "owner": command.identity,
    })
    return new_state, [event]


def _add_items(state: LedgerState, command: AddProductItems) -> Applied:
    error = validate_add_items(
        state, command.product_id, command.identity, command.count,
    )
    if error:
        raise error

    product = state.products[ProductId(command.product_id)]
    first = product.unit_count + 1
    item_ids = [
        format_item_id(product.id, n) for n in range(first, first + command.count)
    ]
    items = dict(state.items)
    for item_id in item_ids:
        items[item_id] = ProductItem(item_id, product.id, INITIAL_STATUS)

    sequence = state.sequence + 1
    new_state = replace(
        state,
        products={
            **state.products,
            product.id: replace(product, unit_count=product.unit_count + command.count),
        },
        items=items,
        sequence=sequence,
    )
    event = LedgerEvent(sequence, EventKind.PRODUCT_ITEMS_ADDED, {
        "item_ids": tuple(item_ids),
        "product_id": product.id,
    })
    return new_state, [event]


def _transition(state: LedgerState, command: TransitionProductItems) -> Applied:
    item_ids = list(command.item_ids)
    error = validate_batch_transition(state, item_ids, command.action)
    if error:
        raise error

    new_status = target_status(command.action)
    items = dict(state.items)
    for item_id in item_ids:
        items[ProductItemId(item_id)] = replace(items[item_id], status=new_status)

    sequence = state.sequence + 1
    new_state = replace(state, items=items, sequence=sequence)
    event = LedgerEvent(sequence, EventKind.PRODUCT_ITEMS_STATUS_CHANGED, {
        "item_ids": tuple(item_ids),
        "new_status": new_status.value,
    })
    return new_state, [event]


def replay(
    commands: list[Command], state: LedgerState | None = None,
) -> Applied:
    """Fold commands over a state. Returns (final_state, all_events).

    Used to rebuild the ledger from its persisted operation log.
    """
    if state is None:
        state = LedgerState()
    events: list[LedgerEvent] = []
    for command in commands:
        state, emitted = apply(state, command)
        events.extend(emitted)
    return state, events
