"""Ledger Queries — read-only lookups over a LedgerState snapshot.

Invariants:
    - All functions are PURE and never mutate the snapshot
    - get_* raise the matching ResourceNotFoundError subclass; is_registered never raises
    - List results are ordered: products by id, items by sequence number

Design Decisions:
    - Queries take the snapshot explicitly so callers read one consistent view
      even while a writer publishes a newer one
"""

from recycle_chain.core.domain_types import ProductStatus, format_item_id
from recycle_chain.core.errors import (
    ManufacturerNotFoundError,
    ProductItemNotFoundError,
    ProductNotFoundError,
)
from recycle_chain.core.ledger_state import (
    LedgerState, Manufacturer, Product, ProductItem,
)


def is_registered(state: LedgerState, identity: str) -> bool:
    return identity in state.manufacturers


def get_manufacturer(state: LedgerState, identity: str) -> Manufacturer:
    manufacturer = state.manufacturers.get(identity)
    if manufacturer is None:
        raise ManufacturerNotFoundError(identity)
    return manufacturer


def get_product(state: LedgerState, product_id: int) -> Product:
    product = state.products.get(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    return product


def get_product_item(state: LedgerState, item_id: str) -> ProductItem:
    item = state.items.get(item_id)
    if item is None:
        raise ProductItemNotFoundError([item_id])
    return item


def list_products(
    state: LedgerState, manufacturer: str | None = None,
) -> list[Product]:
    """All products in id order, optionally only those owned by `manufacturer`."""
    products = sorted(state.products.values(), key=lambda p: p.id)
    if manufacturer is not None:
        products = [p for p in products if p.manufacturer == manufacturer]
    return products


def list_product_items(
    state: LedgerState, product_id: int, status: ProductStatus | None = None,
) -> list[ProductItem]:
    """Items of one product in sequence order, optionally filtered by status."""
    product = get_product(state, product_id)
    items = []
    # Item ids are contiguous, so walking the sequence avoids scanning every item.
    for sequence_number in range(1, product.unit_count + 1):
        item = state.items[format_item_id(product.id, sequence_number)]
        if status is None or item.status == status:
            items.append(item)
    return items

