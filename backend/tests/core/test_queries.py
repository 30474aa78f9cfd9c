"""Ledger Queries — tests for read-only lookups over a snapshot.

Tests cover:
    - is_registered never raises
    - get_* raise the matching not-found error
    - list_products ordering and manufacturer filter
    - list_product_items ordering and status filter
"""

import pytest

from recycle_chain.core import queries
from recycle_chain.core.commands import (
    AddProductItems, CreateProduct, RegisterManufacturer, sell,
)
from recycle_chain.core.domain_types import ProductStatus
from recycle_chain.core.errors import (
    ManufacturerNotFoundError, ProductItemNotFoundError, ProductNotFoundError,
)
from recycle_chain.core.ledger import replay


@pytest.fixture
def state():
    state, _ = replay([
        RegisterManufacturer("M1", "Acme", "Lyon", "c1"),
        RegisterManufacturer("M2", "Bolt", "Oslo", "c2"),
        CreateProduct("M1", "Phone", ("Lead",), (5,)),
        CreateProduct("M2", "Lamp"),
        CreateProduct("M1", "Tablet"),
        AddProductItems(1, "M1", 3),
        sell(["1-2"]),
    ])
    return state


def test_is_registered(state):
    assert queries.is_registered(state, "M1")
    assert not queries.is_registered(state, "M3")


def test_get_manufacturer(state):
    assert queries.get_manufacturer(state, "M2").location == "Oslo"
    with pytest.raises(ManufacturerNotFoundError):
        queries.get_manufacturer(state, "M3")


def test_get_product(state):
    assert queries.get_product(state, 1).name == "Phone"
    with pytest.raises(ProductNotFoundError):
        queries.get_product(state, 4)


def test_get_product_item(state):
    assert queries.get_product_item(state, "1-2").status == ProductStatus.SOLD
    with pytest.raises(ProductItemNotFoundError):
        queries.get_product_item(state, "1-4")


def test_list_products_in_id_order(state):
    assert [p.id for p in queries.list_products(state)] == [1, 2, 3]


def test_list_products_by_manufacturer(state):
    assert [p.id for p in queries.list_products(state, "M1")] == [1, 3]
    assert queries.list_products(state, "M3") == []


def test_list_product_items(state):
    assert [i.id for i in queries.list_product_items(state, 1)] == ["1-1", "1-2", "1-3"]
    assert queries.list_product_items(state, 2) == []


def test_list_product_items_by_status(state):
    sold = queries.list_product_items(state, 1, ProductStatus.SOLD)
    assert [i.id for i in sold] == ["1-2"]


def test_list_product_items_unknown_product(state):
    with pytest.raises(ProductNotFoundError):
        queries.list_product_items(state, 9)
