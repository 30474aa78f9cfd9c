"""Product Routes — catalog creation, item batches, and catalog reads.

Invariants:
    - createProduct and addItems require the actor header
    - Only the owning manufacturer may add items (403 NOT_OWNER otherwise)
    - Item batches are 1..10 units and continue the product's id sequence
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from recycle_chain.api.dependencies import require_actor
from recycle_chain.core.domain_types import ProductStatus
from recycle_chain.schemas.product import (
    ProductCreate,
    ProductCreated,
    ProductItemsAdded,
    ProductItemsCreate,
    ProductResponse,
)
from recycle_chain.schemas.product_item import ProductItemResponse
from recycle_chain.services.ledger_service import LedgerService, get_ledger_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/products", tags=["products"])


@router.post(
    "", response_model=ProductCreated,
    status_code=status.HTTP_201_CREATED,
)
async def create_product(
    body: ProductCreate,
    actor: str = Depends(require_actor),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Create a product owned by the calling manufacturer."""
    product_id = await ledger.create_product(
        actor, body.name, body.toxic_names, body.toxic_weights,
    )
    return ProductCreated(product_id=product_id)


@router.get("", response_model=list[ProductResponse])
async def list_products(
    manufacturer: str | None = Query(None),
    ledger: LedgerService = Depends(get_ledger_service),
):
    return [
        ProductResponse.from_entity(p) for p in ledger.list_products(manufacturer)
    ]


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int, ledger: LedgerService = Depends(get_ledger_service),
):
    return ProductResponse.from_entity(ledger.get_product(product_id))


@router.post(
    "/{product_id}/items", response_model=ProductItemsAdded,
    status_code=status.HTTP_201_CREATED,
)
async def add_product_items(
    product_id: int,
    body: ProductItemsCreate,
    actor: str = Depends(require_actor),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Manufacture a batch of units for one product."""
    item_ids = await ledger.add_items(product_id, actor, body.count)
    return ProductItemsAdded(product_id=product_id, item_ids=item_ids)


@router.get("/{product_id}/items", response_model=list[ProductItemResponse])
async def list_product_items(
    product_id: int,
    status_filter: ProductStatus | None = Query(None, alias="status"),
    ledger: LedgerService = Depends(get_ledger_service),
):
    return [
        ProductItemResponse.from_entity(i)
        for i in ledger.list_product_items(product_id, status_filter)
    ]
