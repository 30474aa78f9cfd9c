"""Product Item Routes — lifecycle transitions and single-item lookup.

Invariants:
    - Every transition is all-or-nothing across the submitted batch
    - Unknown ids -> 404 PRODUCT_ITEM_NOT_FOUND; wrong source status -> 409 INVALID_TRANSITION
    - The actor header is optional here and only recorded for audit

Design Decisions:
    - Transitions are not restricted to the product's manufacturer: selling,
      returning and recycling are performed downstream of manufacture
"""

import logging

from fastapi import APIRouter, Depends

from recycle_chain.api.dependencies import optional_actor
from recycle_chain.core.domain_types import LifecycleAction
from recycle_chain.schemas.product_item import (
    ProductItemAdvance, ProductItemBatch, ProductItemResponse, StatusChanged,
)
from recycle_chain.services.ledger_service import LedgerService, get_ledger_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/product-items", tags=["product-items"])


async def _transition(
    ledger: LedgerService,
    action: LifecycleAction,
    body: ProductItemBatch,
    actor: str | None,
) -> StatusChanged:
    new_status = await ledger.transition(action, body.item_ids, actor)
    return StatusChanged.of(body.item_ids, new_status)


@router.post("/sell", response_model=StatusChanged)
async def sell_product_items(
    body: ProductItemBatch,
    actor: str | None = Depends(optional_actor),
    ledger: LedgerService = Depends(get_ledger_service),
):
    return await _transition(ledger, LifecycleAction.SELL, body, actor)


@router.post("/return", response_model=StatusChanged)
async def return_product_items(
    body: ProductItemBatch,
    actor: str | None = Depends(optional_actor),
    ledger: LedgerService = Depends(get_ledger_service),
):
    return await _transition(ledger, LifecycleAction.RETURN, body, actor)


@router.post("/recycle", response_model=StatusChanged)
async def recycle_product_items(
    body: ProductItemBatch,
    actor: str | None = Depends(optional_actor),
    ledger: LedgerService = Depends(get_ledger_service),
):
    return await _transition(ledger, LifecycleAction.RECYCLE, body, actor)


@router.post("/advance", response_model=StatusChanged)
async def advance_product_items(
    body: ProductItemAdvance,
    actor: str | None = Depends(optional_actor),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Sell, return or recycle depending on the status the caller last observed."""
    new_status = await ledger.advance_product_items(
        body.item_ids, body.current_status, actor,
    )
    return StatusChanged.of(body.item_ids, new_status)


@router.get("/{item_id}", response_model=ProductItemResponse)
async def get_product_item(
    item_id: str, ledger: LedgerService = Depends(get_ledger_service),
):
    return ProductItemResponse.from_entity(ledger.get_product_item(item_id))
