"""Manufacturer Routes — one-time registration and profile lookup.

Invariants:
    - Registration identity comes from the actor header, never from the body
    - Second registration for an identity returns 409 ALREADY_REGISTERED, record unchanged
"""

import logging

from fastapi import APIRouter, Depends, status

from recycle_chain.api.dependencies import require_actor
from recycle_chain.schemas.manufacturer import (
    ManufacturerRegister, ManufacturerResponse, RegistrationStatus,
)
from recycle_chain.services.ledger_service import LedgerService, get_ledger_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/manufacturers", tags=["manufacturers"])


@router.post(
    "", response_model=ManufacturerResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_manufacturer(
    body: ManufacturerRegister,
    actor: str = Depends(require_actor),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Register the calling identity as a manufacturer."""
    manufacturer = await ledger.register(
        actor, body.name, body.location, body.contact,
    )
    return ManufacturerResponse.from_entity(manufacturer)


@router.get("/{identity}", response_model=ManufacturerResponse)
async def get_manufacturer(
    identity: str, ledger: LedgerService = Depends(get_ledger_service),
):
    return ManufacturerResponse.from_entity(ledger.get_manufacturer(identity))


@router.get("/{identity}/registered", response_model=RegistrationStatus)
async def is_registered(
    identity: str, ledger: LedgerService = Depends(get_ledger_service),
):
    return RegistrationStatus(
        identity=identity, registered=ledger.is_registered(identity),
    )
