"""Manufacturer Schemas — registration input and profile output."""

from pydantic import BaseModel, Field, field_validator

from recycle_chain.core.ledger_state import Manufacturer


class ManufacturerRegister(BaseModel):
    """Registration payload. Identity comes from the actor header, not the body."""
    name: str = Field(min_length=1, max_length=200)
    location: str = Field(min_length=1, max_length=200)
    contact: str = Field(min_length=1, max_length=200)

    @field_validator("name", "location", "contact")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("value cannot be empty or whitespace")
        return v


class ManufacturerResponse(BaseModel):
    identity: str
    name: str
    location: str
    contact: str

    @classmethod
    def from_entity(cls, manufacturer: Manufacturer) -> "ManufacturerResponse":
        return cls(
            identity=manufacturer.identity,
            name=manufacturer.name,
            location=manufacturer.location,
            contact=manufacturer.contact,
        )


class RegistrationStatus(BaseModel):
    identity: str
    registered: bool
