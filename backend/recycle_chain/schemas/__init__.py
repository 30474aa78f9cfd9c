"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Domain types from core/ used for enum fields

Design Decisions:
    - Separate from core entities: schemas are API contracts, entities are ledger data
    - Rules the ledger itself enforces (array lengths, batch size, empty batch) are NOT
      duplicated here, so clients always get the ledger's own error code
"""
