"""ORM Models — SQLAlchemy declarative models for the persisted ledger.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - One file per table for locality
    - All models imported here so Base.metadata is complete before create_all
"""

from recycle_chain.models.ledger_operation import LedgerOperation  # noqa: F401
