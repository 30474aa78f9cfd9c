"""LedgerOperation ORM — the persisted, append-only operation log.

Invariants:
    - One row per ACCEPTED operation; rejected operations are never written
    - sequence is the primary key and matches the sequence of the emitted event
    - Rows are never updated or deleted

Design Decisions:
    - Store commands, not state: replaying rows in sequence order through
      ledger.apply rebuilds state and events deterministically
    - JSON payload column: command_to_dict output, one schema for all kinds
    - sequence as explicit PK (no autoincrement): a duplicate insert from a second
      writer fails with IntegrityError instead of silently forking the ledger
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from recycle_chain.db.base import Base


class LedgerOperation(Base):
    """Accepted ledger operation — source of truth for replay."""
    __tablename__ = "ledger_operations"

    sequence: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=False,
    )
    kind: Mapped[str] = mapped_column(String(40), nullable=False)
    actor: Mapped[str | None] = mapped_column(
        String(255), nullable=True, index=True,
    )
    payload: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
