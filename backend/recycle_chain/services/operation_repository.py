"""Operation Repository — SQLAlchemy implementation of core OperationRepository.

Invariants:
    - append writes exactly one row and commits, or raises DatabaseError with nothing written
    - load_all returns operations in ascending sequence order

Design Decisions:
    - Uses DatabaseSessionManager.session() so driver errors surface as DatabaseError
"""

import logging

from sqlalchemy import select

from recycle_chain.core.commands import (
    Command, command_actor, command_from_dict, command_kind, command_to_dict,
)
from recycle_chain.infrastructure.database import DatabaseSessionManager
from recycle_chain.models.ledger_operation import LedgerOperation

logger = logging.getLogger(__name__)


class SqlOperationRepository:
    """Persists accepted commands to the ledger_operations table."""

    def __init__(self, manager: DatabaseSessionManager):
        self._manager = manager

    async def append(self, sequence: int, command: Command) -> None:
        async with self._manager.session() as db:
            db.add(LedgerOperation(
                sequence=sequence,
                kind=command_kind(command),
                actor=command_actor(command),
                payload=command_to_dict(command),
            ))
            await db.commit()

    async def load_all(self) -> list[tuple[int, Command]]:
        async with self._manager.session() as db:
            result = await db.execute(
                select(LedgerOperation).order_by(LedgerOperation.sequence),
            )
            rows = result.scalars().all()
        logger.info("Loaded %d ledger operation(s)", len(rows))
        return [(row.sequence, command_from_dict(row.payload)) for row in rows]
