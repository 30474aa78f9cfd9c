"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, but the core functions that
      produce what they store (ledger.apply) are never async themselves
"""

from typing import Protocol

from recycle_chain.core.commands import Command


class OperationRepository(Protocol):
    """Contract for the persisted operation log, implemented by the shell.

    append must be atomic: either the operation row is durable or it raises
    and nothing was written.
    """
    async def append(self, sequence: int, command: Command) -> None: ...
    async def load_all(self) -> list[tuple[int, Command]]: ...
