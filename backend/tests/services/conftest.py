"""Service test fixtures — file-backed SQLite ledger + FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite database file under tmp_path
    - The ledger service singleton and db_manager are patched for the test and restored
    - The app lifespan does not run under ASGITransport; fixtures do its work

Design Decisions:
    - SQLite file over :memory: so every pooled connection sees the same tables
"""

import pytest
from httpx import ASGITransport, AsyncClient

import recycle_chain.infrastructure.database as db_module
import recycle_chain.services.ledger_service as ledger_module
from recycle_chain.infrastructure.database import DatabaseSessionManager
from recycle_chain.main import app
from recycle_chain.services.ledger_service import LedgerService
from recycle_chain.services.operation_repository import SqlOperationRepository


@pytest.fixture
async def db_manager(tmp_path):
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}")
    await manager.create_tables()
    yield manager
    await manager.dispose()


@pytest.fixture
def repository(db_manager):
    return SqlOperationRepository(db_manager)


@pytest.fixture
async def ledger(repository):
    service = LedgerService(repository)
    await service.load()
    return service


@pytest.fixture
async def client(ledger, db_manager, monkeypatch):
    """FastAPI test client bound to the test ledger and database."""
    monkeypatch.setattr(ledger_module, "_ledger_service", ledger)
    monkeypatch.setattr(db_module, "db_manager", db_manager)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def as_actor():
    """Build the identity header for a given actor."""
    def _headers(identity: str) -> dict[str, str]:
        return {"X-Actor-Identity": identity}
    return _headers
