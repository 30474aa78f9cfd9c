"""Recycle Chain API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map RecycleChainError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Ledger replayed from the operation log before the first request is served

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py to keep this module thin
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recycle_chain.api.error_handlers import register_error_handlers
from recycle_chain.api.routes import (
    events, health, manufacturers, product_items, products,
)
from recycle_chain.config import get_settings
from recycle_chain.infrastructure.database import init_db
from recycle_chain.infrastructure.observability import setup_logging
from recycle_chain.services.ledger_service import init_ledger_service
from recycle_chain.services.operation_repository import SqlOperationRepository

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await manager.create_tables()
    ledger = init_ledger_service(SqlOperationRepository(manager))
    await ledger.load()
    logger.info("Recycle Chain API started")
    yield
    logger.info("Recycle Chain API shutting down")
    await manager.dispose()


app = FastAPI(
    title="Recycle Chain API", version="1.0.0", lifespan=lifespan,
)

# CORS from settings
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(manufacturers.router)
app.include_router(products.router)
app.include_router(product_items.router)
app.include_router(events.router)

register_error_handlers(app)
