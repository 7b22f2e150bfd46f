"""
Production FastAPI Application

Serves the booking API on the store backend chosen by STORE_BACKEND.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.constant.path import DEFAULT_SEED_DATA_PATH
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
from src.service.tour_booking.driven_adapter.seed_data_loader import (
    load_seed_data,
    seed_memory_store,
    seed_postgres,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    Logger.base.info('🚀 [Tour Booking] Starting up...')

    tracing = TracingConfig(service_name='tour-booking-service')
    tracing.setup()

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Tour Booking] Dependency injection wired')

    seed_data = load_seed_data(settings.SEED_DATA_PATH or DEFAULT_SEED_DATA_PATH)

    if settings.STORE_BACKEND == 'postgres':
        database = container.database()
        tracing.instrument_sqlalchemy(engine=database.engine)
        await database.create_tables()
        await seed_postgres(seed_data, database=database)
        Logger.base.info('🗄️  [Tour Booking] PostgreSQL store ready')
    else:
        seed_memory_store(
            seed_data,
            tour_catalog=container.memory_tour_catalog(),
            user_repo=container.memory_user_repo(),
        )
        Logger.base.info('🧠 [Tour Booking] In-memory store ready')

    Logger.base.info('✅ [Tour Booking] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Tour Booking] Shutting down...')

    if settings.STORE_BACKEND == 'postgres':
        await container.database().dispose()
        Logger.base.info('🗄️  [Tour Booking] Database engine disposed')

    # flush remaining spans
    tracing.shutdown()

    container.unwire()

    Logger.base.info('👋 [Tour Booking] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
