from __future__ import annotations
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.api import router
from logging_config import configure_logging
from services.ha_push import build_default_pusher
from services.poll_cache import build_default_cache
from services.scheduler import build_default_scheduler


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    scheduler = build_default_scheduler()
    scheduler.start()
    try:
        yield
    finally:
        scheduler.shutdown()
        build_default_scheduler.cache_clear()
        build_default_pusher.cache_clear()
        build_default_cache.cache_clear()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Temperature Sensor Server",
        description="Serves cached 1-Wire and IIO sensor readings and forwards them to Home Assistant.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(router)
    return app


app = create_app()
