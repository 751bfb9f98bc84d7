import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from scope_service.config import get_settings
from scope_service.db.neo4j_connector import close_driver

# Routers
from scope_service.api.routers.scope import router as scope_router


logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Ensure resources (like the Neo4j driver) are closed on shutdown."""
    try:
        yield
    finally:
        close_driver()


app = FastAPI(title="Scope of Operation Service", version="0.1", lifespan=lifespan)

app.include_router(scope_router)
