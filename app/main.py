from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from app.core.config import settings
from app.core.database.graph import graph_db
from app.core.logging import RequestLoggingMiddleware, configure_logging
from shared.errors import register_error_handlers

# Routers
from app.routers import monitoring_router
from content.routers import content_by_concept_router

log = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: fail fast when neo4j isn't reachable
    configure_logging(settings.app_name, settings.env, settings.log_level, settings.log_format)
    log.info("starting", port=settings.app_port, neo_url=settings.neo_url, cache_control=settings.cache_control_header)
    await graph_db.init()
    yield
    # Shutdown
    await graph_db.close()


app = FastAPI(
    title=settings.app_name,
    description=settings.app_description,
    version=settings.app_version,
    debug=settings.debug,
    docs_url="/docs",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)
# Every method other than GET on /content gets a bare 405
register_error_handlers(app, empty_405_paths=[content_by_concept_router.prefix])

# Monitoring first, then the API
app.include_router(monitoring_router)
app.include_router(content_by_concept_router)
