"""
POI Service - FastAPI Backend
Bulk POI upload with full-collection replace, plus list/search for the map client
"""
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from poi_service.config import Settings, get_settings
from poi_service.database import Database
from poi_service.logging_config import setup_logging
from poi_service.routers import poi
from poi_service.routers.poi import respond
from poi_service.services import messages
from poi_service.services.envelope import build_err
from poi_service.services.ingestion import PoiIngestionService
from poi_service.services.query import PoiQueryService
from poi_service.services.replace_engine import BatchReplaceEngine
from poi_service.store import PoiStore, SqlAlchemyPoiStore
from poi_service.utils.metrics import (
    get_content_type, get_metrics, http_requests_in_progress, record_http_request
)

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[PoiStore] = None,
    configure_logging: bool = False,
) -> FastAPI:
    """Build the application.

    Without an explicit ``store`` the lifespan opens a PostgreSQL engine from
    ``settings.database_url`` and owns it until shutdown. Root logging is only
    reconfigured at startup when ``configure_logging`` is set.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if configure_logging:
            setup_logging(settings)
        logger.info(f"Starting {settings.app_name} v{settings.app_version}")
        logger.info(f"CORS Origins: {settings.cors_origins_list}")

        database = None
        poi_store = store
        if poi_store is None:
            database = Database(settings)
            poi_store = SqlAlchemyPoiStore(database)
            if settings.auto_init_db:
                try:
                    await database.init_schema()
                except Exception as e:
                    logger.error(
                        f"Database initialization failed: {e}; "
                        "use POST /api/initialize-db once the database is reachable"
                    )

        engine = BatchReplaceEngine(poi_store, batch_size=settings.insert_batch_size)
        app.state.database = database
        app.state.store = poi_store
        app.state.ingestion = PoiIngestionService(
            engine,
            upload_dir=settings.upload_dir,
            max_upload_bytes=settings.max_upload_bytes,
        )
        app.state.queries = PoiQueryService(poi_store)

        yield

        if database is not None:
            await database.close()
        logger.info("Shutting down...")

    app = FastAPI(
        title=settings.app_name,
        description="POI bulk ingestion (full replace) and map queries",
        version=settings.app_version,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log and measure every request"""
        http_requests_in_progress.inc()
        start = time.time()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration = time.time() - start
            http_requests_in_progress.dec()
            route = request.scope.get("route")
            endpoint = getattr(route, "path", request.url.path)
            record_http_request(request.method, endpoint, status_code, duration)
            logger.info(
                f"API Request {request.method} {request.url.path} -> {status_code} "
                f"({duration * 1000:.0f}ms) ua={request.headers.get('user-agent', '')!r} "
                f"ip={request.client.host if request.client else '-'}"
            )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Catch all unhandled exceptions and return an error envelope"""
        logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return respond(build_err(500, messages.INTERNAL_ERROR))

    app.include_router(poi.router, prefix="/api", tags=["POI"])

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs"
        }

    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint"""
        database = request.app.state.database
        db_health = await database.health_check() if database is not None else None
        healthy = db_health is None or db_health["healthy"]
        return {
            "status": "healthy" if healthy else "degraded",
            "version": settings.app_version,
            "database": db_health,
        }

    @app.get("/metrics")
    async def metrics():
        """Prometheus metrics endpoint"""
        return Response(
            content=get_metrics(),
            media_type=get_content_type()
        )

    return app


def _build_default_app() -> FastAPI:
    return create_app(get_settings(), configure_logging=True)


app = _build_default_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "poi_service.main:app",
        host="0.0.0.0",
        port=3535,
        reload=settings.debug
    )
