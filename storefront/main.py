import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from storefront.api import order_routes, product_routes, user_routes
from storefront.config import Settings, get_settings
from storefront.core.errors import describe
from storefront.db import ConnectionPool

log = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings: Optional[Settings] = None, pool: Optional[ConnectionPool] = None) -> FastAPI:
    settings = settings or get_settings()
    pool = pool or ConnectionPool.from_settings(settings)

    app = FastAPI(title="Storefront API", version="1.0.0")
    app.state.settings = settings
    app.state.pool = pool

    # ✅ Allow the storefront frontend (CORS)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    async def on_startup():
        if settings.create_tables:
            log.info("Creating missing tables...")
            try:
                await pool.create_tables()
            except (SQLAlchemyError, OSError) as e:
                log.error("Table creation failed: %s", describe(e))
        # A failed probe is only logged; requests then fail one by one
        await pool.verify()

    @app.on_event("shutdown")
    async def on_shutdown():
        await pool.dispose()

    @app.get("/health")
    async def health_check(request: Request):
        return {"status": "healthy", "pool": request.app.state.pool.status()}

    app.include_router(product_routes.router)
    app.include_router(order_routes.router)
    app.include_router(user_routes.router)
    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    log.info("Server running on port %s", settings.port)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)
