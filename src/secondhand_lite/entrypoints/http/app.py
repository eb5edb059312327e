from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from secondhand_lite.entrypoints.http.exception_handlers import register_exception_handlers
from secondhand_lite.entrypoints.http.routes.browse import router as browse_router
from secondhand_lite.entrypoints.http.routes.health import router as health_router
from secondhand_lite.entrypoints.http.routes.home import router as home_router
from secondhand_lite.infra.db.session import dispose_engine
from secondhand_lite.infra.log_config import configure_logging


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    yield
    dispose_engine()


def build_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="Secondhand Lite API",
        description="""
        Peer-to-peer marketplace API for browsing second-hand listings.

        ## Features
        - Faceted listing search with category, text, price, size, brand and
          condition filters
        - Page-numbered results with total counts, plus an incremental
          "load more" endpoint
        - Home feed and navigation categories

        ## Error Handling
        All errors return structured JSON responses with error codes.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
        contact={
            "name": "Secondhand Lite Team",
            "email": "dev@secondhand-lite.com",
        },
        license_info={
            "name": "Proprietary",
        },
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(browse_router, prefix="/v1")
    app.include_router(home_router, prefix="/v1")

    return app


app = build_app()
