# product_api/main.py

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware

from . import config
from .db import Database
from .errors import StartupError, register_exception_handlers
from .router import router

# --- Standard Logging Configuration ---
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

# Suppress noisy logs from third-party libraries for cleaner output
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("uvicorn.error").setLevel(logging.INFO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    database: Database = app.state.database
    database.initialize()
    try:
        database.connect()
    except StartupError as e:
        # Keep serving; requests fail with 500 until the database comes back
        logger.critical(
            f"Product API: {e}. Continuing in a degraded state.",
            exc_info=True,
        )
    yield
    database.shutdown()


def create_app(database_url: Optional[str] = None, enable_docs: Optional[bool] = None) -> FastAPI:
    """
    Builds the application: exception handlers, CORS, the product router and,
    optionally, the interactive documentation.
    """
    if enable_docs is None:
        enable_docs = config.ENABLE_DOCS

    app = FastAPI(
        title="Product API",
        description="Manages the product catalog: list, fetch, create, update, toggle availability and delete.",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if enable_docs else None,
        redoc_url="/redoc" if enable_docs else None,
        openapi_url="/openapi.json" if enable_docs else None,
    )
    app.state.database = Database(database_url or config.DATABASE_URL)

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", status_code=status.HTTP_200_OK, summary="Health check endpoint")
    async def health_check():
        return {"status": "ok", "service": "product-api"}

    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "product_api.main:app",
        host=config.HOST,
        port=config.PORT,
        log_level=config.LOG_LEVEL.lower(),
    )
