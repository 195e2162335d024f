"""Macaroon Market FastAPI application.

Serves the product list and the checkout endpoint as JSON; page rendering
happens elsewhere. The Store is built once per application and shared by
every request through ``app.state``.

Nothing is built at import time; uvicorn calls ``build_app`` to configure
logging and create the application from the environment.

Usage:
    uvicorn app:build_app --factory --app-dir src --host 0.0.0.0 --port 8080 --reload
"""

from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalogue.api import product_router
from catalogue.product.defaults import DEFAULT_PRODUCTS
from catalogue.product.store import CatalogStore
from ordering.api import checkout_router, order_router
from shared.config import Settings, load_settings
from shared.exceptions import ObjectNotFoundError, PersistenceError, ValidationError
from shared.store import Store
from shared.utils.db import setup_db, verify_schema
from shared.utils.logging import add_context, clear_context, configure_logging, get_logger

logger = get_logger(__name__)


def bootstrap(store: Store) -> int:
    """Create missing tables, check the schema and seed the default products."""
    setup_db(store)
    verify_schema(store)
    return CatalogStore(store).seed_if_empty(DEFAULT_PRODUCTS)


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------
async def validation_error_handler(request: Request, exc: ValidationError):  # noqa: ARG001
    return JSONResponse(
        status_code=400,
        content={"error": type(exc).__name__, "messages": exc.messages},
    )


async def not_found_handler(request: Request, exc: ObjectNotFoundError):  # noqa: ARG001
    return JSONResponse(status_code=404, content={"error": type(exc).__name__, "detail": str(exc)})


async def persistence_error_handler(request: Request, exc: PersistenceError):
    logger.error("request_failed", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=503,
        content={"error": type(exc).__name__, "detail": "The store is unavailable, please retry later"},
    )


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
def create_app(store: Store | None = None, settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    owns_store = store is None
    store = store or Store.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.seed_on_startup:
            inserted = bootstrap(store)
            logger.info("startup_complete", env=settings.env, seeded=inserted)
        yield
        if owns_store:
            store.dispose()

    app = FastAPI(
        title="Macaroon Market API",
        description="Storefront catalogue and checkout",
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def bind_request_context(request: Request, call_next):
        request_id = request.headers.get("x-request-id") or uuid4().hex
        clear_context()
        add_context(request_id=request_id, method=request.method, path=request.url.path)
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(PersistenceError, persistence_error_handler)

    app.include_router(product_router)
    app.include_router(checkout_router)
    app.include_router(order_router)

    @app.get("/health")
    def health():
        healthy = store.ping()
        return JSONResponse(
            status_code=200 if healthy else 503,
            content={
                "status": "ok" if healthy else "degraded",
                "env": settings.env,
                "database": {"dialect": store.dialect, "reachable": healthy},
            },
        )

    return app


def build_app() -> FastAPI:
    configure_logging()
    return create_app()
