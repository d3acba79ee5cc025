"""Storefront FastAPI application.

Serves the checkout endpoints used by the browser: PayPal order creation
and capture, order persistence, order history and the remote cart record.
Ordering requests are wrapped in the Protean domain context based on URL
prefix.

Usage:
    uvicorn app:create_app --factory --host 0.0.0.0 --port 8000 --reload
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from ordering.api.routes import cart_router, order_router
from ordering.domain import ordering
from ordering.store.registration import RegisterStore
from payments.api.routes import paypal_router
from payments.gateway import build_gateway
from payments.gateway.port import PaymentGateway
from protean.utils.globals import current_domain
from shared.config import Settings
from shared.logging import add_context, clear_context, configure_logging

logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/api/create-order": ordering,
    "/api/orders": ordering,
    "/api/carts": ordering,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize the ordering domain on startup and release the gateway on shutdown."""
    settings: Settings = app.state.settings
    ordering.init()

    if not settings.is_production:
        # Memory-backed development runs start without any stores.
        with ordering.domain_context():
            current_domain.process(
                RegisterStore(slug=settings.store_slug, name=settings.store_name),
                asynchronous=False,
            )

    logger.info(
        "Storefront started",
        environment=settings.environment,
        store_slug=settings.store_slug,
        gateway=type(app.state.gateway).__name__,
    )
    yield

    close = getattr(app.state.gateway, "close", None)
    if close is not None:
        close()


def create_app(settings: Settings | None = None, gateway: PaymentGateway | None = None) -> FastAPI:
    """Build the application around explicitly constructed settings and gateway."""
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title="Storefront API",
        description="Cart records, PayPal checkout and order persistence",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.gateway = gateway or build_gateway(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the correct Protean domain context for each request."""
        clear_context()
        add_context(method=request.method, path=request.url.path)
        domain = _resolve_domain(request.url.path)
        if domain is not None:
            with domain.domain_context():
                response = await call_next(request)
            return response
        # No domain match, pass through (health check, docs, paypal proxy)
        return await call_next(request)

    # -----------------------------------------------------------------------
    # Routers
    # -----------------------------------------------------------------------
    app.include_router(order_router)
    app.include_router(cart_router)
    app.include_router(paypal_router)

    # -----------------------------------------------------------------------
    # Health / root
    # -----------------------------------------------------------------------
    @app.get("/health")
    async def health():
        return JSONResponse(
            content={
                "status": "ok",
                "store": settings.store_slug,
                "paypal_enabled": settings.paypal_enabled,
                "gateway": type(app.state.gateway).__name__,
            }
        )

    return app
