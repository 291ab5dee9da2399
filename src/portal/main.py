import secrets
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.portal.api.middlewares import setup_middlewares
from src.portal.api.routes.router import portal_router
from src.portal.core.config import get_settings
from src.portal.core.db import dispose_engine
from src.portal.core.exceptions import setup_exception_handlers
from src.portal.core.health import setup_health_endpoint
from src.portal.core.logging import get_logger, setup_logging
from src.portal.core.rate_limit import limiter

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(f"Starting {settings.app_name}")

    yield

    logger.info("Closing connections...")
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "portal-auth", "description": "Portal links, token checks and session cookie"},
    {"name": "portal-admin", "description": "Staff-only link sharing and token revocation"},
    {"name": "portal", "description": "Portal overview"},
    {"name": "portal-estimates", "description": "Estimate review, decisions and questions"},
    {"name": "portal-invoices", "description": "Invoice review and payment"},
    {"name": "portal-projects", "description": "Project details"},
    {"name": "portal-messages", "description": "Client and company messaging"},
]


def setup_metrics(app: FastAPI) -> None:
    """Expose Prometheus metrics, protected by an API key when one is configured."""
    settings = get_settings()
    instrumentator = Instrumentator().instrument(app)

    if settings.metrics_api_key:
        api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

        async def verify_metrics_key(api_key: str | None = Depends(api_key_header)) -> None:
            if (
                api_key is None
                or settings.metrics_api_key is None
                or not secrets.compare_digest(api_key, settings.metrics_api_key)
            ):
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Invalid or missing metrics API key",
                )

        instrumentator.expose(app, endpoint="/metrics", dependencies=[Depends(verify_metrics_key)])
    else:
        instrumentator.expose(app, endpoint="/metrics")


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Token-gated client portal for estimates, invoices and projects",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    setup_exception_handlers(app)

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

    setup_middlewares(app, settings)

    app.include_router(portal_router)

    setup_metrics(app)
    setup_health_endpoint(app)

    return app


app = create_app()
