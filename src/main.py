"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.routes.health import router as health_router
from api.v1 import router as v1_router
from core.config import API_VERSION, settings
from core.logging import setup_logging
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter, rate_limit_exceeded_handler
from infrastructure.database.session import engine

setup_logging()

logger = structlog.get_logger()

API_DESCRIPTION = f"""\
## Developer Social Network

Developers publish posts, like and comment on each other's posts, and keep a
profile with their experience and education.

### Ownership
Only the author of a post or comment can delete it, and only the owner of a
profile can change it.

### Authentication
Profile listing and lookup by user are public. Every other endpoint (except
`/health`) requires a valid JWT in the Authorization header:
```
Authorization: Bearer <your_token>
```

### Rate Limits
- GET endpoints: {READ_LIMIT}
- POST/PUT/DELETE: {WRITE_LIMIT}
"""

OPENAPI_TAGS = [
    {"name": "health", "description": "Health check endpoints"},
    {"name": "posts", "description": "Posts, likes and comments"},
    {
        "name": "profiles",
        "description": "Profiles, experience, education and account deletion",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log startup and release pooled connections on shutdown."""
    logger.info("app_started", environment=settings.app_env, version=API_VERSION)
    yield
    await engine.dispose()
    logger.info("app_stopped")


def _install_middleware(app: FastAPI) -> None:
    # Starlette wraps in reverse: the last one added runs first
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=API_DESCRIPTION,
        version=API_VERSION,
        debug=settings.debug,
        license_info={"name": "MIT"},
        openapi_tags=OPENAPI_TAGS,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    _install_middleware(app)
    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
