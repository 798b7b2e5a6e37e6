"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from app.api import health, repos
from app.config import Settings
from app.core.logging import setup_logging
from app.middleware.error_codes import ERROR_CODE_HEADER, get_error_code
from app.middleware.request_context import RequestContextMiddleware
from app.services.github.exceptions import UpstreamError
from app.services.github.github_client import create_upstream_client
from app.services.repository_lookup import RepositoryLookupService

logger = logging.getLogger(__name__)

# Statuses that must not carry a body
_BODILESS_STATUSES = {204, 304}


async def upstream_error_handler(request: Request, exc: UpstreamError) -> PlainTextResponse:
    """Render lookup failures as the fixed plain-text message."""
    content = "" if exc.status_code in _BODILESS_STATUSES else exc.message
    return PlainTextResponse(
        content,
        status_code=exc.status_code,
        headers={ERROR_CODE_HEADER: get_error_code(exc.status_code).value},
    )


def create_app(
    config: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Build the relay application around ``config``."""
    if config is None:
        from app.config import settings as config

    setup_logging(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with create_upstream_client(config, transport) as client:
            app.state.lookup_service = RepositoryLookupService(client, config)
            logger.info(f"Relaying repository lookups to {config.UPSTREAM_BASE_URL}")
            yield

    app = FastAPI(
        title=config.APP_NAME,
        description="Relays repository lookups to the upstream API and returns a normalized summary",
        version=config.APP_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )
    app.state.settings = config

    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(UpstreamError, upstream_error_handler)

    app.include_router(health.router, tags=["Health"])
    app.include_router(repos.router)

    return app


app = create_app()


def run() -> None:
    """Serve the relay; a failure to bind terminates the process."""
    import uvicorn

    from app.config import settings

    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
