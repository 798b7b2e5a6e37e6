"""Repository lookup endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response
from pydantic_core import PydanticSerializationError

from app.core.tracing import TracingContext
from app.dtos.github import RepositorySummary
from app.services.github.exceptions import ResponseEncodeError
from app.services.repository_lookup import RepositoryLookupService
from app.utils.disconnect import run_until_disconnected

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/repos", tags=["Repositories"])

_ERROR_RESPONSES = {
    404: {"description": "Upstream status passed through (any non-200 code)"},
    500: {"description": "Request, transport, decode or encode failure"},
}


def get_lookup_service(request: Request) -> RepositoryLookupService:
    return request.app.state.lookup_service


def _render_summary(summary: RepositorySummary) -> bytes:
    return summary.model_dump_json().encode("utf-8")


@router.get(
    "/{owner}/{repo}",
    response_model=RepositorySummary,
    responses=_ERROR_RESPONSES,
)
async def get_repository(
    owner: str,
    repo: str,
    request: Request,
    service: RepositoryLookupService = Depends(get_lookup_service),
):
    """Look up a repository upstream and return its id, name and owner login."""
    TracingContext.set(owner=owner, repo=repo)

    summary = await run_until_disconnected(
        request,
        service.lookup(owner, repo),
        poll_interval=service.config.DISCONNECT_POLL_INTERVAL,
    )

    # Fully encoded before any status or header goes out
    try:
        body = _render_summary(summary)
    except (PydanticSerializationError, ValueError, TypeError) as exc:
        logger.error(f"Error encoding response body: {exc}")
        raise ResponseEncodeError(str(exc)) from exc

    return Response(content=body, media_type="application/json")
