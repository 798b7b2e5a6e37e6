"""GitHub repository lookup DTOs"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr


class RepositoryOwner(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    login: StrictStr


class RepositorySummary(BaseModel):
    """Normalized projection of an upstream repository payload.

    Unknown upstream fields are dropped on decode; the three kept fields are
    required and strictly typed.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: StrictInt
    name: StrictStr
    owner: RepositoryOwner


class DiagnosticRecord(BaseModel):
    """One outbound exchange, as written to the diagnostics log."""

    method: str
    url: str
    headers: Dict[str, List[str]]
    elapsedTime: float
    status: str
    headersOut: Dict[str, List[str]]
    body: RepositorySummary
