"""
Tracing Context - request-scoped context for log correlation.

Each inbound request gets a correlation id (taken from the caller's
``X-Request-ID`` header or freshly generated) plus the owner/repo pair it
is looking up. Values live in contextvars, so concurrent requests never
see each other's context.

Usage:
    TracingContext.set(correlation_id="abc-123", owner="octocat", repo="Hello-World")
    ctx = TracingContext.get()  # picked up by JSONFormatter
    prefix = TracingContext.get_log_prefix()  # "[corr=abc-123] "
    TracingContext.clear()
"""

import uuid
from contextvars import ContextVar
from typing import Dict

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")
_owner: ContextVar[str] = ContextVar("owner", default="")
_repo: ContextVar[str] = ContextVar("repo", default="")


class TracingContext:
    """Request-scoped tracing context."""

    @staticmethod
    def set(correlation_id: str = "", owner: str = "", repo: str = "") -> None:
        """Set tracing context for current execution."""
        if correlation_id:
            _correlation_id.set(correlation_id)
        if owner:
            _owner.set(owner)
        if repo:
            _repo.set(repo)

    @staticmethod
    def get() -> Dict[str, str]:
        """Get current tracing context as dict."""
        return {
            "correlation_id": _correlation_id.get(),
            "owner": _owner.get(),
            "repo": _repo.get(),
        }

    @staticmethod
    def generate_correlation_id() -> str:
        return uuid.uuid4().hex

    @staticmethod
    def get_log_prefix() -> str:
        """Prefix for manual log lines, e.g. ``[corr=abc-123] ``."""
        correlation_id = _correlation_id.get()
        return f"[corr={correlation_id}] " if correlation_id else ""

    @staticmethod
    def clear() -> None:
        _correlation_id.set("")
        _owner.set("")
        _repo.set("")
