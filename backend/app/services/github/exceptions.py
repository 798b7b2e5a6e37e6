"""Exceptions raised while relaying a repository lookup upstream."""

from __future__ import annotations


class UpstreamError(Exception):
    """
    Base exception for lookup failures.

    ``message`` is the fixed text returned to the caller, ``status_code`` the
    HTTP status it is returned with. ``detail`` is for logs only.
    """

    status_code: int = 500
    message: str = "Internal error"

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.message)
        self.detail = detail or self.message


class RequestConstructionError(UpstreamError):
    """Raised when the outbound request cannot be built."""

    message = "Error creating request"


class UpstreamTransportError(UpstreamError):
    """Raised on DNS, connect, protocol or timeout failures."""

    message = "Error sending request"


class UpstreamStatusError(UpstreamError):
    """Raised when the upstream answers with anything but 200."""

    message = "Error response status code"

    def __init__(self, status_code: int, reason: str = ""):
        super().__init__(f"{status_code} {reason}".strip())
        self.status_code = status_code
        self.reason = reason


class UpstreamDecodeError(UpstreamError):
    """Raised when the upstream body does not decode into a RepositorySummary."""

    message = "Error decoding response body"


class DiagnosticEncodeError(UpstreamError):
    """Raised when the diagnostic record cannot be serialized (strict mode only)."""

    message = "Error encoding log data"


class ResponseEncodeError(UpstreamError):
    """Raised when the summary cannot be encoded for the caller."""

    message = "Error encoding response body"


class ClientDisconnectedError(UpstreamError):
    """Raised when the caller went away before the upstream answered."""

    status_code = 499
    message = "Client closed request"
