"""
Repository lookup service.

Relays a single owner/repo lookup to the upstream repository API:
- Builds and sends one GET request (no retries)
- Maps transport, status and decode failures to UpstreamError subclasses
- Writes a diagnostic record of the exchange
"""

import logging
import time

import anyio
import httpx
from pydantic import ValidationError

from app.config import Settings
from app.core.tracing import TracingContext
from app.dtos.github import DiagnosticRecord, RepositorySummary
from app.services.diagnostics import collect_headers, emit_diagnostic_record
from app.services.github.exceptions import (
    RequestConstructionError,
    UpstreamDecodeError,
    UpstreamStatusError,
    UpstreamTransportError,
)

logger = logging.getLogger(__name__)


class RepositoryLookupService:
    """Looks up repositories on the upstream API."""

    def __init__(self, client: httpx.AsyncClient, config: Settings):
        self.client = client
        self.config = config

    def build_url(self, owner: str, repo: str) -> str:
        base_url = self.config.UPSTREAM_BASE_URL.rstrip("/")
        return f"{base_url}/repos/{owner}/{repo}"

    def build_request(self, owner: str, repo: str) -> httpx.Request:
        url = self.build_url(owner, repo)
        try:
            return self.client.build_request(
                "GET",
                url,
                headers={"User-Agent": self.config.UPSTREAM_USER_AGENT},
            )
        except (httpx.InvalidURL, ValueError, TypeError) as exc:
            logger.error(f"{TracingContext.get_log_prefix()}Error creating request: {exc}")
            raise RequestConstructionError(str(exc)) from exc

    async def lookup(self, owner: str, repo: str) -> RepositorySummary:
        """
        Fetch ``owner/repo`` from the upstream and return its summary.

        Raises:
            RequestConstructionError: the outbound request could not be built
            UpstreamTransportError: network failure or timeout
            UpstreamStatusError: upstream answered with a status other than 200
            UpstreamDecodeError: body is not a repository payload
            DiagnosticEncodeError: diagnostic record failed to encode (strict mode)
        """
        request = self.build_request(owner, repo)
        prefix = TracingContext.get_log_prefix()

        # The deadline covers the whole exchange; httpx timeouts only bound each step.
        started = time.perf_counter()
        try:
            with anyio.fail_after(self.config.UPSTREAM_TIMEOUT_SECONDS):
                response = await self.client.send(request, stream=True)
                elapsed = time.perf_counter() - started
                try:
                    if response.status_code == httpx.codes.OK:
                        await response.aread()
                finally:
                    await response.aclose()
        except (httpx.TransportError, TimeoutError) as exc:
            logger.error(f"{prefix}Error sending request: {exc!r}")
            raise UpstreamTransportError(str(exc)) from exc

        if response.status_code != httpx.codes.OK:
            logger.error(
                "%sError response status code: %d %s",
                prefix,
                response.status_code,
                _status_line(response),
            )
            raise UpstreamStatusError(response.status_code, response.reason_phrase)

        try:
            summary = RepositorySummary.model_validate_json(response.content)
        except ValidationError as exc:
            logger.error(f"{prefix}Error decoding response body: {exc}")
            raise UpstreamDecodeError(str(exc)) from exc

        record = DiagnosticRecord(
            method=request.method,
            url=str(request.url),
            headers=collect_headers(request.headers, self.config.DIAGNOSTICS_REDACT_HEADERS),
            elapsedTime=elapsed,
            status=_status_line(response),
            headersOut=collect_headers(response.headers, self.config.DIAGNOSTICS_REDACT_HEADERS),
            body=summary,
        )
        emit_diagnostic_record(record, strict=self.config.DIAGNOSTICS_STRICT)

        return summary


def _status_line(response: httpx.Response) -> str:
    return f"{response.status_code} {response.reason_phrase}".strip()
