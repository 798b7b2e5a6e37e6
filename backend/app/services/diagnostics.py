"""
Diagnostic record helpers.

Every successfully decoded upstream exchange is written to the ``app.diagnostics``
logger as an indented JSON block. Header values that carry credentials are
masked before they reach the log.
"""

import json
import logging
from typing import Dict, Iterable, List

import httpx
from pydantic_core import PydanticSerializationError

from app.core.logging import DIAGNOSTICS_LOGGER
from app.dtos.github import DiagnosticRecord
from app.services.github.exceptions import DiagnosticEncodeError

logger = logging.getLogger(__name__)
diagnostics_logger = logging.getLogger(DIAGNOSTICS_LOGGER)


def mask_value(value: str) -> str:
    """Mask a header value to show only its last 4 characters."""
    if not value or len(value) <= 8:
        return "****"
    return f"****{value[-4:]}"


def collect_headers(headers: httpx.Headers, redact: Iterable[str] = ()) -> Dict[str, List[str]]:
    """Group headers as name -> values, keeping the names as sent on the wire."""
    redacted = {name.lower() for name in redact}
    collected: Dict[str, List[str]] = {}
    for raw_name, raw_value in headers.raw:
        name = raw_name.decode(headers.encoding)
        value = raw_value.decode(headers.encoding)
        if name.lower() in redacted:
            value = mask_value(value)
        collected.setdefault(name, []).append(value)
    return collected


def encode_diagnostic_record(record: DiagnosticRecord) -> str:
    return json.dumps(record.model_dump(mode="json"), indent=4)


def emit_diagnostic_record(record: DiagnosticRecord, strict: bool = False) -> None:
    """
    Write the record to the diagnostics log.

    Encoding problems are logged and swallowed unless ``strict`` is set, in
    which case DiagnosticEncodeError is raised and the request fails.
    """
    try:
        payload = encode_diagnostic_record(record)
    except (TypeError, ValueError, PydanticSerializationError) as exc:
        if strict:
            logger.error(f"Error encoding log data: {exc}")
            raise DiagnosticEncodeError(str(exc)) from exc
        logger.warning(f"Skipping diagnostic record, encoding failed: {exc}")
        return

    diagnostics_logger.info(payload)
