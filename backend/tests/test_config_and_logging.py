import io
import json
import logging
import os
import unittest
from unittest.mock import patch

from app.config import Settings
from app.core.logging import DIAGNOSTICS_LOGGER, JSONFormatter, setup_diagnostics_logging
from app.core.tracing import TracingContext
from app.dtos.github import DiagnosticRecord
from app.middleware.error_codes import ErrorCode, get_error_code
from app.services.diagnostics import emit_diagnostic_record, encode_diagnostic_record


class SettingsTest(unittest.TestCase):
    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self):
        config = Settings()

        self.assertEqual(config.UPSTREAM_BASE_URL, "https://api.github.com")
        self.assertEqual(config.UPSTREAM_USER_AGENT, "my-github-api-client")
        self.assertEqual(config.UPSTREAM_TIMEOUT_SECONDS, 10.0)
        self.assertEqual(config.PORT, 8000)
        self.assertFalse(config.DIAGNOSTICS_STRICT)

    @patch.dict(
        os.environ,
        {
            "UPSTREAM_BASE_URL": "http://localhost:9000",
            "UPSTREAM_TIMEOUT_SECONDS": "2.5",
            "DIAGNOSTICS_STRICT": "true",
            "DIAGNOSTICS_REDACT_HEADERS": '["x-api-key"]',
        },
    )
    def test_environment_overrides(self):
        config = Settings()

        self.assertEqual(config.UPSTREAM_BASE_URL, "http://localhost:9000")
        self.assertEqual(config.UPSTREAM_TIMEOUT_SECONDS, 2.5)
        self.assertTrue(config.DIAGNOSTICS_STRICT)
        self.assertEqual(config.DIAGNOSTICS_REDACT_HEADERS, ["x-api-key"])


class JSONFormatterTest(unittest.TestCase):
    def tearDown(self):
        TracingContext.clear()

    def test_includes_tracing_context(self):
        TracingContext.set(correlation_id="abc-123", owner="octocat", repo="Hello-World")
        record = logging.LogRecord(
            "app.services.repository_lookup", logging.ERROR, __file__, 10,
            "Error sending request: %s", ("timeout",), None,
        )

        entry = json.loads(JSONFormatter().format(record))

        self.assertEqual(entry["message"], "Error sending request: timeout")
        self.assertEqual(entry["level"], "ERROR")
        self.assertEqual(entry["correlation_id"], "abc-123")
        self.assertEqual(entry["owner"], "octocat")
        self.assertEqual(entry["repo"], "Hello-World")

    def test_clear_resets_context(self):
        TracingContext.set(correlation_id="abc-123")
        self.assertEqual(TracingContext.get_log_prefix(), "[corr=abc-123] ")

        TracingContext.clear()

        self.assertEqual(TracingContext.get_log_prefix(), "")
        self.assertEqual(TracingContext.get()["correlation_id"], "")


class DiagnosticsLoggingTest(unittest.TestCase):
    def setUp(self):
        self.logger = logging.getLogger(DIAGNOSTICS_LOGGER)
        saved = (list(self.logger.handlers), self.logger.propagate, self.logger.level)
        self.logger.handlers = []
        self.addCleanup(self._restore, *saved)

    def _restore(self, handlers, propagate, level):
        self.logger.handlers = handlers
        self.logger.propagate = propagate
        self.logger.setLevel(level)

    @patch("sys.stdout", new_callable=io.StringIO)
    def test_record_is_written_as_bare_json_block(self, stdout):
        setup_diagnostics_logging()
        record = DiagnosticRecord(
            method="GET",
            url="https://api.github.com/repos/octocat/Hello-World",
            headers={"User-Agent": ["my-github-api-client"]},
            elapsedTime=0.1,
            status="200 OK",
            headersOut={},
            body={"id": 1296269, "name": "Hello-World", "owner": {"login": "octocat"}},
        )

        emit_diagnostic_record(record)

        output = stdout.getvalue()
        self.assertEqual(output, encode_diagnostic_record(record) + "\n")
        self.assertTrue(output.startswith("{\n    \"method\": \"GET\""))
        self.assertEqual(json.loads(output)["body"]["name"], "Hello-World")

    def test_records_do_not_reach_root_formatter(self):
        setup_diagnostics_logging()

        self.assertFalse(self.logger.propagate)
        self.assertEqual(len(self.logger.handlers), 1)
        self.assertEqual(self.logger.handlers[0].formatter._fmt, "%(message)s")

    def test_setup_is_idempotent(self):
        setup_diagnostics_logging()
        setup_diagnostics_logging()

        self.assertEqual(len(self.logger.handlers), 1)


class ErrorCodeTest(unittest.TestCase):
    def test_known_statuses(self):
        self.assertEqual(get_error_code(404), ErrorCode.NOT_FOUND)
        self.assertEqual(get_error_code(500), ErrorCode.INTERNAL_ERROR)
        self.assertEqual(get_error_code(499), ErrorCode.CLIENT_CLOSED_REQUEST)

    def test_unknown_statuses_fall_back_by_class(self):
        self.assertEqual(get_error_code(418), ErrorCode.BAD_REQUEST)
        self.assertEqual(get_error_code(599), ErrorCode.INTERNAL_ERROR)


if __name__ == "__main__":
    unittest.main()
