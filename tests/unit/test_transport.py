"""Unit tests for the crash-report transports."""

from __future__ import annotations

import logging

from grove.models.events import ErrorReport, Severity
from grove.models.reports import CrashReportKind
from grove.routing.transport import (
    CrashReportTransport,
    ErrorReportingTransport,
    InMemoryCrashTransport,
    LoggingCrashTransport,
)


class TestInMemoryCrashTransport:
    def test_protocol_compliance(self, transport):
        assert isinstance(transport, CrashReportTransport)
        assert isinstance(transport, ErrorReportingTransport)

    def test_report_buffers_in_order(self, transport):
        transport.report(Severity.INFO, "A", "one")
        transport.report(Severity.WARN, "B", "two")

        assert [r.as_triple() for r in transport.reports] == [
            ("A", "one", Severity.INFO),
            ("B", "two", Severity.WARN),
        ]
        assert transport.pending_count == 2

    def test_report_error_record(self, transport):
        error = ErrorReport(type_name="KeyError", description="'k'")

        transport.report_error(Severity.ERROR, "Cache", error)

        record = transport.reports[0]
        assert record.kind is CrashReportKind.ERROR
        assert record.message == "KeyError: 'k'"
        assert record.error == error

    def test_flush_returns_and_clears(self, transport):
        transport.report(Severity.DEBUG, None, "m")

        flushed = transport.flush()

        assert len(flushed) == 1
        assert transport.pending_count == 0
        assert transport.flush() == []


class TestLoggingCrashTransport:
    def test_default_target(self):
        assert LoggingCrashTransport().target.name == "grove.crash"

    def test_report_maps_severity_to_level(self, caplog):
        target = logging.getLogger("grove.test.crash")
        transport = LoggingCrashTransport(target)

        with caplog.at_level(logging.DEBUG, logger="grove.test.crash"):
            transport.report(Severity.WARN, "Net", "slow response")
            transport.report(Severity.ASSERT, None, "impossible")

        first, second = caplog.records
        assert first.levelno == logging.WARNING
        assert first.getMessage() == "[Net] slow response"
        assert first.grove_severity == "WARN"
        assert second.levelno == logging.CRITICAL
        assert second.getMessage() == "[-] impossible"

    def test_report_error_includes_traceback(self, caplog, raised_timeout):
        transport = LoggingCrashTransport(logging.getLogger("grove.test.crash"))
        error = ErrorReport.from_exception(raised_timeout)

        with caplog.at_level(logging.ERROR, logger="grove.test.crash"):
            transport.report_error(Severity.ERROR, "Net", error)

        text = caplog.records[0].getMessage()
        assert text.startswith("[Net] TimeoutError: socket closed\n")
        assert "Traceback (most recent call last):" in text
