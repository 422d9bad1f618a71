"""Unit tests for the event and crash report models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from grove.models.events import ErrorReport, LogEvent, Severity
from grove.models.reports import CrashReport, CrashReportKind


class TestSeverity:
    def test_ordering(self):
        assert (
            Severity.VERBOSE
            < Severity.DEBUG
            < Severity.INFO
            < Severity.WARN
            < Severity.ERROR
            < Severity.ASSERT
        )

    def test_platform_priorities(self):
        assert int(Severity.VERBOSE) == 2
        assert int(Severity.ASSERT) == 7

    def test_labels(self):
        assert [s.label for s in Severity] == ["V", "D", "I", "W", "E", "A"]


class TestLogEvent:
    def test_minimal_event(self):
        event = LogEvent(severity=Severity.INFO, message="loaded")
        assert event.tag is None
        assert event.error is None
        assert event.has_error is False

    def test_empty_message_allowed(self):
        event = LogEvent(severity=Severity.DEBUG, message="")
        assert event.message == ""

    def test_message_required(self):
        with pytest.raises(ValidationError):
            LogEvent(severity=Severity.DEBUG)

    def test_message_not_none(self):
        with pytest.raises(ValidationError):
            LogEvent(severity=Severity.DEBUG, message=None)

    def test_severity_coerced_from_int(self):
        event = LogEvent(severity=6, message="x")
        assert event.severity is Severity.ERROR

    def test_unknown_severity_rejected(self):
        with pytest.raises(ValidationError):
            LogEvent(severity=42, message="x")

    def test_frozen(self):
        event = LogEvent(severity=Severity.INFO, message="loaded")
        with pytest.raises(ValidationError):
            event.message = "changed"

    def test_equality_is_field_wise(self):
        error = ValueError("bad")
        a = LogEvent(severity=Severity.WARN, tag="UI", message="m", error=error)
        b = LogEvent(severity=Severity.WARN, tag="UI", message="m", error=error)
        assert a == b

    def test_error_absent_vs_empty_description(self):
        absent = LogEvent(severity=Severity.ERROR, message="m")
        empty = LogEvent(severity=Severity.ERROR, message="m", error=RuntimeError())
        assert absent.describe_error() is None
        assert empty.describe_error() == ""
        assert empty.has_error is True

    def test_error_must_be_exception(self):
        with pytest.raises(ValidationError):
            LogEvent(severity=Severity.ERROR, message="m", error="not an exception")


class TestErrorReport:
    def test_from_exception_without_traceback(self):
        report = ErrorReport.from_exception(TimeoutError("socket closed"))
        assert report.type_name == "TimeoutError"
        assert report.description == "socket closed"
        assert report.summary == "TimeoutError: socket closed"

    def test_from_raised_exception_captures_traceback(self, raised_timeout):
        report = ErrorReport.from_exception(raised_timeout)
        assert report.traceback
        assert report.traceback[0].startswith("Traceback")
        assert report.traceback[-1] == "TimeoutError: socket closed"

    def test_traceback_capture_disabled(self, raised_timeout):
        report = ErrorReport.from_exception(raised_timeout, include_traceback=False)
        assert report.traceback == []

    def test_summary_without_description(self):
        report = ErrorReport.from_exception(KeyboardInterrupt())
        assert report.summary == "KeyboardInterrupt"


class TestCrashReport:
    def test_defaults(self):
        report = CrashReport(severity=Severity.INFO, tag="UI", message="loaded")
        assert report.kind is CrashReportKind.MESSAGE
        assert report.error is None
        assert report.as_triple() == ("UI", "loaded", Severity.INFO)
