"""Crash-report transports — receiving end of the crash-reporting sink.

A transport exposes ``report(severity, tag, message)`` and is treated as
fire-and-forget: return values are ignored and failures propagate to the
dispatcher, which isolates them.  Transports that can accept structured
error data additionally implement ``report_error``.

Two implementations ship with Grove:

* ``InMemoryCrashTransport`` buffers ``CrashReport`` records for tests and
  for callers that upload in batches.
* ``LoggingCrashTransport`` forwards records to a stdlib logger, for
  environments without a real crash-reporting backend.
"""

from __future__ import annotations

import logging
import threading
from typing import Protocol, runtime_checkable

from grove.models.events import ErrorReport, Severity
from grove.models.reports import CrashReport, CrashReportKind

logger = logging.getLogger(__name__)

_STDLIB_LEVELS: dict[Severity, int] = {
    Severity.VERBOSE: logging.DEBUG,
    Severity.DEBUG: logging.DEBUG,
    Severity.INFO: logging.INFO,
    Severity.WARN: logging.WARNING,
    Severity.ERROR: logging.ERROR,
    Severity.ASSERT: logging.CRITICAL,
}


@runtime_checkable
class CrashReportTransport(Protocol):
    """Minimal crash-report backend interface."""

    def report(self, severity: Severity, tag: str | None, message: str) -> None:
        """Record one forwarded log line."""
        ...


@runtime_checkable
class ErrorReportingTransport(CrashReportTransport, Protocol):
    """A transport that also accepts structured error data."""

    def report_error(
        self, severity: Severity, tag: str | None, error: ErrorReport
    ) -> None:
        """Record an error attached to a forwarded log line."""
        ...


class InMemoryCrashTransport:
    """Buffers every received record in call order.

    Nothing is sent anywhere; call ``flush()`` to retrieve and clear the
    buffered records.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._reports: list[CrashReport] = []

    def report(self, severity: Severity, tag: str | None, message: str) -> None:
        record = CrashReport(severity=severity, tag=tag, message=message)
        with self._lock:
            self._reports.append(record)

    def report_error(
        self, severity: Severity, tag: str | None, error: ErrorReport
    ) -> None:
        record = CrashReport(
            kind=CrashReportKind.ERROR,
            severity=severity,
            tag=tag,
            message=error.summary,
            error=error,
        )
        with self._lock:
            self._reports.append(record)

    @property
    def reports(self) -> list[CrashReport]:
        """Return a copy of the buffered records."""
        with self._lock:
            return list(self._reports)

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._reports)

    def flush(self) -> list[CrashReport]:
        """Return and clear all buffered records."""
        with self._lock:
            records = list(self._reports)
            self._reports.clear()
        return records


class LoggingCrashTransport:
    """Forwards crash records to a stdlib logger.

    Parameters
    ----------
    target:
        Logger that receives the records.  Defaults to ``grove.crash``.
    """

    def __init__(self, target: logging.Logger | None = None) -> None:
        self._target = target or logging.getLogger("grove.crash")

    @property
    def target(self) -> logging.Logger:
        return self._target

    def report(self, severity: Severity, tag: str | None, message: str) -> None:
        self._target.log(
            _STDLIB_LEVELS[severity],
            "[%s] %s",
            tag or "-",
            message,
            extra={"grove_severity": severity.name, "grove_tag": tag},
        )

    def report_error(
        self, severity: Severity, tag: str | None, error: ErrorReport
    ) -> None:
        details = "\n".join(error.traceback) if error.traceback else error.summary
        self._target.log(
            _STDLIB_LEVELS[severity],
            "[%s] %s\n%s",
            tag or "-",
            error.summary,
            details,
            extra={"grove_severity": severity.name, "grove_tag": tag},
        )
