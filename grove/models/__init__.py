"""Grove data models — all Pydantic v2, all frozen (immutable)."""

from grove.models.events import ErrorReport, LogEvent, Severity
from grove.models.reports import CrashReport, CrashReportKind

__all__ = [
    # events
    "Severity",
    "LogEvent",
    "ErrorReport",
    # reports
    "CrashReport",
    "CrashReportKind",
]
