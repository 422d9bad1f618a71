"""Crash report records — what a crash-reporting transport has received."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from grove.models.events import ErrorReport, Severity


class CrashReportKind(str, Enum):
    """Whether a record came from ``report`` or ``report_error``."""

    MESSAGE = "message"
    ERROR = "error"


class CrashReport(BaseModel):
    """One record accepted by a crash-reporting transport."""

    model_config = ConfigDict(frozen=True)

    kind: CrashReportKind = CrashReportKind.MESSAGE
    severity: Severity
    tag: str | None = None
    message: str
    error: ErrorReport | None = None
    received_utc: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    def as_triple(self) -> tuple[str | None, str, Severity]:
        """Return ``(tag, message, severity)`` for compact comparisons."""
        return (self.tag, self.message, self.severity)
