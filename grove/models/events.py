"""Log event model — one immutable record per logging call.

A ``LogEvent`` is created by the dispatcher's convenience entry points (or
directly by callers), handed to ``Dispatcher.log`` and discarded once every
installed sink has processed it.  Events are frozen Pydantic models: any
attempt to mutate one after construction raises ``ValidationError``.
"""

from __future__ import annotations

import traceback
from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field


class Severity(IntEnum):
    """Ordered log severities.

    Values follow the numeric priorities used by mobile platform loggers so
    that crash-reporting backends receive familiar numbers.
    """

    VERBOSE = 2
    DEBUG = 3
    INFO = 4
    WARN = 5
    ERROR = 6
    ASSERT = 7

    @property
    def label(self) -> str:
        """One-letter code used in rendered log lines (``V``, ``D``, ...)."""
        return self.name[0]


class LogEvent(BaseModel):
    """A single logged occurrence.

    ``tag`` is optional: ``None`` means the origin should be derived from
    caller context by whoever renders the event.  ``error`` is optional and
    its absence is distinct from an error whose description is empty.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    severity: Severity
    tag: str | None = None
    message: str
    error: BaseException | None = None

    @property
    def has_error(self) -> bool:
        return self.error is not None

    def describe_error(self) -> str | None:
        """Return the attached error's description, or ``None`` if absent."""
        if self.error is None:
            return None
        return str(self.error)


class ErrorReport(BaseModel):
    """Serializable summary of an exception attached to an event."""

    model_config = ConfigDict(frozen=True)

    type_name: str
    description: str
    traceback: list[str] = Field(default_factory=list)

    @classmethod
    def from_exception(
        cls, error: BaseException, *, include_traceback: bool = True
    ) -> ErrorReport:
        lines: list[str] = []
        if include_traceback:
            lines = [
                line.rstrip("\n")
                for line in traceback.format_exception(
                    type(error), error, error.__traceback__
                )
            ]
        return cls(
            type_name=type(error).__name__,
            description=str(error),
            traceback=lines,
        )

    @property
    def summary(self) -> str:
        """``"<type>: <description>"``, or just the type when undescribed."""
        if not self.description:
            return self.type_name
        return f"{self.type_name}: {self.description}"
