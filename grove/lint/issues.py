"""Issue registry for the Grove usage checker.

Each ``Issue`` describes one kind of misuse of the logging facade.  The
checker reports ``Finding`` records that point at a registered issue.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict

# Tags longer than this are truncated by legacy platform loggers.
MAX_TAG_LENGTH = 23


class IssueSeverity(str, Enum):
    WARNING = "warning"
    ERROR = "error"


class Issue(BaseModel):
    """A registered usage rule."""

    model_config = ConfigDict(frozen=True)

    id: str
    brief: str
    explanation: str
    severity: IssueSeverity


class Finding(BaseModel):
    """One occurrence of an issue in a source file."""

    model_config = ConfigDict(frozen=True)

    issue: Issue
    path: Path
    line: int
    column: int
    message: str

    @property
    def is_error(self) -> bool:
        return self.issue.severity is IssueSeverity.ERROR


ISSUE_LOG = Issue(
    id="LogNotGrove",
    brief="Logging call to logging instead of Grove",
    explanation=(
        "Since Grove is used in the project, calls to the standard logging "
        "module should instead go through the Grove dispatcher."
    ),
    severity=IssueSeverity.WARNING,
)

ISSUE_FORMAT = Issue(
    id="StringFormatInGrove",
    brief="Logging call with Grove contains str.format() or an f-string",
    explanation=(
        "Grove applies printf-style arguments itself; pass the arguments "
        "to the logging call instead of formatting the message up front."
    ),
    severity=IssueSeverity.WARNING,
)

ISSUE_THROWABLE = Issue(
    id="ThrowableNotAtBeginning",
    brief="Exception in Grove call not at the beginning",
    explanation=(
        "Pass an exception as the first argument of the logging call or as "
        "error=, so sinks receive it as the event's error instead of as a "
        "formatting argument."
    ),
    severity=IssueSeverity.WARNING,
)

ISSUE_ARG_TYPES = Issue(
    id="GroveArgTypes",
    brief="Formatting string doesn't match passed arguments",
    explanation=(
        "The conversion types in the message's %-placeholders do not match "
        "the types of the literal arguments passed to the logging call."
    ),
    severity=IssueSeverity.ERROR,
)

ISSUE_BINARY = Issue(
    id="BinaryOperationInGrove",
    brief="Use printf-style arguments",
    explanation=(
        "Grove handles message formatting, use printf-style arguments "
        "instead of string concatenation."
    ),
    severity=IssueSeverity.WARNING,
)

ISSUE_ARG_COUNT = Issue(
    id="GroveArgCount",
    brief="Formatting arguments do not match the message",
    explanation=(
        "When a message contains %-placeholders, the logging call must pass "
        "exactly that many positional arguments."
    ),
    severity=IssueSeverity.ERROR,
)

ISSUE_TAG_LENGTH = Issue(
    id="GroveTagLength",
    brief="Too long log tags",
    explanation=f"Log tags should be at most {MAX_TAG_LENGTH} characters long.",
    severity=IssueSeverity.ERROR,
)

ISSUE_EXCEPTION_LOGGING = Issue(
    id="GroveExceptionLogging",
    brief="Exception logging",
    explanation=(
        "Explicitly including the exception message is redundant when "
        "supplying an exception to log."
    ),
    severity=IssueSeverity.WARNING,
)

ISSUE_PARSE = Issue(
    id="ParseError",
    brief="File could not be parsed",
    explanation="The checker could not parse the file as Python source.",
    severity=IssueSeverity.ERROR,
)

ISSUES: list[Issue] = [
    ISSUE_LOG,
    ISSUE_FORMAT,
    ISSUE_THROWABLE,
    ISSUE_BINARY,
    ISSUE_ARG_COUNT,
    ISSUE_ARG_TYPES,
    ISSUE_TAG_LENGTH,
    ISSUE_EXCEPTION_LOGGING,
]


def get_issue(issue_id: str) -> Issue:
    """Look up a registered issue by id (``ParseError`` included)."""
    for issue in (*ISSUES, ISSUE_PARSE):
        if issue.id == issue_id:
            return issue
    raise KeyError(f"Unknown issue id: {issue_id}")
