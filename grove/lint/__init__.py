"""Grove usage checker — flags misuse of the logging facade in source code."""

from grove.lint.detector import check_path, check_source
from grove.lint.issues import ISSUES, Finding, Issue, IssueSeverity, get_issue

__all__ = [
    "check_path",
    "check_source",
    "ISSUES",
    "Finding",
    "Issue",
    "IssueSeverity",
    "get_issue",
]
