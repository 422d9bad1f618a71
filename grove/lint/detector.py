"""AST-based checker for misuse of the Grove logging facade.

Parses Python source with ``ast`` and reports ``Finding`` records for the
issues registered in ``grove.lint.issues``:

* stdlib ``logging`` calls where Grove should be used;
* messages pre-formatted with ``str.format``, f-strings, ``%`` or ``+``;
* exceptions passed as formatting arguments instead of first or as ``error=``;
* printf-style placeholders that do not match the arguments in count or type;
* literal tags longer than ``MAX_TAG_LENGTH``;
* ``str(e)`` messages logged together with ``error=e``.

Grove calls are recognised by shape: an attribute call named like a
convenience entry point on a receiver named ``grove``, ``dispatcher`` or
``log``, or on the result of ``.tagged(...)``.  A name bound to the
``logging`` module or to a ``getLogger`` result is never a Grove receiver.

Exceptions are recognised by name only: ``e``, ``ex``, ``exc``, ``err`` and
any name bound by an ``except ... as`` clause in the module.
"""

from __future__ import annotations

import ast
import logging
import re
from pathlib import Path

from grove.lint.issues import (
    ISSUE_ARG_COUNT,
    ISSUE_ARG_TYPES,
    ISSUE_BINARY,
    ISSUE_EXCEPTION_LOGGING,
    ISSUE_FORMAT,
    ISSUE_LOG,
    ISSUE_PARSE,
    ISSUE_TAG_LENGTH,
    ISSUE_THROWABLE,
    MAX_TAG_LENGTH,
    Finding,
    Issue,
)

logger = logging.getLogger(__name__)

GROVE_RECEIVERS = frozenset({"grove", "dispatcher", "log"})
GROVE_METHODS = frozenset(
    {"verbose", "debug", "info", "warn", "warning", "error", "wtf", "assert_", "log_at"}
)
STDLIB_METHODS = frozenset(
    {"debug", "info", "warning", "warn", "error", "exception", "critical", "fatal", "log"}
)
EXCEPTION_NAMES = frozenset({"e", "ex", "exc", "err"})

_PLACEHOLDER_RE = re.compile(
    r"%(?:\([^)]*\))?[#0\- +]*(?:\*|\d+)?(?:\.(?:\*|\d+))?[diouxXeEfFgGcrsa%]"
)
_NUMERIC_CONVERSIONS = frozenset("diouxXeEfFgG")


def count_placeholders(message: str) -> int:
    """Count printf-style placeholders in *message*, ignoring ``%%``."""
    return sum(1 for match in _PLACEHOLDER_RE.finditer(message) if match.group() != "%%")


def placeholder_conversions(message: str) -> list[str] | None:
    """Return the conversion character of each positional placeholder.

    ``None`` when the placeholders cannot be matched one-to-one with
    positional arguments (mapping keys or ``*`` widths).

    >>> placeholder_conversions("%s took %.2f s, %d%%")
    ['s', 'f', 'd']
    """
    conversions = []
    for match in _PLACEHOLDER_RE.finditer(message):
        text = match.group()
        if text == "%%":
            continue
        if "(" in text or "*" in text:
            return None
        conversions.append(text[-1])
    return conversions


def _literal_mismatch(conversion: str, value: object) -> str | None:
    """Describe why literal *value* cannot fill a ``%<conversion>`` placeholder."""
    if conversion in _NUMERIC_CONVERSIONS:
        if isinstance(value, (str, bytes)) or value is None:
            return f"'%{conversion}' needs a number, got {type(value).__name__}"
        if conversion in "oxX" and isinstance(value, float):
            return f"'%{conversion}' needs an integer, got float"
    elif conversion == "c":
        if isinstance(value, str) and len(value) != 1:
            return f"'%c' needs a single character, got a str of length {len(value)}"
        if isinstance(value, float) or value is None:
            return f"'%c' needs an int or a single character, got {type(value).__name__}"
    return None


class UsageVisitor(ast.NodeVisitor):
    """Collects findings for one parsed module."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.findings: list[Finding] = []
        self._logging_aliases: set[str] = set()
        # Local name -> logging function, from ``from logging import info``.
        self._logging_functions: dict[str, str] = {}
        self._get_logger_names: set[str] = set()
        self._stdlib_loggers: set[str] = set()
        self._tagged_names: set[str] = set()
        self._exception_names: set[str] = set(EXCEPTION_NAMES)

    # ------------------------------------------------------------------
    # Name tracking
    # ------------------------------------------------------------------

    def visit_Import(self, node: ast.Import) -> None:
        for alias in node.names:
            if alias.name == "logging":
                self._logging_aliases.add(alias.asname or "logging")
            elif alias.name.startswith("logging.") and alias.asname is None:
                # import logging.handlers also binds ``logging``
                self._logging_aliases.add("logging")
        self.generic_visit(node)

    def visit_ImportFrom(self, node: ast.ImportFrom) -> None:
        if node.module == "logging" and not node.level:
            for alias in node.names:
                bound = alias.asname or alias.name
                if alias.name == "getLogger":
                    self._get_logger_names.add(bound)
                elif alias.name in STDLIB_METHODS:
                    self._logging_functions[bound] = alias.name
        self.generic_visit(node)

    def visit_ExceptHandler(self, node: ast.ExceptHandler) -> None:
        if node.name:
            self._exception_names.add(node.name)
        self.generic_visit(node)

    def visit_Assign(self, node: ast.Assign) -> None:
        value = node.value
        for target in node.targets:
            if not isinstance(target, ast.Name):
                continue
            if self._is_get_logger(value):
                self._stdlib_loggers.add(target.id)
            elif self._is_tagged_call(value):
                self._tagged_names.add(target.id)
        self.generic_visit(node)

    def _is_get_logger(self, node: ast.expr) -> bool:
        if not isinstance(node, ast.Call):
            return False
        func = node.func
        if isinstance(func, ast.Name):
            return func.id in self._get_logger_names
        return (
            isinstance(func, ast.Attribute)
            and func.attr == "getLogger"
            and isinstance(func.value, ast.Name)
            and func.value.id in self._logging_aliases
        )

    def _is_tagged_call(self, node: ast.expr) -> bool:
        return (
            isinstance(node, ast.Call)
            and isinstance(node.func, ast.Attribute)
            and node.func.attr == "tagged"
            and self._is_grove_receiver(node.func.value)
        )

    def _is_grove_receiver(self, node: ast.expr) -> bool:
        if isinstance(node, ast.Name):
            if node.id in self._stdlib_loggers or node.id in self._logging_aliases:
                return False
            return node.id in GROVE_RECEIVERS or node.id in self._tagged_names
        if isinstance(node, ast.Attribute):
            # self.dispatcher.info(...)
            return node.attr in GROVE_RECEIVERS
        return self._is_tagged_call(node)

    # ------------------------------------------------------------------
    # Calls
    # ------------------------------------------------------------------

    def visit_Call(self, node: ast.Call) -> None:
        func = node.func
        if isinstance(func, ast.Attribute):
            if func.attr == "tagged" and self._is_grove_receiver(func.value):
                if node.args:
                    self._check_tag(node.args[0])
            elif func.attr in GROVE_METHODS and self._is_grove_receiver(func.value):
                self._check_grove_call(node, func.attr)
            elif func.attr in STDLIB_METHODS and self._is_stdlib_receiver(func.value):
                self._report(
                    ISSUE_LOG, node, f"Using 'logging.{func.attr}' instead of 'Grove'"
                )
        elif isinstance(func, ast.Name) and func.id in self._logging_functions:
            self._report(
                ISSUE_LOG,
                node,
                f"Using 'logging.{self._logging_functions[func.id]}' instead of 'Grove'",
            )
        self.generic_visit(node)

    def _is_stdlib_receiver(self, node: ast.expr) -> bool:
        if isinstance(node, ast.Name):
            return node.id in self._logging_aliases or node.id in self._stdlib_loggers
        return self._is_get_logger(node)

    def _check_grove_call(self, node: ast.Call, method: str) -> None:
        args = list(node.args)
        if method == "log_at":
            # First positional argument is the severity.
            args = args[1:]

        for keyword in node.keywords:
            if keyword.arg == "tag":
                self._check_tag(keyword.value)

        if not args:
            return
        message, format_args = args[0], args[1:]
        leading_error = None
        if self._is_exception_name(message) and format_args:
            # error(exc, "message %s", arg)
            leading_error, message, format_args = message, format_args[0], format_args[1:]
        error_kw = next(
            (kw.value for kw in node.keywords if kw.arg == "error"), leading_error
        )

        for arg in format_args:
            if self._is_exception_name(arg):
                self._report(
                    ISSUE_THROWABLE,
                    arg,
                    f"Pass '{arg.id}' as the first argument or as error={arg.id}",
                )

        if isinstance(message, ast.JoinedStr):
            if error_kw is not None and _is_fstring_of(message, error_kw):
                self._report_redundant_exception(message)
            else:
                self._report(ISSUE_FORMAT, message, "Using an f-string inside of 'Grove'")
        elif _is_str_format_call(message):
            self._report(ISSUE_FORMAT, message, "Using 'str.format' inside of 'Grove'")
        elif isinstance(message, ast.BinOp) and isinstance(message.op, ast.Mod) and _is_str_literal(message.left):
            self._report(ISSUE_FORMAT, message, "Using '%' formatting inside of 'Grove'")
        elif isinstance(message, ast.BinOp) and isinstance(message.op, ast.Add) and _involves_str(message):
            self._report(
                ISSUE_BINARY,
                message,
                "Replace string concatenation with printf-style arguments",
            )
        elif error_kw is not None and _is_str_of(message, error_kw):
            self._report_redundant_exception(message)
        elif _is_str_literal(message):
            self._check_arg_count(message, format_args)
            self._check_arg_types(message, format_args)

    def _is_exception_name(self, node: ast.expr) -> bool:
        return isinstance(node, ast.Name) and node.id in self._exception_names

    def _check_arg_types(self, message: ast.Constant, format_args: list[ast.expr]) -> None:
        conversions = placeholder_conversions(message.value)
        if conversions is None or len(conversions) != len(format_args):
            return
        for index, (conversion, arg) in enumerate(zip(conversions, format_args), start=1):
            if not isinstance(arg, ast.Constant):
                continue
            problem = _literal_mismatch(conversion, arg.value)
            if problem is not None:
                self._report(
                    ISSUE_ARG_TYPES,
                    arg,
                    f"Wrong argument type for formatting argument #{index} "
                    f"in {message.value!r}: {problem}",
                )

    def _check_arg_count(self, message: ast.Constant, format_args: list[ast.expr]) -> None:
        if not format_args or any(isinstance(arg, ast.Starred) for arg in format_args):
            return
        expected = count_placeholders(message.value)
        if expected != len(format_args):
            self._report(
                ISSUE_ARG_COUNT,
                message,
                f"Wrong argument count, message {message.value!r} requires "
                f"{expected} but call supplies {len(format_args)}",
            )

    def _check_tag(self, node: ast.expr) -> None:
        if _is_str_literal(node) and len(node.value) > MAX_TAG_LENGTH:
            self._report(
                ISSUE_TAG_LENGTH,
                node,
                f"The logging tag can be at most {MAX_TAG_LENGTH} characters, "
                f"was {len(node.value)} ({node.value})",
            )

    def _report_redundant_exception(self, node: ast.expr) -> None:
        self._report(
            ISSUE_EXCEPTION_LOGGING,
            node,
            "Explicitly logging exception message is redundant",
        )

    def _report(self, issue: Issue, node: ast.AST, message: str) -> None:
        self.findings.append(
            Finding(
                issue=issue,
                path=self.path,
                line=getattr(node, "lineno", 0),
                column=getattr(node, "col_offset", -1) + 1,
                message=message,
            )
        )


def _is_str_literal(node: ast.expr) -> bool:
    return isinstance(node, ast.Constant) and isinstance(node.value, str)


def _is_str_format_call(node: ast.expr) -> bool:
    return (
        isinstance(node, ast.Call)
        and isinstance(node.func, ast.Attribute)
        and node.func.attr == "format"
        and _is_str_literal(node.func.value)
    )


def _involves_str(node: ast.expr) -> bool:
    if _is_str_literal(node) or isinstance(node, ast.JoinedStr):
        return True
    if isinstance(node, ast.BinOp) and isinstance(node.op, ast.Add):
        return _involves_str(node.left) or _involves_str(node.right)
    return False


def _same_name(node: ast.expr, other: ast.expr) -> bool:
    return isinstance(node, ast.Name) and isinstance(other, ast.Name) and node.id == other.id


def _is_str_of(node: ast.expr, error: ast.expr) -> bool:
    """``str(e)`` where ``e`` is the error passed to the call."""
    return (
        isinstance(node, ast.Call)
        and isinstance(node.func, ast.Name)
        and node.func.id == "str"
        and len(node.args) == 1
        and _same_name(node.args[0], error)
    )


def _is_fstring_of(node: ast.JoinedStr, error: ast.expr) -> bool:
    """``f"{e}"`` where ``e`` is the error passed to the call."""
    return (
        len(node.values) == 1
        and isinstance(node.values[0], ast.FormattedValue)
        and _same_name(node.values[0].value, error)
    )


def check_source(source: str, filename: str | Path = "<string>") -> list[Finding]:
    """Check one module's source text and return its findings."""
    path = Path(filename)
    try:
        tree = ast.parse(source, filename=str(path))
    except SyntaxError as exc:
        return [
            Finding(
                issue=ISSUE_PARSE,
                path=path,
                line=exc.lineno or 0,
                column=exc.offset or 0,
                message=f"Could not parse: {exc.msg}",
            )
        ]
    visitor = UsageVisitor(path)
    visitor.visit(tree)
    return sorted(visitor.findings, key=lambda f: (f.line, f.column, f.issue.id))


def check_path(path: str | Path) -> list[Finding]:
    """Check a file, or every ``*.py`` file under a directory."""
    root = Path(path)
    if not root.exists():
        raise FileNotFoundError(f"No such file or directory: {root}")
    files = sorted(root.rglob("*.py")) if root.is_dir() else [root]

    findings: list[Finding] = []
    for file in files:
        logger.debug("Checking %s", file)
        try:
            source = file.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            findings.append(
                Finding(
                    issue=ISSUE_PARSE,
                    path=file,
                    line=0,
                    column=0,
                    message=f"Could not decode as UTF-8: {exc.reason}",
                )
            )
            continue
        findings.extend(check_source(source, file))
    return findings
