"""Shared test fixtures for Grove."""

from __future__ import annotations

import io
from collections.abc import Callable
from typing import Any

import pytest
from rich.console import Console

from grove.models.events import LogEvent, Severity
from grove.routing.dispatcher import Dispatcher
from grove.routing.transport import InMemoryCrashTransport


class RecordingSink:
    """A sink that remembers every event it handled."""

    def __init__(self, name: str = "recording", journal: list[tuple[str, LogEvent]] | None = None) -> None:
        self._name = name
        self.received: list[LogEvent] = []
        self._journal = journal

    @property
    def sink_name(self) -> str:
        return self._name

    def handle(self, event: LogEvent) -> None:
        self.received.append(event)
        if self._journal is not None:
            self._journal.append((self._name, event))


class FailingSink:
    """A sink that always raises."""

    def __init__(self, name: str = "failing", error: Exception | None = None) -> None:
        self._name = name
        self._error = error or RuntimeError("Sink failure for testing")
        self.calls = 0

    @property
    def sink_name(self) -> str:
        return self._name

    def handle(self, event: LogEvent) -> None:
        self.calls += 1
        raise self._error


class ReportOnlyTransport:
    """A transport offering only ``report``."""

    def __init__(self) -> None:
        self.calls: list[tuple[Severity, str | None, str]] = []

    def report(self, severity: Severity, tag: str | None, message: str) -> None:
        self.calls.append((severity, tag, message))


@pytest.fixture
def dispatcher() -> Dispatcher:
    """Provide a fresh dispatcher with no sinks installed."""
    return Dispatcher()


@pytest.fixture
def transport() -> InMemoryCrashTransport:
    """Provide an empty in-memory crash transport."""
    return InMemoryCrashTransport()


@pytest.fixture
def report_only_transport() -> ReportOnlyTransport:
    return ReportOnlyTransport()


@pytest.fixture
def make_recording_sink() -> Callable[..., RecordingSink]:
    return RecordingSink


@pytest.fixture
def make_failing_sink() -> Callable[..., FailingSink]:
    return FailingSink


@pytest.fixture
def console_output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(console_output: io.StringIO) -> Console:
    """Provide a plain, wide Rich console writing into ``console_output``."""
    return Console(
        file=console_output,
        width=200,
        color_system=None,
        force_terminal=False,
        highlight=False,
    )


# ---------------------------------------------------------------------------
# Event factories — shared across test modules
# ---------------------------------------------------------------------------


@pytest.fixture
def make_event() -> Callable[..., LogEvent]:
    """Factory fixture: build a LogEvent with sensible defaults."""

    def _factory(
        severity: Severity = Severity.INFO,
        message: str = "test message",
        **overrides: Any,
    ) -> LogEvent:
        defaults: dict[str, Any] = {
            "severity": severity,
            "tag": "Test",
            "message": message,
        }
        defaults.update(overrides)
        return LogEvent(**defaults)

    return _factory


@pytest.fixture
def raised_timeout() -> TimeoutError:
    """A TimeoutError carrying a real traceback."""
    try:
        raise TimeoutError("socket closed")
    except TimeoutError as exc:
        return exc
