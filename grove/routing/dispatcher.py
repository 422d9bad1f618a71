"""Dispatcher — fans every log event out to ALL installed sinks.

Each event logged through a ``Dispatcher`` is delivered to every installed
sink, in installation order, synchronously on the calling thread.  A sink
failure never prevents delivery to the remaining sinks and never reaches
the caller: failures are recorded as ``SinkFailure`` values and reported on
the stdlib ``logging`` side channel (and to an optional callback).

The dispatcher is an ordinary object, constructed and passed explicitly.
Installs are expected once at startup; reads happen on every ``log`` call.
The installed sinks are kept in an immutable tuple that writers replace
under a lock, so readers always iterate a consistent snapshot.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from grove.models.events import LogEvent, Severity
from grove.routing.sinks import Sink

logger = logging.getLogger(__name__)


class SinkFailure(BaseModel):
    """Record of one sink failing to handle one event."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    sink_name: str
    event: LogEvent
    error: Exception


FailureCallback = Callable[[SinkFailure], None]


def format_message(message: str, args: tuple[Any, ...]) -> str:
    """Apply printf-style *args* to *message*.

    A message that does not accept the given arguments is kept as-is with
    the arguments appended, so a bad format string never loses the data.
    Never raises, even when an argument's own ``__str__``/``__repr__`` does.
    """
    if not args:
        return message
    # A single mapping argument feeds %(name)s placeholders, as in stdlib logging.
    values: Any = args[0] if len(args) == 1 and isinstance(args[0], Mapping) else args
    try:
        return message % values
    except Exception as exc:  # noqa: BLE001
        logger.debug("Could not format %r: %s", message, type(exc).__name__)
        return f"{message} [{', '.join(_safe_repr(arg) for arg in args)}]"


def _safe_repr(value: Any) -> str:
    try:
        return repr(value)
    except Exception:  # noqa: BLE001
        return f"<unrepresentable {type(value).__name__}>"


def _safe_str(value: Any) -> str:
    try:
        return str(value)
    except Exception:  # noqa: BLE001
        return _safe_repr(value)


class Dispatcher:
    """Routes log events to ALL installed sinks.

    Usage
    -----
    >>> dispatcher = Dispatcher()
    >>> dispatcher.install(DebugSink())
    >>> dispatcher.info("loaded %d items", 3, tag="UI")

    Parameters
    ----------
    on_failure:
        Optional callback invoked with a ``SinkFailure`` whenever a sink
        raises.  It must not log through this dispatcher.
    """

    def __init__(self, on_failure: FailureCallback | None = None) -> None:
        self._sinks: tuple[Sink, ...] = ()
        self._lock = threading.Lock()
        self._on_failure = on_failure

    # ------------------------------------------------------------------
    # Sink management
    # ------------------------------------------------------------------

    def install(self, sink: Sink) -> None:
        """Append *sink* to the installed sinks.

        Installing the same sink twice makes it receive every event twice.
        """
        if not isinstance(sink, Sink):
            raise TypeError(
                f"{type(sink).__name__} does not implement the Sink protocol "
                "(sink_name, handle)"
            )
        with self._lock:
            self._sinks = (*self._sinks, sink)
        logger.info("Installed sink: %s", sink.sink_name)

    def install_all(self, *sinks: Sink) -> None:
        """Install several sinks, in the order given."""
        for sink in sinks:
            self.install(sink)

    def uninstall(self, sink: Sink) -> None:
        """Remove the first installed occurrence of *sink*.

        Raises
        ------
        ValueError
            If *sink* is not installed.
        """
        with self._lock:
            sinks = list(self._sinks)
            try:
                sinks.remove(sink)
            except ValueError:
                raise ValueError(f"Cannot uninstall {sink!r}: not installed") from None
            self._sinks = tuple(sinks)
        logger.info("Uninstalled sink: %s", sink.sink_name)

    def uninstall_all(self) -> None:
        """Remove every installed sink."""
        with self._lock:
            count = len(self._sinks)
            self._sinks = ()
        logger.info("Uninstalled all sinks (%d)", count)

    @property
    def sinks(self) -> list[Sink]:
        """Return a copy of the installed sinks, in installation order."""
        return list(self._sinks)

    @property
    def sink_count(self) -> int:
        return len(self._sinks)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def log(self, event: LogEvent) -> list[str]:
        """Deliver *event* to ALL installed sinks.

        Returns the names of the sinks that handled the event.  Sink
        failures are recorded and reported but never raised.  With no
        sinks installed the event is dropped.
        """
        sinks = self._sinks
        if not sinks:
            logger.debug("No sinks installed; %s event dropped", event.severity.name)
            return []

        handled: list[str] = []
        for sink in sinks:
            try:
                sink.handle(event)
            except Exception as exc:  # noqa: BLE001
                self._report_failure(SinkFailure(
                    sink_name=_sink_name(sink), event=event, error=exc,
                ))
            else:
                handled.append(_sink_name(sink))
        return handled

    def _report_failure(self, failure: SinkFailure) -> None:
        logger.error(
            "Sink %s failed for %s event (tag=%s): %s",
            failure.sink_name,
            failure.event.severity.name,
            failure.event.tag,
            failure.error,
        )
        if self._on_failure is None:
            return
        try:
            self._on_failure(failure)
        except Exception:  # noqa: BLE001
            logger.exception("Sink failure callback raised")

    # ------------------------------------------------------------------
    # Convenience entry points
    # ------------------------------------------------------------------

    def log_at(
        self,
        severity: Severity,
        message: str | BaseException = "",
        *args: Any,
        tag: str | None = None,
        error: BaseException | None = None,
    ) -> list[str]:
        """Build an event from the arguments and ``log`` it.

        An exception may be passed in place of the message
        (``dispatcher.error(exc, "request %s failed", url)``); the first
        remaining argument is then the message and the rest format it.  With
        no further arguments the message is empty.
        """
        if isinstance(message, BaseException):
            if error is None:
                error = message
            message, args = (args[0], args[1:]) if args else ("", ())
        if not isinstance(message, str):
            message = _safe_str(message)
        event = LogEvent(
            severity=severity,
            tag=tag,
            message=format_message(message, args),
            error=error,
        )
        return self.log(event)

    def verbose(self, message: str | BaseException = "", *args: Any, **kwargs: Any) -> list[str]:
        return self.log_at(Severity.VERBOSE, message, *args, **kwargs)

    def debug(self, message: str | BaseException = "", *args: Any, **kwargs: Any) -> list[str]:
        return self.log_at(Severity.DEBUG, message, *args, **kwargs)

    def info(self, message: str | BaseException = "", *args: Any, **kwargs: Any) -> list[str]:
        return self.log_at(Severity.INFO, message, *args, **kwargs)

    def warn(self, message: str | BaseException = "", *args: Any, **kwargs: Any) -> list[str]:
        return self.log_at(Severity.WARN, message, *args, **kwargs)

    warning = warn

    def error(self, message: str | BaseException = "", *args: Any, **kwargs: Any) -> list[str]:
        return self.log_at(Severity.ERROR, message, *args, **kwargs)

    def wtf(self, message: str | BaseException = "", *args: Any, **kwargs: Any) -> list[str]:
        """Log a condition that should never happen (``ASSERT`` severity)."""
        return self.log_at(Severity.ASSERT, message, *args, **kwargs)

    assert_ = wtf

    def tagged(self, tag: str) -> TaggedLogger:
        """Return a view of this dispatcher that logs with *tag*."""
        return TaggedLogger(self, tag)


class TaggedLogger:
    """Convenience entry points bound to one tag.

    Created by ``Dispatcher.tagged``; holds no state besides the dispatcher
    and the tag.
    """

    def __init__(self, dispatcher: Dispatcher, tag: str) -> None:
        self._dispatcher = dispatcher
        self._tag = tag

    @property
    def tag(self) -> str:
        return self._tag

    def log_at(
        self,
        severity: Severity,
        message: str | BaseException = "",
        *args: Any,
        error: BaseException | None = None,
    ) -> list[str]:
        return self._dispatcher.log_at(
            severity, message, *args, tag=self._tag, error=error
        )

    def verbose(self, message: str | BaseException = "", *args: Any, **kwargs: Any) -> list[str]:
        return self.log_at(Severity.VERBOSE, message, *args, **kwargs)

    def debug(self, message: str | BaseException = "", *args: Any, **kwargs: Any) -> list[str]:
        return self.log_at(Severity.DEBUG, message, *args, **kwargs)

    def info(self, message: str | BaseException = "", *args: Any, **kwargs: Any) -> list[str]:
        return self.log_at(Severity.INFO, message, *args, **kwargs)

    def warn(self, message: str | BaseException = "", *args: Any, **kwargs: Any) -> list[str]:
        return self.log_at(Severity.WARN, message, *args, **kwargs)

    warning = warn

    def error(self, message: str | BaseException = "", *args: Any, **kwargs: Any) -> list[str]:
        return self.log_at(Severity.ERROR, message, *args, **kwargs)

    def wtf(self, message: str | BaseException = "", *args: Any, **kwargs: Any) -> list[str]:
        return self.log_at(Severity.ASSERT, message, *args, **kwargs)

    assert_ = wtf


def _sink_name(sink: Sink) -> str:
    try:
        return str(sink.sink_name)
    except Exception:  # noqa: BLE001
        return type(sink).__name__
