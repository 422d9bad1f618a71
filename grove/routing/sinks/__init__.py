"""Sink protocol for Grove event routing.

All sinks ("trees") implement the ``Sink`` protocol: a ``sink_name``
property and a ``handle(event)`` method.  The dispatcher calls ``handle``
on every installed sink for every logged event.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from grove.models.events import LogEvent


@runtime_checkable
class Sink(Protocol):
    """Protocol that every Grove sink must implement.

    Sinks are pluggable consumers of log events.  Each sink decides how to
    print, forward, or translate the event; sinks share no base-class state.

    Attributes
    ----------
    sink_name : str
        A human-readable identifier for this sink instance
        (e.g. ``"debug"``, ``"crash_reporting"``).
    """

    @property
    def sink_name(self) -> str:
        """Return the name of this sink."""
        ...

    def handle(self, event: LogEvent) -> None:
        """Consume one event.

        Sinks may raise; the dispatcher isolates the failure and keeps
        delivering the event to the remaining sinks.

        Parameters
        ----------
        event:
            The immutable event to process.
        """
        ...
