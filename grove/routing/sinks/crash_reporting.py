"""Crash-reporting sink — forwards events to a crash-report transport.

Every event is forwarded, whatever its severity, with exactly one
``transport.report(severity, tag, message)`` call.  When the event carries
an error it is additionally surfaced to the transport:

* through ``report_error(severity, tag, ErrorReport)`` when the transport
  implements it;
* otherwise through a second ``report`` call whose message is the error
  summary (``"TimeoutError: socket closed"``).

The error's description always reaches the transport.  The sink keeps no
buffer and never retries; transport exceptions propagate to the
dispatcher.
"""

from __future__ import annotations

import logging

from grove.models.events import ErrorReport, LogEvent
from grove.routing.transport import CrashReportTransport, ErrorReportingTransport

logger = logging.getLogger(__name__)


class CrashReportingSink:
    """Translates log events into crash-report transport calls.

    Parameters
    ----------
    transport:
        The crash-report backend.  Must provide ``report``; ``report_error``
        is used when present.
    include_traceback:
        Capture traceback lines into the surfaced ``ErrorReport``.
    """

    def __init__(
        self,
        transport: CrashReportTransport,
        *,
        include_traceback: bool = True,
    ) -> None:
        if not isinstance(transport, CrashReportTransport):
            raise TypeError(
                f"transport must provide report(severity, tag, message), "
                f"got {type(transport).__name__}"
            )
        self._transport = transport
        self._include_traceback = include_traceback

    @property
    def sink_name(self) -> str:
        return "crash_reporting"

    @property
    def transport(self) -> CrashReportTransport:
        return self._transport

    def handle(self, event: LogEvent) -> None:
        self._transport.report(event.severity, event.tag, event.message)

        if event.error is not None:
            self._surface_error(event)

    def _surface_error(self, event: LogEvent) -> None:
        error = ErrorReport.from_exception(
            event.error, include_traceback=self._include_traceback
        )
        if isinstance(self._transport, ErrorReportingTransport):
            self._transport.report_error(event.severity, event.tag, error)
        else:
            self._transport.report(event.severity, event.tag, error.summary)
        logger.debug(
            "CrashReportingSink: surfaced %s for tag %s",
            error.type_name,
            event.tag,
        )
