"""Grove event routing — dispatches log events to all installed sinks.

The routing subsystem ensures that every logged event reaches every
installed sink.  Sinks are pluggable consumers: the debug console sink,
the crash-reporting sink, or any custom sink implementing the ``Sink``
protocol.  Crash-report transports are the receiving end of the
crash-reporting sink.
"""

from grove.routing.dispatcher import Dispatcher, SinkFailure, TaggedLogger
from grove.routing.sinks import Sink
from grove.routing.sinks.crash_reporting import CrashReportingSink
from grove.routing.sinks.debug import DebugSink
from grove.routing.transport import (
    CrashReportTransport,
    ErrorReportingTransport,
    InMemoryCrashTransport,
    LoggingCrashTransport,
)

__all__ = [
    "Dispatcher",
    "SinkFailure",
    "TaggedLogger",
    "Sink",
    "DebugSink",
    "CrashReportingSink",
    "CrashReportTransport",
    "ErrorReportingTransport",
    "InMemoryCrashTransport",
    "LoggingCrashTransport",
]
