"""Grove: a pluggable logging facade.

Application code logs events (severity, optional tag, message, optional
error) through a ``Dispatcher``; the dispatcher fans every event out to
the installed sinks ("trees") without the caller knowing which are active:
  - ``DebugSink`` prints events verbatim to a developer console
  - ``CrashReportingSink`` forwards events to a crash-report transport
  - sink failures are isolated; logging never raises to the caller
  - the startup hook installs one sink chosen by the build mode
  - ``grove lint`` checks source code for misuse of the facade
"""

__version__ = "0.1.0"
__description__ = "Pluggable logging facade with debug and crash-reporting sinks"

from grove.bootstrap import create_dispatcher, plant
from grove.models.events import LogEvent, Severity
from grove.routing.dispatcher import Dispatcher
from grove.routing.sinks.crash_reporting import CrashReportingSink
from grove.routing.sinks.debug import DebugSink
from grove.cli.app import app as cli

__all__ = [
    "Dispatcher",
    "LogEvent",
    "Severity",
    "DebugSink",
    "CrashReportingSink",
    "create_dispatcher",
    "plant",
    "cli",
    "__version__",
]
