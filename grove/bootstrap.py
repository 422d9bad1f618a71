"""Startup hook — installs exactly one sink chosen by the build mode.

The build mode is resolved once from ``GroveConfig`` and passed into a
single ``install`` call:

* ``debug``   → ``DebugSink`` writing to the developer console;
* ``release`` → ``CrashReportingSink`` forwarding to a crash transport.

Usage
-----
>>> dispatcher = create_dispatcher(GroveConfig(build_mode="release"))
>>> dispatcher.error("request failed", tag="Net", error=exc)
"""

from __future__ import annotations

import logging

from rich.console import Console

from grove.config import BuildMode, GroveConfig
from grove.routing.dispatcher import Dispatcher, FailureCallback
from grove.routing.sinks import Sink
from grove.routing.sinks.crash_reporting import CrashReportingSink
from grove.routing.sinks.debug import DebugSink
from grove.routing.transport import CrashReportTransport, LoggingCrashTransport

logger = logging.getLogger(__name__)


def select_sink(
    config: GroveConfig,
    transport: CrashReportTransport | None = None,
    console: Console | None = None,
) -> Sink:
    """Return the sink appropriate for ``config.build_mode``.

    *transport* is only used in release mode; without one, records go to
    a ``LoggingCrashTransport``.  *console* is only used in debug mode.
    """
    if config.build_mode is BuildMode.RELEASE:
        if transport is None:
            transport = LoggingCrashTransport(
                logging.getLogger(config.crash_logger_name)
            )
        return CrashReportingSink(
            transport, include_traceback=config.crash_include_traceback
        )
    return DebugSink(
        console,
        max_tag_length=config.debug_max_tag_length,
        chunk_size=config.debug_chunk_size,
    )


def plant(
    dispatcher: Dispatcher,
    config: GroveConfig | None = None,
    transport: CrashReportTransport | None = None,
    console: Console | None = None,
) -> Sink:
    """Install the build-mode sink into *dispatcher* and return it."""
    if config is None:
        from grove.config import config as default_config

        config = default_config
    sink = select_sink(config, transport=transport, console=console)
    dispatcher.install(sink)
    logger.info("Planted %s sink for %s build", sink.sink_name, config.build_mode.value)
    return sink


def create_dispatcher(
    config: GroveConfig | None = None,
    transport: CrashReportTransport | None = None,
    console: Console | None = None,
    on_failure: FailureCallback | None = None,
) -> Dispatcher:
    """Return a new dispatcher with the build-mode sink installed."""
    dispatcher = Dispatcher(on_failure=on_failure)
    plant(dispatcher, config, transport=transport, console=console)
    return dispatcher
