"""Debug sink — prints every event verbatim to a developer console.

Line format: ``{label}/{tag}: {message}`` followed by the formatted
traceback when an error is attached.  Output goes through a Rich
``Console`` (stderr by default) with markup disabled so that message text
is printed exactly as logged.
"""

from __future__ import annotations

from rich.console import Console

from grove.models.events import LogEvent, Severity
from grove.routing.sinks._formatting import chunk_message, format_error_lines, render_tag


# Longest single line handed to the console; longer messages are split.
DEFAULT_CHUNK_SIZE = 4000

_SEVERITY_STYLES: dict[Severity, str] = {
    Severity.VERBOSE: "dim",
    Severity.DEBUG: "cyan",
    Severity.INFO: "green",
    Severity.WARN: "yellow",
    Severity.ERROR: "red",
    Severity.ASSERT: "bold red",
}


class DebugSink:
    """Forwards events to a local console with full fidelity.

    Parameters
    ----------
    console:
        Rich console to write to.  Defaults to a stderr console.
    max_tag_length:
        Truncate rendered tags to this many characters (``None`` keeps the
        full tag).
    chunk_size:
        Maximum characters per printed line; longer messages are split,
        preferring newline boundaries.
    """

    def __init__(
        self,
        console: Console | None = None,
        *,
        max_tag_length: int | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self._console = console or Console(stderr=True)
        self._max_tag_length = max_tag_length
        self._chunk_size = chunk_size

    @property
    def sink_name(self) -> str:
        return "debug"

    def handle(self, event: LogEvent) -> None:
        tag = render_tag(event.tag, self._max_tag_length)
        prefix = f"{event.severity.label}/{tag}: "
        style = _SEVERITY_STYLES[event.severity]

        for chunk in chunk_message(event.message, self._chunk_size):
            self._print(prefix + chunk, style)
        for line in format_error_lines(event):
            self._print(prefix + line, style)

    def _print(self, text: str, style: str) -> None:
        self._console.print(
            text,
            style=style,
            markup=False,
            emoji=False,
            highlight=False,
            soft_wrap=True,
        )
