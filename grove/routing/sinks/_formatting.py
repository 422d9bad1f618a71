"""Shared formatting helpers for Grove sinks.

Keeps the event-to-text patterns used by the debug sink and the logging
crash transport in one place.
"""

from __future__ import annotations

import traceback

from grove.models.events import LogEvent

UNTAGGED = "-"


def render_tag(tag: str | None, max_length: int | None = None) -> str:
    """Return the tag to display, truncated to *max_length* if given.

    Examples
    --------
    >>> render_tag(None)
    '-'
    >>> render_tag("NetworkConnectivityMonitor", 23)
    'NetworkConnectivityMoni'
    """
    if not tag:
        return UNTAGGED
    if max_length is not None and len(tag) > max_length:
        return tag[:max_length]
    return tag


def format_error_lines(event: LogEvent) -> list[str]:
    """Return the formatted traceback of the event's error (empty if none)."""
    if event.error is None:
        return []
    error = event.error
    text = "".join(
        traceback.format_exception(type(error), error, error.__traceback__)
    )
    return text.rstrip("\n").splitlines()


def chunk_message(message: str, chunk_size: int) -> list[str]:
    """Split *message* into pieces of at most *chunk_size* characters.

    Splits prefer newline boundaries; a single line longer than the limit
    is cut at the limit.  Blank lines inside a long message are kept as
    empty chunks.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    if len(message) <= chunk_size:
        return [message]

    chunks: list[str] = []
    start = 0
    length = len(message)
    while start < length:
        newline = message.find("\n", start)
        if newline == -1:
            newline = length
        while True:
            end = min(newline, start + chunk_size)
            chunks.append(message[start:end])
            start = end
            if start >= newline:
                break
        start = newline + 1
    return chunks
