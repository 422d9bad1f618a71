"""Grove CLI — Typer-based command-line interface.

Provides the ``grove`` command with subcommands for checking source code
for facade misuse, listing the checker's issues, and running the sample
application in either build mode.

All output uses Rich for formatted terminal display.
"""
