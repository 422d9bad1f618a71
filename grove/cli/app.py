"""Main Typer application — imports and registers all CLI commands.

Entry point: ``grove`` (configured via pyproject.toml console scripts).

Commands: lint, issues, demo.
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from grove.cli.commands.demo import demo_cmd
from grove.cli.commands.lint_cmd import issues_cmd, lint_cmd
from grove.config import config

app = typer.Typer(
    name="grove",
    help="Grove: pluggable logging facade with debug and crash-reporting sinks.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Level for Grove's own diagnostics (defaults to GROVE_LOG_LEVEL).",
    ),
) -> None:
    """Configure diagnostic logging before any command runs."""
    configure_logging(log_level or config.log_level)


def configure_logging(level: str) -> None:
    """Send stdlib logging through a Rich handler at *level*."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


# Register subcommands
app.command(name="lint", help="Check Python files for Grove misuse.")(lint_cmd)
app.command(name="issues", help="List the checks run by 'grove lint'.")(issues_cmd)
app.command(name="demo", help="Run the sample application in a build mode.")(demo_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
