"""``grove demo`` — run the sample application in a build mode.

Plants the sink chosen by the build mode, then logs a short session of
events, including one with an attached error.  In release mode the crash
reports received by an in-memory transport are shown afterwards.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from grove.bootstrap import create_dispatcher
from grove.config import BuildMode, GroveConfig
from grove.routing.dispatcher import Dispatcher
from grove.routing.transport import InMemoryCrashTransport

console = Console()


def run_sample_session(dispatcher: Dispatcher) -> None:
    """Log the sample application's events through *dispatcher*."""
    app_log = dispatcher.tagged("ExampleApp")
    app_log.verbose("Application created")
    app_log.info("Loaded %d items", 3)

    ui_log = dispatcher.tagged("UI")
    ui_log.debug("Rendering list")
    ui_log.warn("Slow frame: %d ms", 48)

    try:
        raise TimeoutError("socket closed")
    except TimeoutError as exc:
        dispatcher.error("timeout", tag="Net", error=exc)


def demo_cmd(
    mode: BuildMode = typer.Option(
        BuildMode.DEBUG,
        "--mode",
        "-m",
        help="Build mode deciding which sink is installed.",
        case_sensitive=False,
    ),
) -> None:
    """Run the sample application with the sink for *mode*."""
    config = GroveConfig(build_mode=mode)
    transport = InMemoryCrashTransport()
    dispatcher = create_dispatcher(config, transport=transport, console=console)

    console.print()
    console.print(
        Panel(
            f"[bold]Grove sample application[/bold]\n\n"
            f"Build mode: [cyan]{mode.value}[/cyan]\n"
            f"Installed sink: [cyan]{dispatcher.sinks[0].sink_name}[/cyan]",
            border_style="cyan",
            padding=(1, 2),
        )
    )
    console.print()

    run_sample_session(dispatcher)

    if not config.is_release:
        return

    reports = transport.flush()
    table = Table(title=f"Crash reports ({len(reports)})")
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("Severity")
    table.add_column("Tag", style="cyan")
    table.add_column("Message")

    for index, report in enumerate(reports, start=1):
        table.add_row(
            str(index),
            report.kind.value,
            report.severity.name,
            report.tag or "-",
            report.message,
        )

    console.print(table)
