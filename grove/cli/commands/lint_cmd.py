"""``grove lint`` — check Python sources for misuse of the logging facade.

Prints one line per finding.  Exits with status 1 when any
error-severity finding is reported.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from grove.lint import ISSUES, check_path

console = Console()


def lint_cmd(
    paths: list[Path] = typer.Argument(
        ..., help="Files or directories to check (directories are searched for *.py)."
    ),
) -> None:
    """Check Python files for misuse of the Grove logging facade."""
    findings = []
    for path in paths:
        try:
            findings.extend(check_path(path))
        except FileNotFoundError as exc:
            console.print(f"[red]Error:[/red] {exc}")
            raise typer.Exit(code=2)

    if not findings:
        console.print("[green]No issues found.[/green]")
        return

    for finding in findings:
        location = Text(f"{finding.path}:{finding.line}:{finding.column}:", style="cyan")
        severity = Text(
            finding.issue.severity.value,
            style="red" if finding.is_error else "yellow",
        )
        console.print(
            Text.assemble(location, " ", severity, " ", finding.issue.id, " ", finding.message),
            soft_wrap=True,
        )

    errors = sum(1 for finding in findings if finding.is_error)
    console.print(
        f"\n[bold]{len(findings)} issue(s)[/bold]: "
        f"{errors} error(s), {len(findings) - errors} warning(s)"
    )

    if errors:
        raise typer.Exit(code=1)


def issues_cmd() -> None:
    """List the issues the checker reports."""
    table = Table(title="Grove usage checks")
    table.add_column("Id", style="cyan")
    table.add_column("Severity", justify="center")
    table.add_column("Description")

    for issue in ISSUES:
        table.add_row(issue.id, issue.severity.value, issue.explanation)

    console.print(table)
