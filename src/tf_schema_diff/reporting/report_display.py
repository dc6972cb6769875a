"""Report summary display."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tf_schema_diff.schema.models import AI_ERROR_KEY, Report


def _count(entry: dict, key: str) -> str:
    value = entry.get(key)
    return str(len(value)) if isinstance(value, list) else "-"


def display_report_summary(report: Report, console: Console | None = None) -> None:
    """Display a summary table of the updated resources and overall totals.

    Args:
        report: Classification report
        console: Rich console (created if None)
    """
    if console is None:
        console = Console()

    if report.updated:
        table = Table(title="🔍 Updated Resources")
        table.add_column("Resource", style="cyan", no_wrap=True)
        table.add_column("Created", justify="right", style="green")
        table.add_column("Deleted", justify="right", style="red")
        table.add_column("Renamed", justify="right", style="yellow")
        table.add_column("Status", justify="center")

        for name, entry in report.updated.items():
            if AI_ERROR_KEY in entry:
                table.add_row(name, "-", "-", "-", "[bold red]oracle error[/bold red]")
                continue

            status = "[yellow]review[/yellow]" if entry.get("renamed") else "[green]✓[/green]"
            table.add_row(
                name,
                _count(entry, "created"),
                _count(entry, "deleted"),
                _count(entry, "renamed"),
                status,
            )

        console.print(table)

    summary = report.get_summary()
    lines = [
        f"[green]New:[/green] {summary['new_count']}",
        f"[white]Same:[/white] {summary['same_count']}",
        f"[yellow]Updated:[/yellow] {summary['updated_count']}",
    ]
    if summary["oracle_error_count"]:
        lines.append(f"[bold red]Oracle errors:[/bold red] {summary['oracle_error_count']}")

    console.print(Panel.fit("\n".join(lines), title="Summary", border_style="blue"))
