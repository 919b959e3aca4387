# src/shipwright/cli/formatter.py
from typing import Dict, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from shipwright.core.context import GenerationReport
from shipwright.core.errors import ShipwrightError
from shipwright.core.models import RecordKind
from shipwright.stats.movement import MovementStats


class ReportFormatter:
    """
    ReportFormatter: the visual side of the CLI.
    Renders the generation report, validation counts, movement stats and
    fatal errors.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def print_report(self, report: GenerationReport):
        """
        One row per (kind, species) batch, then a totals panel.
        """
        table = Table(title="Shipwright Generation Report", show_header=True, header_style="bold magenta")
        table.add_column("Kind", style="cyan")
        table.add_column("Species")
        table.add_column("Files", justify="right")
        table.add_column("Records", justify="right")
        table.add_column("Dropped", justify="right")
        table.add_column("Written", justify="center")

        for batch in report.batches:
            dropped = f"[yellow]{batch.dropped}[/yellow]" if batch.dropped else "0"
            table.add_row(
                batch.kind.prefix,
                batch.species,
                str(len(batch.files)),
                str(len(batch.records)),
                dropped,
                "✅" if batch.written else "-",
            )

        self.console.print(table)
        self.console.print(Panel(
            f"[bold white]Summary Report[/bold white]\n"
            f"════════════════════════════════════════\n"
            f"Ships:          [green]{report.total(RecordKind.SHIP)}[/green] "
            f"(dropped {report.dropped(RecordKind.SHIP)})\n"
            f"Outfits:        [green]{report.total(RecordKind.OUTFIT)}[/green] "
            f"(dropped {report.dropped(RecordKind.OUTFIT)})\n"
            f"Files Written:  {report.files_written}",
            border_style="dim"
        ))

    def print_validation(self, counts: Dict[str, int]):
        lines = "\n".join(f"{kind.capitalize():<10} {count}" for kind, count in counts.items())
        self.console.print(Panel(
            f"[bold green]Output tree is valid[/bold green]\n{lines}",
            border_style="green"
        ))

    def print_movement(self, name: str, stats: MovementStats):
        if stats.error:
            self.console.print(f"[bold yellow]{name}:[/bold yellow] {stats.error}")
            return

        table = Table(title=f"Movement: {name}", show_header=False)
        table.add_column("Stat", style="cyan")
        table.add_column("Value", justify="right")
        table.add_row("max speed", stats.max_speed)
        table.add_row("acceleration", stats.acceleration)
        table.add_row("turning", stats.turning)
        self.console.print(table)

    def print_error(self, error: ShipwrightError):
        body = f"[bold red]{error.code}[/bold red] {error.message}"
        if error.actionable:
            body += f"\n[dim]Hint: {error.actionable}[/dim]"
        self.console.print(Panel(body, title="[bold red]Fatal[/bold red]", border_style="red", expand=False))
