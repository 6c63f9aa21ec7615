"""Cleanup run formatting and display."""

from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..models.cleanup_run import CleanupRun, RunMode
from ..models.deletion_record import DeletionRecord, DeletionStatus


class CleanupReporter:
    """Format and display cleanup run results."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize cleanup reporter.

        Args:
            console: Rich console instance (creates new one if not provided)
        """
        self.console = console or Console()

    def display(self, run: CleanupRun, records: List[DeletionRecord], show_skipped: bool = False) -> None:
        """Display a run summary and any failures.

        Args:
            run: Cleanup run summary
            records: Records produced by the run
            show_skipped: Also list skipped resources with their reasons
        """
        mode_label = "[yellow]DRY RUN[/yellow]" if run.mode == RunMode.DRY_RUN else "[red]EXECUTE[/red]"

        self.console.print()
        self.console.print(
            Panel(
                f"[bold]Retention Cleanup Report[/bold]\n"
                f"Resource Type: {run.resource_type}\n"
                f"Mode: {mode_label}\n"
                f"Started: {run.started_at.strftime('%Y-%m-%d %H:%M:%S UTC')}",
                style="cyan",
            )
        )
        self.console.print()

        self._display_summary(run)

        failed = [r for r in records if r.status == DeletionStatus.FAILED]
        if failed:
            self._display_records("Failed Deletions", failed, detail_header="Error", red=True)

        if show_skipped:
            skipped = [r for r in records if r.status == DeletionStatus.SKIPPED]
            if skipped:
                self._display_records("Skipped Resources", skipped, detail_header="Reason", red=False)

    def _display_summary(self, run: CleanupRun) -> None:
        table = Table(title="Summary", show_header=True, header_style="bold magenta")
        table.add_column("Outcome", style="cyan", width=15)
        table.add_column("Count", justify="right", style="yellow", width=10)

        table.add_row("Listed", str(run.listed_count))
        table.add_row("Skipped", str(run.skipped_count))
        table.add_row("Submitted", str(run.submitted_count))
        table.add_row("✓ Succeeded", f"[green]{run.succeeded_count}[/green]")
        if run.failed_count > 0:
            table.add_row("✗ Failed", f"[red]{run.failed_count}[/red]")

        table.add_row("━" * 15, "━" * 10, style="dim")
        table.add_row("[bold]Status", f"[bold]{run.status.value}")

        self.console.print(table)
        if run.duration_seconds is not None:
            self.console.print(f"Completed in {run.duration_seconds:.1f}s with {run.concurrency} workers")
        self.console.print()

    def _display_records(self, title: str, records: List[DeletionRecord], detail_header: str, red: bool) -> None:
        table = Table(title=title, show_header=True, box=None, padding=(0, 2))
        table.add_column("Resource ID", style="white")
        table.add_column(detail_header, style="red" if red else "dim")

        for record in sorted(records, key=lambda r: r.resource_id):
            if record.status == DeletionStatus.FAILED:
                detail = f"{record.error_code}: {record.error_message}"
            else:
                detail = record.skip_reason or ""
            table.add_row(record.resource_id, detail)

        self.console.print(table)
        self.console.print()
