# quotesync Console Output
# Rich-based display collaborator and CLI output

from collections.abc import Sequence
from datetime import datetime

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from quotesync.record import Record
from quotesync.sync.collaborators import StatusLevel
from quotesync.sync.engine import CycleStatus, SyncResult
from quotesync.sync.reconciler import Conflict


def format_timestamp(ms: int) -> str:
    """Format an epoch-milliseconds timestamp for display."""
    return datetime.fromtimestamp(ms / 1000).strftime("%Y-%m-%d %H:%M:%S")


class Console:
    """
    Console output manager using Rich.

    Implements the display collaborator (``render_conflicts`` and
    ``render_status``) and the formatted output of the CLI.
    """

    def __init__(self, *, verbose: bool = False, colored: bool = True):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Enable colored output.
        """
        self.verbose = verbose
        self._console = RichConsole(force_terminal=colored, no_color=not colored)

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self._console.print(f"[red]Error:[/red] {escape(message)}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self._console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def print_success(self, message: str) -> None:
        """Print success message."""
        self._console.print(f"[green]{escape(message)}[/green]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self._console.print(f"[blue]{escape(message)}[/blue]")

    # Display collaborator

    def render_status(self, text: str, level: StatusLevel = StatusLevel.INFO) -> None:
        """Show a sync status line."""
        if level == StatusLevel.ERROR:
            self.print_error(text)
        else:
            self.print_info(text)

    def render_conflicts(self, conflicts: Sequence[Conflict]) -> None:
        """
        Show conflicts of the last cycle side by side.

        Nothing is printed when there are no conflicts.
        """
        if not conflicts:
            if self.verbose:
                self._console.print("[dim]No conflicts[/dim]")
            return

        table = Table(title=f"Conflicts ({len(conflicts)})", show_header=True, header_style="bold")
        table.add_column("Quote ID", style="cyan")
        table.add_column("Local")
        table.add_column("Server")

        for conflict in conflicts:
            table.add_row(
                conflict.id,
                self._describe(conflict.local),
                self._describe(conflict.server),
            )

        self._console.print()
        self._console.print(table)
        self._console.print("[dim]Server version applied. Run 'quotesync sync -i' to keep local versions.[/dim]")

    @staticmethod
    def _describe(record: Record) -> str:
        return (
            f'"{escape(record.text)}" [italic]{escape(record.category)}[/italic]\n'
            f"[dim]{format_timestamp(record.last_modified)}[/dim]"
        )

    # CLI output

    def print_records(self, records: Sequence[Record], *, title: str = "Quotes") -> None:
        """Print records as a table."""
        if not records:
            self._console.print("[dim]No quotes to show.[/dim]")
            return

        table = Table(title=title, show_header=True, header_style="bold")
        if self.verbose:
            table.add_column("ID", style="cyan")
        table.add_column("Quote")
        table.add_column("Category", style="magenta")
        table.add_column("Last Modified", style="dim")

        for record in records:
            row = [escape(record.text), escape(record.category), format_timestamp(record.last_modified)]
            if self.verbose:
                row.insert(0, record.id)
            table.add_row(*row)

        self._console.print(table)

    def print_quote(self, record: Record) -> None:
        """Print a single quote."""
        self._console.print(
            Panel(
                f'"{escape(record.text)}"\n\n[dim]— {escape(record.category)}[/dim]',
                border_style="blue",
            )
        )

    def print_categories(self, categories: Sequence[str]) -> None:
        """Print the list of categories."""
        if not categories:
            self._console.print("[dim]No categories[/dim]")
            return
        for category in categories:
            self._console.print(f"  • {escape(category)}")

    def print_sync_result(self, result: SyncResult) -> None:
        """
        Print sync result summary.

        Args:
            result: Sync result to display.
        """
        if result.status == CycleStatus.DROPPED:
            self._console.print("[dim]Sync already in progress, request dropped[/dim]")
            return

        if not result.success:
            self._console.print(
                Panel(
                    f"[red]Sync failed[/red]\n{escape(result.error or '')}",
                    title="Summary",
                    border_style="red",
                )
            )
            return

        self._console.print(
            Panel(
                f"[green]Sync completed[/green]\n"
                f"Fetched: {result.fetched}, added: {result.added}, updated: {result.updated}\n"
                f"Local quotes: {result.total}, conflicts: {len(result.conflicts)}",
                title="Summary",
                border_style="yellow" if result.has_conflicts else "green",
            )
        )

    def print_config_summary(self, config_path: str, endpoint: str | None, store_path: str) -> None:
        """Print configuration summary."""
        self._console.print(
            Panel(
                f"Config: {config_path}\nRemote: {endpoint or 'simulated'}\nStore: {store_path}",
                title="quotesync Configuration",
                border_style="blue",
            )
        )

    def resolve_conflict(self, conflict: Conflict) -> str:
        """
        Interactive menu to resolve a conflict.

        Returns:
            Resolution choice: "server", "local", "skip", or "abort"
        """
        self._console.print(f"\n[bold red]Conflict:[/bold red] {conflict.id}")
        self._console.print(f"  Local:  {self._describe(conflict.local)}")
        self._console.print(f"  Server: {self._describe(conflict.server)}\n")

        self._console.print("[bold]Options:[/bold]")
        self._console.print("  [cyan]1[/cyan] - Accept [bold]server[/bold] version")
        self._console.print("  [cyan]2[/cyan] - Keep [bold]local[/bold] version (push to server)")
        self._console.print("  [cyan]3[/cyan] - [bold]Skip[/bold] this quote")
        self._console.print("  [cyan]4[/cyan] - [bold]Abort[/bold]")

        choices = {"1": "server", "2": "local", "3": "skip", "4": "abort"}
        while True:
            choice = self._console.input("\nYour choice [1-4]: ").strip()
            if choice in choices:
                return choices[choice]
            self._console.print("[yellow]Please enter 1, 2, 3 or 4[/yellow]")


def create_console(*, verbose: bool = False, colored: bool = True) -> Console:
    """
    Create a console instance.

    Args:
        verbose: Enable verbose output.
        colored: Enable colored output.

    Returns:
        Console instance.
    """
    return Console(verbose=verbose, colored=colored)
