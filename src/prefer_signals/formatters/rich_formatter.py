"""Rich terminal formatter for lint results."""

from rich.console import Console
from rich.table import Table

from ..linter import LintResult
from .base import BaseFormatter

console = Console()

_MESSAGE_STYLES = {
    "preferSignal": "yellow",
    "preferInputSignal": "cyan",
    "preferQuerySignal": "cyan",
    "preferReadonly": "magenta",
}


class RichFormatter(BaseFormatter):
    """One table per file with diagnostics, then a summary line."""

    def render(self, result: LintResult) -> None:
        for report in result.files:
            if not report.diagnostics:
                continue
            table = Table(title=report.path, title_justify="left", show_lines=False, pad_edge=True)
            table.add_column("Line", justify="right", style="dim")
            table.add_column("Check")
            table.add_column("Message")
            table.add_column("Fix", justify="center")
            for d in report.diagnostics:
                style = _MESSAGE_STYLES.get(d.message_id, "white")
                table.add_row(
                    f"{d.line}:{d.column}",
                    f"[{style}]{d.message_id}[/{style}]",
                    d.message,
                    "[green]✓[/green]" if d.suggestions else "",
                )
            console.print(table)
            console.print()

        self._print_summary(result)

    def format(self, result: LintResult) -> str:
        # Rich output goes directly to console; return empty string
        self.render(result)
        return ""

    def _print_summary(self, result: LintResult) -> None:
        total = len(result.diagnostics)
        if total == 0:
            console.print(f"[green]No problems found[/green] in {len(result.files)} file(s).")
            return

        counts = ", ".join(f"{count} {message_id}" for message_id, count in sorted(result.counts_by_message().items()))
        console.print(
            f"[bold]{total} problem(s)[/bold] in {result.files_with_diagnostics} of "
            f"{len(result.files)} file(s) ({counts})"
        )
        if result.suggestions_applied:
            console.print(f"[green]Applied {result.suggestions_applied} suggestion(s).[/green]")
