"""Command-line interface for prefer-signals"""

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import load_config
from .exceptions import PreferSignalsError
from .formatters import get_formatter
from .linter import Linter
from .logging_config import setup_logging
from .rules import ALL_RULES

app = typer.Typer(
    name="prefer-signals",
    help="prefer-signals - flag Angular code that should use signals",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)

console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"prefer-signals {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Flag BehaviorSubject, @Input(), query decorators and mutable signal fields."""


@app.command()
def lint(
    paths: Optional[List[Path]] = typer.Argument(
        None,
        help="Files or directories to lint (default: current directory)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file path (TOML format)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    fmt: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: rich (default), json, github",
    ),
    apply_suggestions: bool = typer.Option(
        False,
        "--apply-suggestions",
        help="Write suggested fixes (readonly modifiers) back to the files",
    ),
    no_type_info: bool = typer.Option(
        False,
        "--no-type-info",
        help="Run without type information (requires useTypeChecking = false)",
    ),
    types_to_replace: Optional[List[str]] = typer.Option(
        None,
        "--types-to-replace",
        help="Constructor to report instead of BehaviorSubject (repeatable)",
    ),
    signal_functions: Optional[List[str]] = typer.Option(
        None,
        "--signal-function",
        help="Extra function name that creates a signal (repeatable)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose (DEBUG) logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress all but ERROR logging",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append log records to this file",
        dir_okay=False,
    ),
):
    """
    Lint TypeScript sources for code that should use signals.

    Exits 1 when problems are found, 2 on configuration or parse errors.

    [bold cyan]Examples:[/bold cyan]

      prefer-signals lint src/app

      prefer-signals lint src --format json | jq .

      prefer-signals lint src --apply-suggestions

      prefer-signals lint src --types-to-replace BehaviorSubject --types-to-replace ReplaySubject
    """
    setup_logging(verbose=verbose, quiet=quiet, log_file=str(log_file) if log_file else None)

    overrides: dict = {}
    rule_options: dict = {}
    if fmt is not None:
        overrides["output_format"] = fmt
    if no_type_info:
        overrides["type_information"] = False
    if types_to_replace:
        rule_options["typesToReplace"] = list(types_to_replace)
    if signal_functions:
        rule_options["signalCreationFunctions"] = list(signal_functions)
    if rule_options:
        overrides["rule_options"] = rule_options

    try:
        settings = load_config(config_file=config, **overrides)
        formatter = get_formatter(settings.output_format)
        result = Linter(settings).lint_paths(paths or [Path(".")], apply=apply_suggestions)
    except PreferSignalsError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    formatter.render(result)

    if result.diagnostics:
        raise typer.Exit(1)


@app.command()
def rules(
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
):
    """List the available rules with their messages and option defaults."""
    if json_output:
        typer.echo(
            json.dumps(
                [
                    {
                        "name": rule.name,
                        "type": rule.rule_type,
                        "description": rule.description,
                        "hasSuggestions": rule.has_suggestions,
                        "messages": rule.messages,
                        "schema": rule.schema,
                    }
                    for rule in ALL_RULES
                ],
                indent=2,
            )
        )
        return

    out = Console()
    for rule in ALL_RULES:
        out.print(f"[bold cyan]{rule.name}[/bold cyan] ({rule.rule_type}) - {rule.description}")
        out.print()

        table = Table(show_header=True, pad_edge=True)
        table.add_column("Option")
        table.add_column("Type")
        table.add_column("Default")
        for option, prop in rule.schema.get("properties", {}).items():
            table.add_row(option, prop.get("type", ""), json.dumps(prop.get("default")))
        out.print(table)

        messages = Table(show_header=True, pad_edge=True)
        messages.add_column("Message id")
        messages.add_column("Template")
        for message_id, template in rule.messages.items():
            messages.add_row(message_id, template)
        out.print(messages)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
