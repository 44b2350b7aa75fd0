"""
channelspec CLI Utilities.

Shared helpers used by the CLI commands: version output, file loading with
CLI-friendly failures and rendering of validation results.
"""

from __future__ import annotations

import json
import platform
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from channelspec._version import get_version
from channelspec.core.environment import get_environment_info
from channelspec.core.errors import SchemaLoadError
from channelspec.core.ir import ValidationResult

T = TypeVar("T")

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        info = get_environment_info()

        typer.echo(f"channelspec version {get_version()}")
        typer.echo("")
        typer.echo("Environment:")
        typer.echo(f"  Python:        {platform.python_implementation()} {platform.python_version()}")
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        typer.echo("")
        typer.echo("Configuration:")
        typer.echo(f"  Strict default: {info['strict_default']}")
        typer.echo(f"  Log level:      {info['log_level']}")
        typer.echo(f"  Log format:     {info['log_format']}")

        raise typer.Exit()


def load_or_exit(loader: Callable[..., T], path: Path, *args: Any) -> T:
    """Run a loader, turning ``SchemaLoadError`` into exit code 1."""
    try:
        return loader(path, *args)
    except SchemaLoadError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(code=1) from e


def results_to_dict(results: list[ValidationResult], **extra: Any) -> dict[str, Any]:
    """JSON-ready summary of a validation run."""
    return {
        **extra,
        "valid": not results,
        "errors": [
            {"message": r.message, "member_names": list(r.member_names)} for r in results
        ],
    }


def report_results(
    results: list[ValidationResult],
    *,
    subject: str,
    output_json: bool,
    **extra: Any,
) -> None:
    """
    Print validation results and exit 1 when there are any.

    Args:
        results: Validation results
        subject: What was validated, for the human-readable heading
        output_json: Print a JSON document instead of a table
        extra: Additional keys for the JSON document
    """
    if output_json:
        typer.echo(json.dumps(results_to_dict(results, **extra), indent=2))
    elif not results:
        console.print(f"[green]✓[/green] {escape(subject)} is valid", highlight=False)
    else:
        table = Table(title=f"{escape(subject)}: {len(results)} error(s)")
        table.add_column("Member", style="cyan", no_wrap=True)
        table.add_column("Message")
        for result in results:
            table.add_row(escape(", ".join(result.member_names)) or "-", escape(result.message))
        console.print(table)

    if results:
        raise typer.Exit(code=1)
