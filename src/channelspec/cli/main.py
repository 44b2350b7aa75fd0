"""
channelspec CLI application.

Commands:
  identity            Print a schema's logical identity
  validate-settings   Check connection settings against a schema
  validate-message    Check a message against a schema
  check-restriction   Check that one schema is a restriction of another
  describe            Show everything a schema declares
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from channelspec.core.environment import LogFormat
from channelspec.core.ir import ChannelSchema, format_capabilities
from channelspec.core.loader import load_message, load_schema, load_settings
from channelspec.core.logging import setup_logging
from channelspec.core.validator import (
    get_logical_identity,
    validate_as_restriction_of,
    validate_connection_settings,
    validate_message,
)

from .utils import console, load_or_exit, report_results, version_callback

app = typer.Typer(
    help="""channelspec - schema validation for channel connectors

Schema, settings and message files may be TOML or JSON.
Every check exits with code 1 when it reports errors.
""",
    no_args_is_help=True,
)

SchemaPath = Annotated[Path, typer.Argument(help="Channel schema file (.toml or .json)")]
JsonOption = Annotated[bool, typer.Option("--json", help="Output as JSON")]


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and environment information",
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Log level (defaults to CHANNELSPEC_LOG_LEVEL)"),
    ] = None,
    log_format: Annotated[
        LogFormat | None,
        typer.Option("--log-format", help="Log format (defaults to CHANNELSPEC_LOG_FORMAT)"),
    ] = None,
) -> None:
    """channelspec CLI main callback for global options."""
    setup_logging(level=log_level, fmt=log_format)


# =============================================================================
# Commands
# =============================================================================


@app.command()
def identity(schema_file: SchemaPath) -> None:
    """Print the logical identity (provider/type/version) of a schema."""
    schema = load_or_exit(load_schema, schema_file)
    typer.echo(get_logical_identity(schema))


@app.command(name="validate-settings")
def validate_settings_command(
    schema_file: SchemaPath,
    settings_file: Annotated[Path, typer.Argument(help="Connection settings file")],
    output_json: JsonOption = False,
) -> None:
    """Validate connection settings against a schema."""
    schema = load_or_exit(load_schema, schema_file)
    settings = load_or_exit(load_settings, settings_file, schema)
    results = validate_connection_settings(schema, settings)
    report_results(
        results,
        subject=f"Settings {settings_file.name}",
        output_json=output_json,
        schema=get_logical_identity(schema),
    )


@app.command(name="validate-message")
def validate_message_command(
    schema_file: SchemaPath,
    message_file: Annotated[Path, typer.Argument(help="Message file")],
    output_json: JsonOption = False,
) -> None:
    """Validate a message against a schema."""
    schema = load_or_exit(load_schema, schema_file)
    message = load_or_exit(load_message, message_file)
    results = validate_message(schema, message)
    report_results(
        results,
        subject=f"Message {message.id or message_file.name}",
        output_json=output_json,
        schema=get_logical_identity(schema),
    )


@app.command(name="check-restriction")
def check_restriction_command(
    child_file: Annotated[Path, typer.Argument(help="Narrower (runtime) schema file")],
    parent_file: Annotated[Path, typer.Argument(help="Master schema file")],
    output_json: JsonOption = False,
) -> None:
    """Check that CHILD only declares what PARENT declares."""
    child = load_or_exit(load_schema, child_file)
    parent = load_or_exit(load_schema, parent_file)
    results = validate_as_restriction_of(child, parent)
    report_results(
        results,
        subject=f"Restriction {get_logical_identity(child)}",
        output_json=output_json,
        child=get_logical_identity(child),
        parent=get_logical_identity(parent),
    )


@app.command()
def describe(schema_file: SchemaPath) -> None:
    """Show what a schema declares."""
    schema = load_or_exit(load_schema, schema_file)
    _print_schema(schema)


def _print_schema(schema: ChannelSchema) -> None:
    console.print(f"[bold]{escape(str(schema))}[/bold]", highlight=False)
    console.print(f"  Identity:      {escape(get_logical_identity(schema))}", highlight=False)
    console.print(f"  Strict:        {'yes' if schema.is_strict else 'no'}", highlight=False)
    console.print(
        f"  Capabilities:  {format_capabilities(schema.capabilities)}", highlight=False
    )
    content_types = ", ".join(sorted(c.value for c in schema.content_types)) or "-"
    console.print(f"  Content types: {content_types}", highlight=False)
    endpoints = ", ".join(
        f"{e.type.value}({'s' if e.can_send else ''}{'r' if e.can_receive else ''})"
        for e in schema.endpoints
    )
    console.print(f"  Endpoints:     {endpoints or '-'}", highlight=False)

    if schema.parameters:
        table = Table(title="Parameters")
        table.add_column("Name", style="cyan")
        table.add_column("Type")
        table.add_column("Required")
        table.add_column("Default")
        table.add_column("Allowed values")
        for p in schema.parameters:
            table.add_row(
                escape(p.name),
                p.data_type.value,
                "yes" if p.is_required else "",
                "" if p.default_value is None or p.is_sensitive else escape(str(p.default_value)),
                escape(", ".join(str(v) for v in p.allowed_values)),
            )
        console.print(table)

    if schema.authentication_configurations:
        table = Table(title="Authentication")
        table.add_column("Type", style="cyan")
        table.add_column("Name")
        table.add_column("Field groups")
        for config in schema.authentication_configurations:
            groups = " | ".join(escape(str(g)) for g in config.alternatives) or "-"
            table.add_row(config.authentication_type.value, escape(config.display_name), groups)
        console.print(table)

    if schema.message_properties:
        table = Table(title="Message properties")
        table.add_column("Name", style="cyan")
        table.add_column("Type")
        table.add_column("Required")
        for prop in schema.message_properties:
            table.add_row(escape(prop.name), prop.data_type.value, "yes" if prop.is_required else "")
        console.print(table)


def main() -> None:
    """Entry point for the ``channelspec`` console script."""
    app()
