"""Command-line interface for bibimport.

Provides CLI commands for importing, inspecting schemas and validating records.
"""

import importlib.metadata
import sys
from pathlib import Path

import click

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("bibimport")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"  # Fallback for development


@click.group()
@click.version_option(version=__version__, prog_name="bibimport")
def cli() -> None:
    """Import bibliographic tag files into canonical records.

    Use 'bibimport COMMAND --help' for command-specific help.
    """


@cli.command()
@click.argument("input_path", type=click.Path(exists=True))
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    required=True,
    help="Output JSONL file path",
)
@click.option(
    "--format",
    "format_name",
    type=str,
    default=None,
    help="Import format name (default: chosen from file extension)",
)
@click.option("--encoding", type=str, default=None, help="Input encoding (default: detected)")
@click.option("--audit-log", type=click.Path(), default=None, help="Write JSONL audit events here")
@click.option(
    "--recursive",
    "-r",
    is_flag=True,
    help="Search recursively in subdirectories (for folder input)",
)
@click.option(
    "--lenient",
    is_flag=True,
    help="Exit successfully even if some files are rejected",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def parse(
    input_path: str,
    output: str,
    format_name: str | None,
    encoding: str | None,
    audit_log: str | None,
    recursive: bool,
    lenient: bool,
    verbose: bool,
) -> None:
    """Import tag files at INPUT_PATH and write canonical JSONL.

    INPUT_PATH can be a single file or a folder. A file containing a
    continuation line outside any field is rejected as a whole.

    Examples
    --------
        bibimport parse export.txt -o records.jsonl
        bibimport parse exports/ -o all.jsonl --recursive --audit-log events.jsonl
    """
    from bibimport.engine import ImportConfig, run_import

    try:
        config = ImportConfig(
            format_name=format_name,
            encoding=encoding,
            strict=not lenient,
            recursive=recursive,
            output_path=Path(output),
            audit_log_path=Path(audit_log) if audit_log else None,
        )
    except ValueError as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        sys.exit(2)

    if verbose:
        click.echo(f"Processing: {input_path}", err=True)

    result = run_import(input_path, config)

    if verbose:
        for warning in result.warnings:
            click.echo(f"  warning: {warning}", err=True)
        for name, path in result.output_files.items():
            click.echo(f"  {name}: {path}", err=True)

    if result.failed_files:
        click.secho(f"✗ Rejected: {result.error_message}", fg="red", err=True)

    if not result.success:
        sys.exit(1)

    click.secho(
        f"✓ Imported {result.total_records} records "
        f"from {result.total_files} file(s) to {output}",
        fg="green",
    )


@cli.command()
@click.argument("type_name", required=False)
def types(type_name: str | None) -> None:
    """List known entry types, or show the fields of TYPE_NAME."""
    from bibimport.schema import default_registry

    registry = default_registry()

    if type_name is None:
        for name in sorted(registry.all_type_names(), key=str.lower):
            click.echo(name)
        return

    entry_schema = registry.lookup(type_name)
    if entry_schema is None:
        click.secho(f"✗ Unknown entry type: {type_name}", fg="red", err=True)
        sys.exit(1)

    click.echo(entry_schema.name)
    click.echo(f"  required: {', '.join(sorted(entry_schema.required)) or '-'}")
    click.echo(f"  optional: {', '.join(sorted(entry_schema.optional)) or '-'}")


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "format_name",
    type=str,
    default=None,
    help="Import format name (default: chosen from file extension)",
)
def validate(input_path: str, format_name: str | None) -> None:
    """Import INPUT_PATH and report records missing required fields.

    Exits with status 1 if any record is incomplete or of an unknown type.
    """
    from bibimport.api import ParseError, parse_file, validate_records

    try:
        records = parse_file(input_path, format_name=format_name)
    except ParseError as e:
        click.secho(f"✗ {e}", fg="red", err=True)
        sys.exit(1)

    reports = validate_records(records)
    invalid = [r for r in reports if not r.is_valid]

    for report, record in zip(reports, records, strict=True):
        if not report.known_type:
            click.echo(f"#{record.record_index} {report.entry_type}: unknown entry type")
        elif report.missing:
            missing = ", ".join(report.missing)
            click.echo(f"#{record.record_index} {report.entry_type}: missing {missing}")

    if invalid:
        click.secho(f"✗ {len(invalid)} of {len(records)} records incomplete", fg="yellow")
        sys.exit(1)

    click.secho(f"✓ All {len(records)} records complete", fg="green")


if __name__ == "__main__":
    cli()
