"""Report command for exporting duplicate data."""

from pathlib import Path
from typing import Optional

import typer
from humanize import naturalsize

from ..reporting.exporter import ReportExporter
from .formatters import print_error, print_info, print_success
from .scan_cmd import run_detection

EXPORT_FORMATS = ("text", "csv", "json")


def report(
    directories: list[Path] = typer.Argument(
        ..., help="Directories to search for duplicates"
    ),
    format: str = typer.Option(
        "csv", "--format", "-f", help="Output format: text, csv or json"
    ),
    output: Path = typer.Option(
        ..., "--output", "-o", help="Output file path"
    ),
    chunk_size: Optional[int] = typer.Option(
        None, "--chunk-size", "-c", min=1, help="Bytes read per comparison step"
    ),
    min_size: Optional[int] = typer.Option(
        None, "--min-size", min=0, help="Minimum file size in bytes"
    ),
) -> None:
    """Export duplicate file report to text, CSV or JSON."""
    format = format.lower()
    if format not in EXPORT_FORMATS:
        print_error(f"Invalid format: {format}. Must be one of: {', '.join(EXPORT_FORMATS)}")
        raise typer.Exit(2)

    result = run_detection(directories, chunk_size, min_size)
    groups = result.groups

    exporter = ReportExporter()
    try:
        if format == "csv":
            exporter.export_csv(groups, output)
        elif format == "json":
            exporter.export_json(groups, output)
        else:
            exporter.export_text(groups, output)
    except OSError as e:
        print_error(f"Report export failed: {e}")
        raise typer.Exit(1)

    print_success(f"Exported report to: {output}")
    print_info(f"Groups: {len(groups)}")
    print_info(f"Files: {sum(g.count for g in groups)}")
    print_info(f"Wasted space: {naturalsize(sum(g.wasted_size for g in groups))}")
