"""Scan command."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer
from humanize import naturalsize

from ..common.constants import EXIT_IO_ERROR, EXIT_OUT_OF_MEMORY
from ..common.exceptions import ComparisonError
from ..config.settings import get_settings
from ..detector.models import DuplicateGroup
from ..detector.pipeline import DetectionPipeline
from ..reporting.exporter import ReportExporter
from ..scanner.tree_scanner import TreeScanner
from .formatters import (
    create_progress,
    print_error,
    print_info,
    print_panel,
    print_success,
    print_warning,
)


@dataclass
class DetectionResult:
    """Outcome of one scan-and-resolve run."""

    groups: list[DuplicateGroup]
    files_scanned: int
    files_indexed: int
    candidates: int
    traversal_errors: int


def run_detection(
    directories: list[Path],
    chunk_size: Optional[int] = None,
    min_size: Optional[int] = None,
    largest_first: Optional[bool] = None,
) -> DetectionResult:
    """Scan directories and resolve duplicates, exiting on fatal errors.

    Options left as None fall back to the configured settings.
    """
    settings = get_settings()
    chunk_size = chunk_size if chunk_size is not None else settings.chunk_size
    min_size = min_size if min_size is not None else settings.min_file_size
    if largest_first is None:
        largest_first = settings.largest_first

    scanner = TreeScanner(min_size=min_size)
    pipeline = DetectionPipeline(chunk_size=chunk_size, largest_first=largest_first)

    progress = create_progress()
    with progress:
        task = progress.add_task("[cyan]Scanning files...", total=None)
        for scanned in scanner.scan_files(str(d) for d in directories):
            pipeline.add_file(scanned.path, scanned.size, scanned.device_id, scanned.inode_id)
            progress.update(task, completed=scanner.files_seen)

    files_indexed = pipeline.size_index.file_count
    candidates = pipeline.size_index.candidate_count()

    try:
        groups = pipeline.detect_duplicates()
    except ComparisonError as e:
        reason = getattr(e.__cause__, "strerror", None) or "I/O error"
        print_error(f"{e}: {reason}")
        raise typer.Exit(EXIT_IO_ERROR)
    except MemoryError:
        print_error("Out of memory while comparing files")
        raise typer.Exit(EXIT_OUT_OF_MEMORY)

    return DetectionResult(
        groups=groups,
        files_scanned=scanner.files_seen,
        files_indexed=files_indexed,
        candidates=candidates,
        traversal_errors=scanner.errors,
    )


def print_summary(result: DetectionResult) -> None:
    """Print run statistics in a panel."""
    total_duplicates = sum(g.count for g in result.groups)
    total_wasted = sum(g.wasted_size for g in result.groups)

    summary_text = f"""
Files scanned: {result.files_scanned:,}
Distinct files: {result.files_indexed:,}
Files compared: {result.candidates:,}
Duplicate groups: {len(result.groups):,}
Duplicate files: {total_duplicates:,}
Wasted space: {naturalsize(total_wasted)}
"""
    print_panel("Scan Summary", summary_text.strip(), style="green")

    if result.traversal_errors:
        print_warning(
            f"{result.traversal_errors} paths could not be read during traversal"
        )


def scan(
    directories: list[Path] = typer.Argument(
        ..., help="Directories to search for duplicates"
    ),
    chunk_size: Optional[int] = typer.Option(
        None, "--chunk-size", "-c", min=1, help="Bytes read per comparison step"
    ),
    min_size: Optional[int] = typer.Option(
        None, "--min-size", min=0, help="Minimum file size in bytes"
    ),
    smallest_first: bool = typer.Option(
        False, "--smallest-first", help="List groups of smaller files first"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the report to a file instead of stdout"
    ),
    summary: bool = typer.Option(
        True, "--summary/--no-summary", help="Show run statistics"
    ),
) -> None:
    """Find files with identical contents and list them by size."""
    result = run_detection(
        directories,
        chunk_size,
        min_size,
        largest_first=False if smallest_first else None,
    )

    exporter = ReportExporter()
    if output:
        try:
            exporter.export_text(result.groups, output)
        except OSError as e:
            print_error(f"Report export failed: {e}")
            raise typer.Exit(EXIT_IO_ERROR)
        print_info(f"Report written to {output}")
    else:
        typer.echo(exporter.format_text(result.groups), nl=False)

    if not result.groups:
        print_success("No duplicates found!")

    if summary:
        print_summary(result)
