#!/usr/bin/env python3
"""
CLI helper utilities for consistent output rendering and error handling.
"""

import json
from typing import Iterable, List, Optional

import click
from rich.console import Console
from rich.table import Table

from models.digest_result import DigestFailure, DigestResult
from models.settings import ChecksumSettings, OutputFormat
from services.hashing_service import HashingService

console = Console()
err_console = Console(stderr=True)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_UNSUPPORTED_ALGORITHM = 2

OUTPUT_FORMATS = [fmt.value for fmt in OutputFormat]


def get_settings(ctx: click.Context) -> ChecksumSettings:
    """Settings from the context, or defaults when a command runs without the group."""
    if ctx.obj and ctx.obj.get("settings"):
        return ctx.obj["settings"]
    return ChecksumSettings()


def get_hashing_service(ctx: click.Context) -> HashingService:
    """Hashing service from the context, or one built from the effective settings."""
    if ctx.obj and ctx.obj.get("hashing"):
        return ctx.obj["hashing"]
    return HashingService(chunk_size=get_settings(ctx).chunk_size)


def render_results(results: List[DigestResult], output_format: str) -> None:
    """
    Print digest results to stdout.

    Args:
        results: Results to print.
        output_format: "table", "plain" (`HASH  path` lines) or "json".
    """
    output_format = OutputFormat(output_format)
    if output_format is OutputFormat.JSON:
        click.echo(json.dumps([r.model_dump() for r in results], indent=2))
        return
    if output_format is OutputFormat.PLAIN:
        for result in results:
            click.echo(result.to_line())
        return

    if not results:
        return
    table = Table(title="Checksums")
    table.add_column("Algorithm", style="cyan", no_wrap=True)
    table.add_column("Hash", style="green", overflow="fold")
    table.add_column("Path", style="white", overflow="fold")
    for result in results:
        table.add_row(result.algorithm, result.hash, result.path or "-")
    console.print(table)


def report_failures(failures: Iterable[DigestFailure]) -> int:
    """Print one line per failure to stderr and return how many there were."""
    count = 0
    for failure in failures:
        err_console.print(f"❌ {failure.error}: {failure.message}", style="red", markup=False, highlight=False, soft_wrap=True)
        count += 1
    return count


def display_error(error_message: str, hint: Optional[str] = None) -> None:
    """
    Display an error with an optional hint.

    Args:
        error_message: The error message to display
        hint: Optional suggestion printed below the error
    """
    err_console.print(f"❌ {error_message}", style="red", markup=False, highlight=False, soft_wrap=True)
    if hint:
        err_console.print(f"💡 {hint}", style="yellow", markup=False, highlight=False, soft_wrap=True)
