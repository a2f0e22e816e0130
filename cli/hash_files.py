"""
Hash Files CLI Command

Hashes every file matched by the given paths or glob patterns. Missing paths and
unreadable files are reported individually; the remaining files are still hashed.
"""

import logging
import click
from click.core import ParameterSource
from services.errors import HashingCancelledError, UnsupportedAlgorithmError
from utils.cli_helpers import (
    EXIT_FAILURE,
    EXIT_OK,
    EXIT_UNSUPPORTED_ALGORITHM,
    OUTPUT_FORMATS,
    display_error,
    get_hashing_service,
    get_settings,
    render_results,
    report_failures,
)

logger = logging.getLogger(__name__)


@click.command("hash-files")
@click.argument("paths", nargs=-1, required=True)
@click.option("--algorithm", "-a", type=str, default=None, help="Hash algorithm (default: SHA256 or the configured default)")
@click.option("--literal-path/--glob", "literal", default=False, help="Use paths verbatim, or glob-expand them (default: the configured literal_paths)")
@click.option("--format", "-f", "output_format", type=click.Choice(OUTPUT_FORMATS, case_sensitive=False), default=None, help="Output format")
@click.option("--workers", "-w", type=click.IntRange(min=1), default=None, help="Number of files hashed in parallel")
@click.pass_context
def hash_files(ctx: click.Context, paths: tuple, algorithm: str, literal: bool, output_format: str, workers: int) -> None:
    """
    Compute the checksum of one or more files.

    Args:
        ctx (click.Context): Click context containing shared config and services.
        paths (tuple): File paths or glob patterns.
        algorithm (str): Algorithm name, case-insensitive.
        literal (bool): Treat paths literally instead of as glob patterns. Falls back
            to the configured literal_paths when neither flag is given.
        output_format (str): table, plain or json.
        workers (int): Number of files hashed in parallel.

    Returns:
        None. Exits 0 when every input was hashed, 1 if any input failed and 2 for an
        unsupported algorithm.
    """
    settings = get_settings(ctx)
    hashing = get_hashing_service(ctx)

    algorithm = algorithm or settings.default_algorithm
    if ctx.get_parameter_source("literal") is ParameterSource.DEFAULT:
        literal = settings.literal_paths
    output_format = (output_format or settings.output_format.value).lower()
    workers = workers or settings.max_workers

    try:
        batch = hashing.hash_paths(list(paths), algorithm, literal=literal, max_workers=workers)
    except UnsupportedAlgorithmError as e:
        display_error(str(e), hint="Run 'checksum list-algorithms' to see the supported names")
        ctx.exit(EXIT_UNSUPPORTED_ALGORITHM)
    except HashingCancelledError as e:
        display_error(str(e))
        ctx.exit(EXIT_FAILURE)

    render_results(batch.results, output_format)
    failed = report_failures(batch.failures)
    if failed:
        logger.warning(f"{failed} input(s) could not be hashed")
        ctx.exit(EXIT_FAILURE)
    ctx.exit(EXIT_OK)
