"""
Verify Checksum CLI Command

Compares the digest of a file against an expected value.
"""

import logging
import click
from services.errors import FileReadError, PathNotFoundError, UnsupportedAlgorithmError
from utils.cli_helpers import EXIT_FAILURE, EXIT_UNSUPPORTED_ALGORITHM, display_error, get_hashing_service, get_settings

logger = logging.getLogger(__name__)


@click.command("verify-checksum")
@click.argument("path", type=str)
@click.argument("expected", type=str)
@click.option("--algorithm", "-a", type=str, default=None, help="Hash algorithm (default: SHA256 or the configured default)")
@click.pass_context
def verify_checksum(ctx: click.Context, path: str, expected: str, algorithm: str) -> None:
    """
    Check that PATH hashes to EXPECTED (hex, case-insensitive).

    Exits 0 on a match, 1 on a mismatch or read failure and 2 for an unsupported
    algorithm.
    """
    algorithm = algorithm or get_settings(ctx).default_algorithm
    try:
        matches = get_hashing_service(ctx).verify_file(path, expected, algorithm)
    except UnsupportedAlgorithmError as e:
        display_error(str(e), hint="Run 'checksum list-algorithms' to see the supported names")
        ctx.exit(EXIT_UNSUPPORTED_ALGORITHM)
    except (PathNotFoundError, FileReadError) as e:
        display_error(str(e))
        ctx.exit(EXIT_FAILURE)

    if matches:
        click.secho(f"✅ OK: {path}", fg="green")
    else:
        click.secho(f"❌ MISMATCH: {path}", fg="red", bold=True)
        ctx.exit(EXIT_FAILURE)
