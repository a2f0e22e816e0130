"""
CLI command to hash a byte stream (stdin by default). Stream results carry no path.
"""

import logging
import click
from services.errors import UnsupportedAlgorithmError
from utils.cli_helpers import (
    EXIT_FAILURE,
    EXIT_UNSUPPORTED_ALGORITHM,
    OUTPUT_FORMATS,
    display_error,
    get_hashing_service,
    get_settings,
    render_results,
)

logger = logging.getLogger(__name__)


@click.command("hash-stream")
@click.argument("source", type=click.File("rb"), default="-")
@click.option("--algorithm", "-a", type=str, default=None, help="Hash algorithm (default: SHA256 or the configured default)")
@click.option("--format", "-f", "output_format", type=click.Choice(OUTPUT_FORMATS, case_sensitive=False), default=None, help="Output format")
@click.pass_context
def hash_stream(ctx: click.Context, source, algorithm: str, output_format: str) -> None:
    """Compute the checksum of a byte stream read from SOURCE ('-' for stdin)."""
    settings = get_settings(ctx)
    algorithm = algorithm or settings.default_algorithm
    output_format = (output_format or settings.output_format.value).lower()

    try:
        result = get_hashing_service(ctx).hash_stream(source, algorithm)
    except UnsupportedAlgorithmError as e:
        display_error(str(e), hint="Run 'checksum list-algorithms' to see the supported names")
        ctx.exit(EXIT_UNSUPPORTED_ALGORITHM)
    except OSError as e:
        display_error(f"Failed to read stream: {e}")
        ctx.exit(EXIT_FAILURE)

    render_results([result], output_format)
