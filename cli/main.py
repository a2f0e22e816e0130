"""
Main entry point for the checksum CLI.
- Sets up the Click command group and context object.
- Dynamically loads all CLI commands from this directory.
"""
import os
import sys
import importlib
import click
import logging
import rich_click as rclick
from services.errors import UnsupportedAlgorithmError
from services.hashing_service import HashingService
from utils.checksum_config import DEFAULT_CONFIG_PATH, load_configuration, load_settings
from utils.cli_helpers import EXIT_FAILURE, EXIT_UNSUPPORTED_ALGORITHM, display_error
from utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


@rclick.group()
@click.option('--logfile', '-l', type=click.Path(writable=True), help="Log to file")
@click.option('--verbose', '-v', count=True, help="Set verbosity level (-v = INFO, -vv = DEBUG)")
@click.option('--config', '-c', type=click.Path(dir_okay=False), default=DEFAULT_CONFIG_PATH, help="Path to config file (optional)")
@click.pass_context
def checksum_cli(ctx: click.Context, verbose: int, logfile: str, config: str) -> None:
    """
    Compute file and stream checksums with cryptographic and non-cryptographic algorithms.

    Args:
        ctx (click.Context): Click context for Click command group.
        verbose (int): Verbosity level (-v = INFO, -vv = DEBUG).
        logfile (str): Path to log file.
        config (str): Path to configuration file.

    Returns:
        None
    """
    # If the context object is already set (tests inject one), keep it
    if ctx.obj and all(k in ctx.obj for k in ("config", "settings", "hashing")):
        return

    if logfile and os.path.dirname(logfile):
        os.makedirs(os.path.dirname(logfile), exist_ok=True)

    setup_logging(verbosity=verbose, logfile=logfile)

    try:
        cfg = load_configuration(config)
        settings = load_settings(cfg)
    except UnsupportedAlgorithmError as e:
        display_error(f"Configuration error: {e}", hint=f"Check default_algorithm in the [hashing] section of {config}")
        sys.exit(EXIT_UNSUPPORTED_ALGORITHM)
    except ValueError as e:
        display_error(f"Configuration error: {e}", hint=f"Check {config} and CHECKSUM_* environment variables")
        sys.exit(EXIT_FAILURE)

    ctx.obj = {
        "config": cfg,
        "settings": settings,
        "hashing": HashingService(chunk_size=settings.chunk_size),
    }
    logger.debug(f"Context initialized with default algorithm {settings.default_algorithm}")


# Dynamic discovery loop: auto-register all CLI commands in this directory
COMMAND_DIR = os.path.dirname(__file__)
for filename in sorted(os.listdir(COMMAND_DIR)):
    # Only import .py files that are not main.py or __init__.py
    if filename.endswith(".py") and filename not in {"main.py", "__init__.py"}:
        command_name = filename[:-3]
        module_name = f"cli.{command_name}"
        try:
            module = importlib.import_module(module_name)
            cli_function = getattr(module, command_name, None)
            if cli_function:
                checksum_cli.add_command(cli_function)
            else:
                logger.debug(f"No command function found in {module_name}")
        except Exception as e:
            logger.debug(f"Failed to import {module_name}: {e}")
    else:
        logger.debug(f"Skipping non-Python file: {filename}")

if __name__ == '__main__':
    checksum_cli()
