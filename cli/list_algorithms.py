import click
from rich.table import Table

from models.algorithm import AlgorithmFamily
from services.algorithm_registry import DEFAULT_ALGORITHM, list_algorithms as registered_algorithms
from utils.cli_helpers import console

"""
CLI command to list the supported hash algorithms, optionally filtered by family.
"""


@click.command("list-algorithms")
@click.option("--family", type=click.Choice([f.value for f in AlgorithmFamily]), default=None, help="Only list one family")
def list_algorithms(family):
    """List supported hash algorithms."""
    descriptors = registered_algorithms(family)

    table = Table(title="Supported Algorithms")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Family", style="magenta")
    table.add_column("Bits", justify="right")
    for descriptor in descriptors:
        name = descriptor.display_name
        if descriptor.name == DEFAULT_ALGORITHM:
            name += " (default)"
        table.add_row(name, descriptor.family.value, str(descriptor.output_bits))
    console.print(table)
    click.echo(f"{len(descriptors)} algorithm(s)")
