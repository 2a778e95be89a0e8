"""CLI entry point: count the orbits in a map file."""

import sys
import click

from orbit_map.core.config import settings
from orbit_map.core.orbits import pipeline


@click.command()
@click.argument("map_path", required=False, type=click.Path())
def cli(map_path):
    """Print the total number of direct and indirect orbits in MAP_PATH.

    MAP_PATH defaults to the configured map file (map_data.txt).
    """
    result = pipeline.run_orbit_pipeline_from_file(map_path or settings.MAP_PATH)

    if result["status"] != pipeline.PipelineStatus.COMPLETED:
        click.echo(f"Error: {result['error']}", err=True)
        sys.exit(1)

    click.echo(pipeline.format_result(result["result"]["total_orbits"]))


if __name__ == "__main__":
    cli()
