# src/initres/cli/main.py
"""
This module is the main entry point for the initres CLI.
"""

import logging

import typer

from ..core.config import config
from . import estimate

# --- Setup Logger ---
logging.basicConfig(
    level=config.LOG_LEVEL.upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


app = typer.Typer(
    name="initres",
    help="Estimate initial resource requests from the historical usage of container images.",
    add_completion=False,
)


def version_callback(value: bool):
    """
    Prints the version of initres.
    """
    if value:
        from .. import __version__

        typer.echo(f"initres version: {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
):
    """
    initres CLI main entry point.
    """
    pass


app.command(name="estimate")(estimate.estimate)


if __name__ == "__main__":
    app()
