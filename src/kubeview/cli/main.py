# src/kubeview/cli/main.py
"""
This module is the main entry point for the kubeview CLI.

It registers the commands defined in `commands`.
"""

import logging

import typer

from ..core.config import config
from . import commands

# --- Setup Logger ---
logging.basicConfig(
    level=config.LOG_LEVEL.upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


app = typer.Typer(
    name="kubeview",
    help="Inspect nodes, node groups and pods of the clusters in your kubeconfig.",
    add_completion=False,
)


def version_callback(value: bool):
    """
    Prints the version of kubeview.
    """
    if value:
        from .. import __version__

        typer.echo(f"kubeview version: {__version__}")
        raise typer.Exit()


@app.command()
def version():
    """
    Show the version of kubeview.
    """
    from .. import __version__

    typer.echo(f"kubeview version: {__version__}")


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
    kubeview CLI main entry point.
    """
    pass


app.command()(commands.serve)
app.command()(commands.clusters)
app.command()(commands.nodes)
app.command()(commands.nodegroups)
app.command()(commands.pods)


if __name__ == "__main__":
    app()
