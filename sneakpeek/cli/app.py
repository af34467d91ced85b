"""
Main CLI application for sneakpeek.

Defines the Typer application structure and command routing,
keeping the CLI layer thin.
"""
import logging

import typer

from sneakpeek import __version__
from sneakpeek.cli.commands.upload import upload_command


# Initialize Typer app
app = typer.Typer(
    help="Upload directories to sneakpeek.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]}
)

# Register commands
app.command("upload", help="Upload a path to sneakpeek.")(upload_command)


def _version_callback(value: bool):
    if value:
        typer.echo(f"sneakpeek {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    )
):
    """Upload directories to sneakpeek.

    Run 'sneakpeek upload <path> -p <project> -g <group/name>' to upload a directory.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s"
    )
