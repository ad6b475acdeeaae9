"""Main CLI application."""

from pathlib import Path
from typing import Annotated

import typer

from hbsv.cli.commands import application, service
from hbsv.logging import configure_logging

app = typer.Typer(
    name="hbsv",
    help="hbsv - Supervised service installer for Homebridge",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show debug logging",
        ),
    ] = False,
) -> None:
    """Manage the supervised service."""
    configure_logging("DEBUG" if verbose else None)
    ctx.obj = {"config_path": config}


service.register(app)
application.register(app)


if __name__ == "__main__":
    app()
