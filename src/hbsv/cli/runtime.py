"""Shared bootstrap helpers for CLI command handlers."""

from pathlib import Path

import typer
from pydantic import ValidationError

from hbsv.cli.console import console, error, status_line
from hbsv.config import ServiceConfig, load_config
from hbsv.service import SupervisedServiceInstaller


def print_post_install_instructions(installer: SupervisedServiceInstaller) -> None:
    """Tell the operator how to manage the freshly installed service."""
    config = installer.config
    console.print()
    console.print(
        f"[bold]{config.service_name}[/bold] is now managed by {installer.backend.name}."
    )
    console.print(f"  Service directory: {installer.descriptor.root_path}")
    console.print(f"  Storage path:      {config.storage_path}")
    console.print(f"  Logs:              {config.resolved_log_path / 'current'}")
    console.print()
    console.print("Manage the service with:")
    console.print("  [cyan]hbsv start | stop | restart | logs[/cyan]")
    console.print("Remove it with:")
    console.print("  [cyan]hbsv uninstall[/cyan]")


def load_service_config(config_path: Path | None) -> ServiceConfig:
    """Load config, turning load errors into a clean CLI exit."""
    try:
        return load_config(config_path)
    except FileNotFoundError as e:
        error(str(e))
        raise typer.Exit(1) from None
    except ValidationError as e:
        error(f"Config validation failed:\n{e}")
        raise typer.Exit(1) from None
    except ValueError as e:
        # tomllib.TOMLDecodeError is a ValueError
        error(f"Invalid config file: {e}")
        raise typer.Exit(1) from None


def build_installer(ctx: typer.Context) -> SupervisedServiceInstaller:
    """Create the installer for the config selected on the command line."""
    config = load_service_config(ctx.obj.get("config_path") if ctx.obj else None)
    try:
        return SupervisedServiceInstaller(
            config,
            reporter=status_line,
            post_install=print_post_install_instructions,
        )
    except ValueError as e:
        error(str(e))
        raise typer.Exit(1) from None
