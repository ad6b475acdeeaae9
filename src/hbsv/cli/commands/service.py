"""Service lifecycle commands."""

import typer

from hbsv.cli.console import dim
from hbsv.cli.runtime import build_installer
from hbsv.service import UserNotFoundError


def register(app: typer.Typer) -> None:
    """Register service lifecycle commands."""

    @app.command("install")
    def service_install(ctx: typer.Context) -> None:
        """Install, enable and start the service."""
        installer = build_installer(ctx)
        try:
            installed = installer.install()
        except UserNotFoundError:
            raise typer.Exit(1) from None
        if not installed:
            raise typer.Exit(1)

    @app.command("uninstall")
    def service_uninstall(ctx: typer.Context) -> None:
        """Remove the service directory."""
        if not build_installer(ctx).uninstall():
            raise typer.Exit(1)

    # Supervisor failures are informational: these always exit 0
    @app.command("start")
    def service_start(ctx: typer.Context) -> None:
        """Start the service."""
        build_installer(ctx).start()

    @app.command("stop")
    def service_stop(ctx: typer.Context) -> None:
        """Stop the service."""
        build_installer(ctx).stop()

    @app.command("restart")
    def service_restart(ctx: typer.Context) -> None:
        """Restart the service."""
        build_installer(ctx).restart()

    @app.command("logs")
    def service_logs(ctx: typer.Context) -> None:
        """Show service status and follow its log."""
        installer = build_installer(ctx)
        try:
            installer.logs()
        except KeyboardInterrupt:
            dim("Stopped following logs")
