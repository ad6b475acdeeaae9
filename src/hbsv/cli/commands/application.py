"""Pass-through commands to the managed application."""

from typing import Annotated

import typer
from rich.syntax import Syntax

from hbsv.cli.console import console, error
from hbsv.cli.runtime import build_installer
from hbsv.service import UserNotFoundError


def register(app: typer.Typer) -> None:
    """Register application pass-through commands."""

    @app.command("run")
    def app_run(ctx: typer.Context) -> None:
        """Run the application in the foreground."""
        try:
            ok = build_installer(ctx).run()
        except KeyboardInterrupt:
            return
        if not ok:
            raise typer.Exit(1)

    @app.command("view")
    def app_view(ctx: typer.Context) -> None:
        """Show the application's config.json."""
        content = build_installer(ctx).view()
        if content is None:
            raise typer.Exit(1)
        console.print(Syntax(content, "json", theme="monokai", line_numbers=False))

    @app.command("add")
    def app_add(
        ctx: typer.Context,
        kind: Annotated[str, typer.Argument(help="accessory or plugin")],
        name: Annotated[str, typer.Argument(help="Accessory or plugin name")],
    ) -> None:
        """Add an accessory or plugin."""
        if not build_installer(ctx).add(kind, name):
            raise typer.Exit(1)

    @app.command("remove")
    def app_remove(
        ctx: typer.Context,
        kind: Annotated[str, typer.Argument(help="accessory or plugin")],
        name: Annotated[str, typer.Argument(help="Accessory or plugin name")],
    ) -> None:
        """Remove an accessory or plugin."""
        if not build_installer(ctx).remove(kind, name):
            raise typer.Exit(1)

    @app.command("rebuild")
    def app_rebuild(
        ctx: typer.Context,
        all_modules: Annotated[
            bool,
            typer.Option(
                "--all",
                help="Also rebuild the global modules directory",
            ),
        ] = False,
    ) -> None:
        """Rebuild the application's native modules."""
        if not build_installer(ctx).rebuild(all_modules=all_modules):
            raise typer.Exit(1)

    @app.command("id")
    def app_id(ctx: typer.Context) -> None:
        """Print the uid and gid of the service account."""
        installer = build_installer(ctx)
        try:
            ids = installer.get_id()
        except UserNotFoundError as e:
            error(str(e))
            raise typer.Exit(1) from None
        console.print(f"uid={ids.uid} gid={ids.gid}", highlight=False)
