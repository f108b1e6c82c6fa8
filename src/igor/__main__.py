"""Igor CLI bootstrap."""

from __future__ import annotations

import typer

from igor.framework import IgorFramework


def create_cli_app() -> typer.Typer:
    app = typer.Typer(name="igor", help="Chat-command status reports for third-party services", add_completion=False)
    framework = IgorFramework()
    framework.load_plugins()
    framework.register_cli_commands(app)

    if not app.registered_commands:

        @app.command("help")
        def _help() -> None:
            typer.echo("No CLI commands loaded.")

    return app


app = create_cli_app()

if __name__ == "__main__":
    app()
