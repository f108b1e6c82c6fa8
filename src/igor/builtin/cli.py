"""Builtin CLI command hooks."""

from __future__ import annotations

import asyncio
import json

import typer
import uvicorn
from loguru import logger
from rich.console import Console
from rich.table import Table

from igor.framework import IgorFramework
from igor.hookspecs import hookimpl
from igor.server import create_app
from igor.slack import render_response


class CliPlugin:
    @hookimpl
    def register_cli_commands(self, app: typer.Typer) -> None:
        @app.command("run")
        def run(
            command: str = typer.Argument(..., help="Command text, e.g. 'status github'"),
            pretty: bool = typer.Option(True, "--pretty/--compact", help="Indent the JSON output"),
        ) -> None:
            """Run one command and print the Slack payload it produces."""

            framework = _load_framework()
            response = asyncio.run(framework.respond(command))
            typer.echo(json.dumps(render_response(response), indent=2 if pretty else None))

        @app.command("plugins")
        def list_plugins() -> None:
            """Show loaded plugins and the commands they understand."""

            framework = _load_framework()
            table = Table(title="Igor plugins")
            table.add_column("Plugin")
            table.add_column("Command")
            table.add_column("Help")
            for descriptor in framework.descriptors():
                for trigger, text in descriptor.help_entries.items():
                    table.add_row(descriptor.name, trigger, text)
            Console().print(table)
            for name, error in framework.failed_plugins.items():
                typer.echo(f"failed {name}: {error}")

        @app.command("hooks")
        def list_hooks() -> None:
            """Show hook implementation mapping."""

            framework = _load_framework()
            report = framework.hook_report()
            if not report:
                typer.echo("(no hook implementations)")
                return
            for hook_name, plugins in report.items():
                typer.echo(f"{hook_name}: {', '.join(plugins)}")

        @app.command("serve")
        def serve(
            host: str = typer.Option("127.0.0.1", help="Interface to listen on"),
            port: int = typer.Option(8080, help="Port to listen on"),
        ) -> None:
            """Answer slash-command POSTs on a local HTTP server."""

            framework = _load_framework()
            logger.info("server.start host={} port={}", host, port)
            uvicorn.run(create_app(framework), host=host, port=port, log_level="warning")


def _load_framework() -> IgorFramework:
    from igor.config import get_settings

    framework = IgorFramework(get_settings())
    framework.load_plugins()
    return framework
