from __future__ import annotations

import asyncio
import logging

import typer
from rich.console import Console
from rich.markup import escape

from src.cli.prompter import TyperPrompter
from src.cli.reporting import ConsoleReporter
from src.create import __version__
from src.create.commands import AsyncCommandRunner
from src.create.context import CreateInputs
from src.create.orchestrator import CreateDeps, create_app
from src.create.workspace import LocalFileSystem
from src.platforms.native import NativeSkeletonPlatforms
from src.project_config.settings import log_level
from src.project_config.store import JsonConfigStore

USAGE_LINES = (
    "Usage: capstan create appDir appName appId",
    'Example: capstan create my-app "My App" "com.example.myapp"',
)

console = Console()

app = typer.Typer(
    name="capstan",
    help="Scaffold a new cross-platform app workspace.",
    add_completion=False,
    no_args_is_help=True,
)


def configure_logging(*, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, log_level(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger().setLevel(level)


def build_default_deps(out: Console) -> CreateDeps:
    return CreateDeps(
        fs=LocalFileSystem(),
        prompter=TyperPrompter(),
        config_store=JsonConfigStore(),
        runner=AsyncCommandRunner(),
        native=NativeSkeletonPlatforms(),
        reporter=ConsoleReporter(out),
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"capstan {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    _ = version
    configure_logging(verbose=verbose)


@app.command()
def create(
    app_dir: str = typer.Argument("", help="Directory for the new app"),
    app_name: str = typer.Argument("", help="App display name"),
    app_id: str = typer.Argument("", help="App/Bundle ID in reverse-domain form"),
) -> None:
    """Create a new app: directory, config, template, dependencies and native platforms."""
    deps = build_default_deps(console)
    outcome = asyncio.run(create_app(CreateInputs.of(app_dir, app_name, app_id), deps))
    if outcome.ok:
        return

    failure = outcome.failure
    if failure is not None and failure.is_validation:
        for line in USAGE_LINES:
            console.print(escape(line))
    message = failure.message if failure is not None else "unknown error"
    console.print(f"[red]✖ Error:[/red] {escape(message)}")
    raise typer.Exit(code=1)
