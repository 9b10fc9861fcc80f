"""CLI command for exploring a dependency graph interactively."""

import logging
from pathlib import Path
from typing import Annotated

import asyncer
import typer

logger = logging.getLogger(__name__)

# --- Command Argument Annotations ---

PackageArg = Annotated[str | None, typer.Argument(help="Package to start from (omit to start empty).")]

VersionOpt = Annotated[
	str | None,
	typer.Option("--version", "-V", help="Exact version or version specifier, e.g. '2.31.0' or '>=2,<3'."),
]

ConfigOpt = Annotated[
	Path | None,
	typer.Option(
		"--config",
		"-c",
		help="Path to config file",
	),
]


# --- Registration Function ---


def register_command(app: typer.Typer) -> None:
	"""Register the explore command with the CLI app."""

	@app.command(name="explore")
	@asyncer.runnify
	async def explore_command(
		package: PackageArg = None,
		version: VersionOpt = None,
		config: ConfigOpt = None,
	) -> None:
		"""Start an interactive session for exploring package dependencies."""
		await _explore_command_impl(package=package, version=version, config_file=config)


# --- Implementation Function ---


async def _explore_command_impl(
	package: str | None = None,
	version: str | None = None,
	config_file: Path | None = None,
) -> None:
	"""Implementation of the explore command."""
	from rich.prompt import Prompt

	from depnav.cli.shell import ExploreShell
	from depnav.config import ConfigError, ConfigLoader
	from depnav.utils.cli_utils import StatusIndicator, console, exit_with_error, handle_keyboard_interrupt
	from depnav.view.session import create_session

	try:
		app_config = ConfigLoader.get_instance(config_file=config_file, reload=True).get
	except ConfigError as e:
		exit_with_error("Could not load configuration.", exception=e)
		return

	session = create_session(app_config, console=console, load_indicator=StatusIndicator())
	shell = ExploreShell(session, console)

	try:
		await session.model_source.start()
		if package:
			await session.model_source.create_node(package, version)
			session.surface.render()

		typer.echo("Starting interactive session. Type 'help' for commands, 'quit' to end.")
		while True:
			line = Prompt.ask("\n[bold]depnav[/bold]", console=console, default="", show_default=False)
			if not await shell.execute(line):
				typer.echo("Exiting interactive session.")
				break
	except EOFError:
		typer.echo("\nExiting interactive session.")
	except KeyboardInterrupt:
		handle_keyboard_interrupt()
