"""CLI command for resolving the complete dependency graph of a package."""

import logging
from pathlib import Path
from typing import Annotated

import asyncer
import typer

logger = logging.getLogger(__name__)

# --- Command Argument Annotations ---

PackageArg = Annotated[str, typer.Argument(help="Package to resolve.")]

VersionOpt = Annotated[
	str | None,
	typer.Option("--version", "-V", help="Exact version or version specifier, e.g. '2.31.0' or '>=2,<3'."),
]

FilterOpt = Annotated[
	str | None,
	typer.Option("--filter", "-f", help="Only show packages matching this text, and what depends on them."),
]

MaxWavesOpt = Annotated[
	int | None,
	typer.Option("--max-waves", min=0, help="Stop after this many resolution waves (0 for unlimited)."),
]

TableFlag = Annotated[bool, typer.Option("--table", "-t", help="Print a table instead of a tree.")]

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
	"""Register the resolve command with the CLI app."""

	@app.command(name="resolve")
	@asyncer.runnify
	async def resolve_command(
		package: PackageArg,
		version: VersionOpt = None,
		filter_text: FilterOpt = None,
		max_waves: MaxWavesOpt = None,
		table: TableFlag = False,
		config: ConfigOpt = None,
	) -> None:
		"""Resolve every transitive dependency of a package and print the graph."""
		await _resolve_command_impl(
			package=package,
			version=version,
			filter_text=filter_text,
			max_waves=max_waves,
			table=table,
			config_file=config,
		)


# --- Implementation Function ---


async def _resolve_command_impl(
	package: str,
	version: str | None = None,
	filter_text: str | None = None,
	max_waves: int | None = None,
	table: bool = False,
	config_file: Path | None = None,
) -> None:
	"""Implementation of the resolve command."""
	from rich.markup import escape

	from depnav.config import ConfigError, ConfigLoader
	from depnav.graph.models import node_id
	from depnav.utils.cli_utils import StatusIndicator, console, exit_with_error, show_resolution_failures
	from depnav.view.session import create_session

	try:
		app_config = ConfigLoader.get_instance(config_file=config_file, reload=True).get
	except ConfigError as e:
		exit_with_error("Could not load configuration.", exception=e)
		return

	if max_waves is not None:
		resolution = app_config.resolution.model_copy(update={"max_waves": max_waves})
		app_config = app_config.model_copy(update={"resolution": resolution})

	session = create_session(app_config, console=console, load_indicator=StatusIndicator())
	model_source = session.model_source

	await model_source.start()
	await model_source.create_node(package, version)
	waves = await model_source.resolve_graph()
	if filter_text:
		await model_source.filter(filter_text)

	root = model_source.graph_generator.index.get_by_id(node_id(package, version))
	root_error = getattr(root, "error", None)
	if root_error:
		exit_with_error(f"Could not resolve {escape(package)}: {escape(root_error)}")

	session.surface.render(table=table)

	nodes = model_source.model.nodes()
	console.print(f"\n{len(nodes)} packages, {len(model_source.model.edges())} dependencies, {waves} wave(s).")
	show_resolution_failures([node for node in nodes if node.error])
