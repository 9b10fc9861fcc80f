"""Wiring of a complete exploration session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from depnav.graph.filter import DependencyGraphFilter
from depnav.graph.generator import PyPIGraphGenerator
from depnav.graph.layout import GraphLayoutEngine
from depnav.graph.registry import PyPIRegistry
from depnav.view.dispatcher import ActionDispatcher
from depnav.view.model_source import DepGraphModelSource
from depnav.view.surface import ConsoleSurface

if TYPE_CHECKING:
	from collections.abc import Callable

	from rich.console import Console

	from depnav.config.config_schema import AppConfigSchema
	from depnav.graph.generator import IGraphGenerator


@dataclass
class Session:
	"""The collaborators of one exploration session."""

	dispatcher: ActionDispatcher
	surface: ConsoleSurface
	model_source: DepGraphModelSource


def create_session(
	config: AppConfigSchema,
	console: Console | None = None,
	generator: IGraphGenerator | None = None,
	load_indicator: Callable[[bool], None] | None = None,
) -> Session:
	"""
	Build a dispatcher, surface and model source from configuration.

	The surface registers with the dispatcher before the model source, so it
	sees every view action first.

	Args:
	    config: Application configuration.
	    console: Console the surface renders to.
	    generator: Graph generator to use. Defaults to one backed by the configured registry.
	    load_indicator: Optional hook for resolution progress.

	Returns:
	    The wired session. Call ``model_source.start()`` before using it.

	"""
	if generator is None:
		registry = PyPIRegistry(base_url=config.registry.base_url, timeout=config.registry.timeout)
		generator = PyPIGraphGenerator(registry)

	dispatcher = ActionDispatcher()
	surface = ConsoleSurface(
		dispatcher,
		console=console,
		char_width=config.layout.char_width,
		node_height=config.layout.node_height,
	)
	layout_engine = GraphLayoutEngine(
		node_spacing=config.layout.node_spacing,
		layer_spacing=config.layout.layer_spacing,
		char_width=config.layout.char_width,
		node_height=config.layout.node_height,
	)
	model_source = DepGraphModelSource(
		dispatcher,
		generator,
		DependencyGraphFilter(),
		layout_engine,
		padding=config.view.padding,
		max_zoom=config.view.max_zoom,
		animate=config.view.animate,
		max_waves=config.resolution.max_waves,
		load_indicator=load_indicator,
	)
	return Session(dispatcher=dispatcher, surface=surface, model_source=model_source)
