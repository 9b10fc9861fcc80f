"""
Model source driving incremental resolution of the dependency graph.

The model source owns the view state of an exploration session. It turns user
actions (select, filter, create, expand, expand all, clear) into generator
calls, filter passes and model commits, and keeps selection and centering in
line with the nodes that are actually visible.

All of its work runs on one event loop. Its own bookkeeping between two awaits
is never interleaved with another operation; registry fetches are the only
points where other operations can run.

"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from depnav.graph.models import Dimension, Point, is_node, node_id
from depnav.view.actions import (
	Action,
	ActionKind,
	ComputedBoundsAction,
	FitToScreenAction,
	SelectAction,
	SelectAllAction,
	UpdateModelAction,
)

if TYPE_CHECKING:
	from collections.abc import Awaitable, Callable, Iterable

	from depnav.graph.filter import DependencyGraphFilter
	from depnav.graph.generator import IGraphGenerator
	from depnav.graph.layout import GraphLayoutEngine
	from depnav.graph.models import Bounds, DependencyGraph, DependencyNode, GraphElement
	from depnav.view.dispatcher import ActionDispatcher

logger = logging.getLogger(__name__)

DEFAULT_PADDING = 20.0
DEFAULT_MAX_ZOOM = 1.0


class DepGraphModelSource:
	"""Keeps the displayed model in sync with the growing dependency graph."""

	def __init__(
		self,
		dispatcher: ActionDispatcher,
		graph_generator: IGraphGenerator,
		graph_filter: DependencyGraphFilter,
		layout_engine: GraphLayoutEngine,
		padding: float = DEFAULT_PADDING,
		max_zoom: float = DEFAULT_MAX_ZOOM,
		animate: bool = True,
		max_waves: int = 0,
		load_indicator: Callable[[bool], None] | None = None,
	) -> None:
		"""
		Initialize the model source and register its action handlers.

		Args:
		    dispatcher: Dispatcher shared with the rendering surface.
		    graph_generator: Source of nodes and their dependencies.
		    graph_filter: Filter deciding which elements are hidden.
		    layout_engine: Engine positioning nodes after each measurement.
		    padding: Padding used when fitting the viewport.
		    max_zoom: Maximum zoom used when fitting the viewport.
		    animate: Whether viewport changes are animated.
		    max_waves: Upper bound on waves in ``resolve_graph`` (0 for unlimited).
		    load_indicator: Optional hook told when a resolution batch starts and ends.

		"""
		self.dispatcher = dispatcher
		self.graph_generator = graph_generator
		self.graph_filter = graph_filter
		self.layout_engine = layout_engine
		self.padding = padding
		self.max_zoom = max_zoom
		self.animate = animate
		self.max_waves = max_waves
		self.load_indicator = load_indicator

		self.model: DependencyGraph = graph_generator.graph

		self._handlers: dict[ActionKind, Callable[[Action], Awaitable[None]]] = {
			ActionKind.SELECT: self.handle_select,
			ActionKind.SELECT_ALL: self.handle_select_all,
			ActionKind.COMPUTED_BOUNDS: self.handle_computed_bounds,
			ActionKind.REQUEST_MODEL: self.handle_request_model,
		}
		for kind in self._handlers:
			dispatcher.register(kind, self.handle)

	# --- Model lifecycle ---

	async def start(self) -> None:
		"""Show the generator's current graph."""
		self.model = self.graph_generator.graph
		await self.update_model()

	async def update_model(self, request_bounds: bool = True) -> None:
		"""Submit the current model to the rendering surface."""
		await self.dispatcher.dispatch(UpdateModelAction(model=self.model, request_bounds=request_bounds))

	async def clear(self) -> None:
		"""Drop every element from the graph and reset the filter."""
		index = self.graph_generator.index
		for element in self.model.children:
			index.remove(element)
		self.model.children = []
		self.graph_filter.set_filter("")
		logger.info("Cleared the dependency graph")
		await self.update_model()

	async def create_node(self, name: str, version: str | None = None) -> None:
		"""
		Add a package to the graph and select it.

		Nothing is committed or selected if the package is already in the graph.

		Args:
		    name: Package name.
		    version: Exact version or version specifier, if any.

		"""
		is_new = node_id(name, version) not in self.graph_generator.index
		node = self.graph_generator.generate_node(name, version)
		if is_new:
			await self.update_model()
			await self.select([node.id])
		else:
			logger.debug(f"Node '{node.id}' already exists")

	# --- Selection and centering ---

	def visible_node_ids(self, element_ids: Iterable[str]) -> list[str]:
		"""Keep only the ids that refer to visible nodes."""
		index = self.graph_generator.index
		visible = []
		for element_id in element_ids:
			element = index.get_by_id(element_id)
			if is_node(element) and not element.hidden:
				visible.append(element_id)
		return visible

	async def select(self, element_ids: list[str]) -> None:
		if not element_ids:
			return
		selection = self.visible_node_ids(element_ids)
		if selection:
			await self.dispatcher.dispatch(SelectAction(selected_element_ids=selection))

	async def center(self, element_ids: list[str]) -> None:
		if not element_ids:
			return
		targets = self.visible_node_ids(element_ids)
		if targets:
			await self.dispatcher.dispatch(
				FitToScreenAction(element_ids=targets, padding=self.padding, max_zoom=self.max_zoom, animate=self.animate)
			)

	# --- Filtering ---

	def _current_visible_node_ids(self) -> list[str]:
		return [child.id for child in self.model.children if is_node(child) and not child.hidden]

	async def filter(self, text: str) -> None:
		"""
		Filter the graph by text and fit the view to what remains.

		Args:
		    text: Filter text. An empty string shows everything.

		"""
		self.graph_filter.set_filter(text)
		self.graph_filter.refresh(self.model, self.graph_generator.index)
		await self.dispatcher.dispatch(SelectAllAction(select=False))
		center = self._current_visible_node_ids()
		await self.update_model()
		await self.center(center)

	# --- Resolution ---

	def _set_loading(self, status: bool) -> None:
		if self.load_indicator is not None:
			self.load_indicator(status)

	@staticmethod
	def _record_failure(node: DependencyNode, error: Exception) -> None:
		node.error = str(error) or type(error).__name__
		logger.warning(f"Failed to resolve '{node.id}': {node.error}")

	async def _resolve_one(self, node: DependencyNode) -> None:
		"""Resolve a single node, keeping any failure on the node."""
		try:
			pending = self.graph_generator.resolve_node(node)
		except Exception as e:
			self._record_failure(node, e)
			return
		try:
			await pending
		except Exception as e:
			self._record_failure(node, e)

	async def resolve_nodes(self, nodes: list[DependencyNode]) -> None:
		"""
		Fetch the direct dependencies of the given nodes.

		Hidden nodes are skipped. If there is nothing left to fetch, the view is
		only centered on the nodes. A node whose fetch fails keeps the failure in
		its ``error`` and does not affect the others.

		Args:
		    nodes: Nodes to expand.

		"""
		if all(node.hidden or node.resolved for node in nodes):
			await self.center([node.id for node in nodes])
			return

		self._set_loading(True)
		targets = [node for node in nodes if not node.hidden]
		try:
			await asyncio.gather(*(self._resolve_one(node) for node in targets))
			self.graph_filter.refresh(self.model, self.graph_generator.index)
			await self.update_model()
		finally:
			self._set_loading(False)
		await self.center([node.id for node in targets])

	def _unresolved_nodes(self, attempted: set[str]) -> list[DependencyNode]:
		return [node for node in self.model.nodes() if not node.resolved and node.id not in attempted]

	async def resolve_graph(self) -> int:
		"""
		Expand the whole graph breadth first until no unresolved node is left.

		Each wave resolves every unresolved node in the model concurrently, so
		nodes discovered by other operations in the meantime are picked up too.
		A node is tried at most once per call; nodes that fail are not retried.

		Returns:
		    The number of waves that were run.

		"""
		self._set_loading(True)
		waves = 0
		try:
			attempted: set[str] = set()
			frontier = self._unresolved_nodes(attempted)
			while frontier:
				if self.max_waves and waves >= self.max_waves:
					logger.warning(f"Stopping after {waves} waves with {len(frontier)} nodes left unresolved")
					break
				waves += 1
				logger.debug(f"Resolution wave {waves}: {len(frontier)} nodes")
				attempted.update(node.id for node in frontier)
				await asyncio.gather(*(self._resolve_one(node) for node in frontier))
				frontier = self._unresolved_nodes(attempted)

			self.graph_filter.refresh(self.model, self.graph_generator.index)
			center = self._current_visible_node_ids()
			await self.update_model()
		finally:
			self._set_loading(False)
		logger.info(f"Graph resolution finished after {waves} waves")
		await self.center(center)
		return waves

	# --- Action handling ---

	async def handle(self, action: Action) -> None:
		handler = self._handlers.get(action.kind)
		if handler is None:
			logger.debug(f"Ignoring action '{action.kind.value}'")
			return
		await handler(action)

	async def handle_select(self, action: Action) -> None:
		if not isinstance(action, SelectAction):
			return
		index = self.graph_generator.index
		nodes = [
			element
			for element in (index.get_by_id(element_id) for element_id in action.selected_element_ids)
			if is_node(element)
		]
		if nodes:
			await self.resolve_nodes(nodes)

	async def handle_select_all(self, action: Action) -> None:
		if not isinstance(action, SelectAllAction) or not action.select:
			return
		nodes = [element for element in self.graph_generator.index.all() if is_node(element)]
		if nodes:
			await self.resolve_nodes(nodes)

	async def handle_request_model(self, _action: Action) -> None:
		await self.update_model()

	@staticmethod
	def apply_bounds(element: GraphElement, bounds: Bounds) -> None:
		if is_node(element):
			element.position = Point(bounds.x, bounds.y)
			element.size = Dimension(bounds.width, bounds.height)

	@staticmethod
	def apply_alignment(element: GraphElement, alignment: Point) -> None:
		if is_node(element):
			element.alignment = Point(alignment.x, alignment.y)

	async def handle_computed_bounds(self, action: Action) -> None:
		"""Apply measured sizes, lay the graph out and submit the result."""
		if not isinstance(action, ComputedBoundsAction):
			return
		index = self.graph_generator.index
		for b in action.bounds:
			element = index.get_by_id(b.element_id)
			if element is not None:
				self.apply_bounds(element, b.new_bounds)
		if action.alignments is not None:
			for a in action.alignments:
				element = index.get_by_id(a.element_id)
				if element is not None:
					self.apply_alignment(element, a.new_alignment)

		try:
			await self.layout_engine.layout(self.model, index)
		except Exception:
			logger.exception("Layout failed, showing the last computed geometry")
		await self.update_model(request_bounds=False)
