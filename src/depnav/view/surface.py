"""
Terminal rendering surface for the dependency graph.

The surface keeps its own view state (the selection and the elements the
viewport is fitted to), measures nodes whenever a new model is submitted and
reports the sizes back through a ``ComputedBoundsAction`` so the model source
can lay the graph out. Rendering to the terminal happens on demand via
``render``.

"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from depnav.graph.models import Bounds, DependencyGraph, DependencyNode, is_node
from depnav.view.actions import (
	Action,
	ActionKind,
	ComputedBoundsAction,
	ElementAndBounds,
	FitToScreenAction,
	SelectAction,
	SelectAllAction,
	UpdateModelAction,
)

if TYPE_CHECKING:
	from depnav.view.dispatcher import ActionDispatcher

logger = logging.getLogger(__name__)

# Horizontal padding added around a node label when measuring it
LABEL_PADDING = 20.0


class ConsoleSurface:
	"""Shows the graph as a tree in a rich console."""

	def __init__(
		self,
		dispatcher: ActionDispatcher,
		console: Console | None = None,
		char_width: float = 8.0,
		node_height: float = 30.0,
	) -> None:
		"""
		Initialize the surface and register it with the dispatcher.

		Args:
		    dispatcher: Dispatcher delivering view actions.
		    console: Console to render to. Defaults to a new ``rich`` console.
		    char_width: Width of one label character when measuring nodes.
		    node_height: Height of every measured node.

		"""
		self.dispatcher = dispatcher
		self.console = console or Console()
		self.char_width = char_width
		self.node_height = node_height

		self.model: DependencyGraph | None = None
		self.selected_ids: set[str] = set()
		self.viewport_ids: list[str] = []
		self.commit_count = 0

		dispatcher.register(ActionKind.UPDATE_MODEL, self.handle_update_model)
		dispatcher.register(ActionKind.SELECT, self.handle_select)
		dispatcher.register(ActionKind.SELECT_ALL, self.handle_select_all)
		dispatcher.register(ActionKind.FIT_TO_SCREEN, self.handle_fit_to_screen)

	async def handle_update_model(self, action: Action) -> None:
		if not isinstance(action, UpdateModelAction) or action.model is None:
			return
		self.model = action.model
		self.commit_count += 1

		present = {child.id for child in self.model.children}
		self.selected_ids &= present
		self.viewport_ids = [element_id for element_id in self.viewport_ids if element_id in present]

		if action.request_bounds:
			await self.dispatcher.dispatch(ComputedBoundsAction(bounds=self.measure(self.model)))

	def handle_select(self, action: Action) -> None:
		if not isinstance(action, SelectAction):
			return
		self.selected_ids.update(action.selected_element_ids)
		self.selected_ids.difference_update(action.deselected_element_ids)

	def handle_select_all(self, action: Action) -> None:
		if not isinstance(action, SelectAllAction):
			return
		if action.select and self.model is not None:
			self.selected_ids = {node.id for node in self.model.nodes() if not node.hidden}
		else:
			self.selected_ids = set()

	def handle_fit_to_screen(self, action: Action) -> None:
		if isinstance(action, FitToScreenAction):
			self.viewport_ids = list(action.element_ids)

	def measure(self, model: DependencyGraph) -> list[ElementAndBounds]:
		"""Estimate the on-screen size of every visible node."""
		return [
			ElementAndBounds(
				element_id=node.id,
				new_bounds=Bounds(
					x=node.position.x,
					y=node.position.y,
					width=len(node.label) * self.char_width + LABEL_PADDING,
					height=self.node_height,
				),
			)
			for node in model.nodes()
			if not node.hidden
		]

	def node_text(self, node: DependencyNode) -> Text:
		text = Text(node.name, style="bold" if node.id in self.selected_ids else "")
		if node.version:
			text.append(f" {node.version}", style="cyan")
		if node.resolved_version:
			text.append(f" ({node.resolved_version})", style="green")
		if node.error:
			text.append(f"  {node.error}", style="red")
		elif not node.resolved:
			text.append("  ...", style="dim")
		if node.id in self.viewport_ids:
			text.append("  *", style="yellow")
		return text

	def build_tree(self) -> Tree:
		"""Build a tree of the visible graph, rooted at nodes nobody depends on."""
		tree = Tree(Text("dependencies", style="bold"))
		if self.model is None:
			return tree

		nodes = {node.id: node for node in self.model.nodes() if not node.hidden}
		children: dict[str, list[str]] = {node_id: [] for node_id in nodes}
		has_parent: set[str] = set()
		for edge in self.model.edges():
			if edge.hidden or edge.source_id not in nodes or edge.target_id not in nodes:
				continue
			children[edge.source_id].append(edge.target_id)
			has_parent.add(edge.target_id)

		roots = [node_id for node_id in nodes if node_id not in has_parent] or list(nodes)[:1]
		shown: set[str] = set()

		def add(branch: Tree, node_id: str, path: frozenset[str]) -> None:
			sub = branch.add(self.node_text(nodes[node_id]))
			if node_id in shown:
				if children[node_id]:
					sub.add(Text("(shown above)", style="dim"))
				return
			shown.add(node_id)
			for child_id in children[node_id]:
				if child_id in path:
					sub.add(Text(f"{child_id} (cycle)", style="magenta"))
				else:
					add(sub, child_id, path | {child_id})

		for root in roots:
			add(tree, root, frozenset({root}))
		for node_id in nodes:
			if node_id not in shown:
				add(tree, node_id, frozenset({node_id}))
		return tree

	def summary_table(self) -> Table:
		table = Table(title="Dependency Graph")
		table.add_column("Id", style="green")
		table.add_column("Version")
		table.add_column("Status")
		table.add_column("Position", justify="right")

		if self.model is None:
			return table
		for node in self.model.nodes():
			if node.hidden:
				continue
			if node.error:
				status = Text("error", style="red")
			elif node.resolved:
				status = Text("resolved", style="green")
			else:
				status = Text("pending", style="dim")
			table.add_row(
				node.id,
				node.resolved_version or "",
				status,
				f"{node.position.x:.0f}, {node.position.y:.0f}",
			)
		return table

	def render(self, *, table: bool = False) -> None:
		"""Print the current model."""
		if self.model is None or not self.model.children:
			self.console.print("[dim]The graph is empty.[/dim]")
			return
		self.console.print(self.summary_table() if table else self.build_tree())
