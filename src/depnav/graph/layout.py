"""Layered layout of the visible dependency graph using networkx."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import networkx as nx
from networkx.exception import NetworkXUnfeasible

from depnav.graph.models import DependencyNode, Point, is_node

if TYPE_CHECKING:
	from depnav.graph.index import GraphIndex
	from depnav.graph.models import DependencyGraph

logger = logging.getLogger(__name__)

# Horizontal padding added around a label when a node has no measured size
LABEL_PADDING = 20.0


class LayoutError(Exception):
	"""Exception raised when a layout pass fails."""


class GraphLayoutEngine:
	"""Places visible nodes in rows, one row per dependency depth."""

	def __init__(
		self,
		node_spacing: float = 30.0,
		layer_spacing: float = 60.0,
		char_width: float = 8.0,
		node_height: float = 30.0,
	) -> None:
		"""
		Initialize the layout engine.

		Args:
		    node_spacing: Horizontal gap between neighbouring nodes in a row.
		    layer_spacing: Vertical gap between rows.
		    char_width: Width of one label character, used for unmeasured nodes.
		    node_height: Height used for unmeasured nodes.

		"""
		self.node_spacing = node_spacing
		self.layer_spacing = layer_spacing
		self.char_width = char_width
		self.node_height = node_height

	def node_width(self, node: DependencyNode) -> float:
		if node.size.is_valid:
			return node.size.width
		return len(node.label) * self.char_width + LABEL_PADDING

	def node_row_height(self, node: DependencyNode) -> float:
		return node.size.height if node.size.is_valid else self.node_height

	async def layout(self, graph: DependencyGraph, index: GraphIndex) -> None:
		"""
		Compute node positions and write them onto the nodes.

		Args:
		    graph: Root of the model to lay out.
		    index: Lookup used to find the nodes to update.

		Raises:
		    LayoutError: If positions cannot be computed.

		"""
		nodes = [node for node in graph.nodes() if not node.hidden]
		edges = [(edge.source_id, edge.target_id) for edge in graph.edges() if not edge.hidden]
		try:
			positions = await asyncio.to_thread(self.compute_positions, nodes, edges)
		except Exception as e:
			msg = f"Layout of {len(nodes)} nodes failed: {e}"
			raise LayoutError(msg) from e

		for element_id, position in positions.items():
			element = index.get_by_id(element_id)
			if is_node(element):
				element.position = position
		logger.debug(f"Laid out {len(positions)} nodes")

	def compute_positions(self, nodes: list[DependencyNode], edges: list[tuple[str, str]]) -> dict[str, Point]:
		"""Return a position per node id. Pure function of its inputs."""
		g = nx.DiGraph()
		g.add_nodes_from(node.id for node in nodes)
		g.add_edges_from((source, target) for source, target in edges if source in g and target in g)

		by_id = {node.id: node for node in nodes}
		positions: dict[str, Point] = {}
		y = 0.0
		for layer in self._layers(g):
			x = 0.0
			row_height = 0.0
			for element_id in sorted(layer):
				node = by_id[element_id]
				positions[element_id] = Point(x, y)
				x += self.node_width(node) + self.node_spacing
				row_height = max(row_height, self.node_row_height(node))
			y += row_height + self.layer_spacing
		return positions

	@staticmethod
	def _layers(g: nx.DiGraph) -> list[list[str]]:
		try:
			return [list(generation) for generation in nx.topological_generations(g)]
		except NetworkXUnfeasible:
			logger.debug("Dependency cycle found, falling back to breadth-first depth")

		depth: dict[str, int] = {}
		pending = [n for n in g.nodes if g.in_degree(n) == 0]
		unplaced = list(g.nodes)
		while len(depth) < g.number_of_nodes():
			if not pending:
				pending = [next(n for n in unplaced if n not in depth)]
			for root in pending:
				for n, d in nx.single_source_shortest_path_length(g, root).items():
					if n not in depth or d < depth[n]:
						depth[n] = d
			pending = []

		layers: dict[int, list[str]] = {}
		for n, d in depth.items():
			layers.setdefault(d, []).append(n)
		return [layers[d] for d in sorted(layers)]
