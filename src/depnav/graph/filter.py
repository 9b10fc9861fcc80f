"""Text filter deciding which graph elements are shown."""

from __future__ import annotations

import logging
from collections import defaultdict, deque
from typing import TYPE_CHECKING

from depnav.graph.models import is_edge, is_node

if TYPE_CHECKING:
	from depnav.graph.index import GraphIndex
	from depnav.graph.models import DependencyGraph

logger = logging.getLogger(__name__)


class DependencyGraphFilter:
	"""
	Hides the parts of the graph that are unrelated to the filter text.

	A node stays visible when its name or id contains the text, or when it
	(transitively) depends on such a node, so the path from the roots down to
	every match remains on screen. An edge is visible only if both of its ends
	are. An empty filter shows everything.

	"""

	def __init__(self) -> None:
		"""Initialize the filter with no filter text."""
		self.filter_text = ""

	def set_filter(self, text: str) -> None:
		self.filter_text = (text or "").strip().lower()

	def matches(self, name: str, element_id: str) -> bool:
		return self.filter_text in name.lower() or self.filter_text in element_id.lower()

	def refresh(self, graph: DependencyGraph, index: GraphIndex) -> None:
		"""
		Recompute ``hidden`` for every element of the graph.

		Args:
		    graph: The live model.
		    index: Lookup used to resolve edge endpoints.

		"""
		nodes = graph.nodes()
		edges = graph.edges()

		if not self.filter_text:
			for element in graph.children:
				element.hidden = False
			return

		dependants: dict[str, list[str]] = defaultdict(list)
		for edge in edges:
			if is_node(index.get_by_id(edge.source_id)):
				dependants[edge.target_id].append(edge.source_id)

		visible = {node.id for node in nodes if self.matches(node.name, node.id)}
		queue = deque(visible)
		while queue:
			current = queue.popleft()
			for source_id in dependants.get(current, ()):
				if source_id not in visible:
					visible.add(source_id)
					queue.append(source_id)

		for element in graph.children:
			if is_node(element):
				element.hidden = element.id not in visible
			elif is_edge(element):
				element.hidden = element.source_id not in visible or element.target_id not in visible

		logger.debug(f"Filter '{self.filter_text}' leaves {len(visible)} of {len(nodes)} nodes visible")
