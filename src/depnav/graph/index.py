"""Id-keyed lookup of graph elements."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
	from collections.abc import Iterator

	from depnav.graph.models import GraphElement

logger = logging.getLogger(__name__)


class GraphIndex:
	"""
	Maps element ids to the elements of the live model.

	The generator adds to the index as it discovers packages; the model source
	removes from it when the graph is cleared. Ids are unique: adding an element
	whose id is already taken keeps the element that was there first.

	"""

	def __init__(self) -> None:
		"""Initialize an empty index."""
		self._elements: dict[str, GraphElement] = {}

	def add(self, element: GraphElement) -> bool:
		"""
		Add an element to the index.

		Args:
		    element: The element to add.

		Returns:
		    True if the element was added, False if its id was already present.

		"""
		if element.id in self._elements:
			logger.debug(f"Element '{element.id}' already indexed, keeping existing entry")
			return False
		self._elements[element.id] = element
		return True

	def remove(self, element: GraphElement) -> None:
		"""Remove an element. Removing an element that is not indexed is a no-op."""
		if self._elements.pop(element.id, None) is None:
			logger.debug(f"Element '{element.id}' was not indexed, nothing to remove")

	def get_by_id(self, element_id: str) -> GraphElement | None:
		return self._elements.get(element_id)

	def all(self) -> list[GraphElement]:
		"""Return all indexed elements in insertion order."""
		return list(self._elements.values())

	def __contains__(self, element_id: object) -> bool:
		return element_id in self._elements

	def __len__(self) -> int:
		return len(self._elements)

	def __iter__(self) -> Iterator[GraphElement]:
		return iter(list(self._elements.values()))
