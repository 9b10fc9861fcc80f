"""Graph generators that grow the dependency graph one package at a time."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod

from depnav.graph.index import GraphIndex
from depnav.graph.models import DependencyEdge, DependencyGraph, DependencyNode, edge_id, is_node, node_id
from depnav.graph.registry import PyPIRegistry, RegistryError

logger = logging.getLogger(__name__)


class IGraphGenerator(ABC):
	"""
	Source of dependency graph nodes.

	Implementations own the live ``graph`` and its ``index`` and mutate both as
	packages are created and resolved.

	"""

	graph: DependencyGraph
	index: GraphIndex

	@abstractmethod
	def generate_node(self, name: str, version: str | None = None) -> DependencyNode:
		"""
		Return the node for a package, creating and indexing it if needed.

		Args:
		    name: Package name.
		    version: Exact version or version specifier, if any.

		Returns:
		    The new node, or the existing one when its id is already indexed.

		"""

	@abstractmethod
	async def resolve_node(self, node: DependencyNode) -> list[DependencyNode]:
		"""
		Fetch a node's direct dependencies and merge them into the graph.

		Calling this on a node that is already resolved does nothing.

		Returns:
		    The nodes this call added to the graph.

		"""


class PyPIGraphGenerator(IGraphGenerator):
	"""Builds the dependency graph from metadata on a Python package index."""

	def __init__(self, registry: PyPIRegistry | None = None) -> None:
		"""
		Initialize the generator.

		Args:
		    registry: Registry client to query. Defaults to public PyPI.

		"""
		self.registry = registry or PyPIRegistry()
		self.graph = DependencyGraph()
		self.index = GraphIndex()
		self._in_flight: dict[str, tuple[DependencyNode, asyncio.Task[list[DependencyNode]]]] = {}

	def generate_node(self, name: str, version: str | None = None) -> DependencyNode:
		"""Return the node for ``name``/``version``, adding it to the graph if new."""
		existing = self.index.get_by_id(node_id(name, version))
		if is_node(existing):
			return existing

		node = DependencyNode(id=node_id(name, version), name=name, version=version)
		self.graph.children.append(node)
		self.index.add(node)
		logger.debug(f"Created node '{node.id}'")
		return node

	async def resolve_node(self, node: DependencyNode) -> list[DependencyNode]:
		"""
		Resolve ``node`` against the registry.

		Concurrent calls for the same node share a single fetch.

		Raises:
		    RegistryError: If the package or a matching release cannot be found.
		        The message is also stored on ``node.error``.

		"""
		if node.resolved:
			return []

		pending = self._in_flight.get(node.id)
		if pending is not None and pending[0] is node:
			return await asyncio.shield(pending[1])

		task = asyncio.ensure_future(self._resolve(node))
		self._in_flight[node.id] = (node, task)
		try:
			return await asyncio.shield(task)
		finally:
			if self._in_flight.get(node.id, (None, None))[1] is task:
				del self._in_flight[node.id]

	async def _resolve(self, node: DependencyNode) -> list[DependencyNode]:
		try:
			version, requirements = await asyncio.to_thread(self.registry.fetch_requirements, node.name, node.version)
		except RegistryError as e:
			node.error = str(e)
			raise

		node.resolved_version = version
		node.resolved = True
		node.error = None

		if self.index.get_by_id(node.id) is not node:
			# Removed while the fetch was running; the result has nowhere to go.
			logger.debug(f"Node '{node.id}' is no longer indexed, discarding its dependencies")
			return []

		new_nodes: list[DependencyNode] = []
		for requirement in requirements:
			spec = str(requirement.specifier) or None
			is_new = node_id(requirement.name, spec) not in self.index
			child = self.generate_node(requirement.name, spec)
			if child is node:
				continue
			if is_new:
				new_nodes.append(child)

			eid = edge_id(node.id, child.id)
			if eid not in self.index:
				edge = DependencyEdge(id=eid, source_id=node.id, target_id=child.id)
				self.graph.children.append(edge)
				self.index.add(edge)

		logger.info(f"Resolved {node.id} to {version}: {len(requirements)} dependencies, {len(new_nodes)} new")
		return new_nodes
