"""In-memory collaborators shared by the view and CLI tests."""

from __future__ import annotations

import asyncio

from depnav.graph.generator import IGraphGenerator
from depnav.graph.index import GraphIndex
from depnav.graph.models import DependencyEdge, DependencyGraph, DependencyNode, edge_id, is_node, node_id


class FakeGraphGenerator(IGraphGenerator):
	"""Resolves packages from a fixed ``name -> [dependency names]`` mapping."""

	def __init__(
		self,
		dependencies: dict[str, list[str]] | None = None,
		async_failures: set[str] | None = None,
		sync_failures: set[str] | None = None,
	) -> None:
		self.dependencies = dependencies or {}
		self.async_failures = set(async_failures or ())
		self.sync_failures = set(sync_failures or ())
		self.graph = DependencyGraph()
		self.index = GraphIndex()
		self.resolve_calls: list[str] = []

	def generate_node(self, name: str, version: str | None = None) -> DependencyNode:
		existing = self.index.get_by_id(node_id(name, version))
		if is_node(existing):
			return existing
		node = DependencyNode(id=node_id(name, version), name=name, version=version)
		self.graph.children.append(node)
		self.index.add(node)
		return node

	def resolve_node(self, node: DependencyNode):
		# Plain function returning a coroutine, so it can also fail before any await
		self.resolve_calls.append(node.id)
		if node.name in self.sync_failures:
			msg = f"{node.name} failed before fetching"
			raise RuntimeError(msg)
		return self._resolve(node)

	async def _resolve(self, node: DependencyNode) -> list[DependencyNode]:
		await asyncio.sleep(0)
		if node.resolved:
			return []
		if node.name in self.async_failures:
			msg = f"{node.name} could not be fetched"
			raise RuntimeError(msg)

		node.resolved = True
		node.resolved_version = "1.0"
		node.error = None
		if self.index.get_by_id(node.id) is not node:
			return []

		new_nodes = []
		for name in self.dependencies.get(node.name, []):
			is_new = node_id(name) not in self.index
			child = self.generate_node(name)
			if is_new:
				new_nodes.append(child)
			eid = edge_id(node.id, child.id)
			if eid not in self.index:
				edge = DependencyEdge(id=eid, source_id=node.id, target_id=child.id)
				self.graph.children.append(edge)
				self.index.add(edge)
		return new_nodes


def add_node(generator: IGraphGenerator, element_id: str, hidden: bool = False, resolved: bool = False) -> DependencyNode:
	"""Put a node with an arbitrary id straight into a generator's graph."""
	node = DependencyNode(id=element_id, name=element_id, hidden=hidden, resolved=resolved)
	generator.graph.children.append(node)
	generator.index.add(node)
	return node


def add_edge(generator: IGraphGenerator, element_id: str, source_id: str, target_id: str) -> DependencyEdge:
	"""Put an edge with an arbitrary id straight into a generator's graph."""
	edge = DependencyEdge(id=element_id, source_id=source_id, target_id=target_id)
	generator.graph.children.append(edge)
	generator.index.add(edge)
	return edge
