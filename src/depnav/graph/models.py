"""Data models for dependency graph elements."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeGuard

from packaging.utils import canonicalize_name

NODE_TYPE = "node"
EDGE_TYPE = "edge"
GRAPH_TYPE = "graph"

ROOT_ID = "graph"


@dataclass
class Point:
	"""A position in model coordinates."""

	x: float = 0.0
	y: float = 0.0


@dataclass
class Dimension:
	"""Width and height of a rendered element."""

	width: float = -1.0
	height: float = -1.0

	@property
	def is_valid(self) -> bool:
		return self.width >= 0 and self.height >= 0


@dataclass
class Bounds:
	"""Position and size of a rendered element."""

	x: float = 0.0
	y: float = 0.0
	width: float = 0.0
	height: float = 0.0


@dataclass
class GraphElement:
	"""Base class for everything that lives in the dependency graph."""

	id: str
	type: str = ""
	hidden: bool = False


@dataclass
class DependencyNode(GraphElement):
	"""
	One package in the dependency graph.

	A node starts out unresolved. Resolving it fetches its direct dependencies
	from the registry and flips ``resolved`` to True; a failed attempt leaves
	the reason in ``error`` until a later attempt succeeds.

	"""

	type: str = NODE_TYPE
	name: str = ""
	version: str | None = None
	resolved_version: str | None = None
	resolved: bool = False
	error: str | None = None
	position: Point = field(default_factory=Point)
	size: Dimension = field(default_factory=Dimension)
	alignment: Point | None = None

	@property
	def label(self) -> str:
		return f"{self.name} {self.version}" if self.version else self.name


@dataclass
class DependencyEdge(GraphElement):
	"""A "depends on" relation from ``source_id`` to ``target_id``."""

	type: str = EDGE_TYPE
	source_id: str = ""
	target_id: str = ""


@dataclass
class DependencyGraph:
	"""Root of the live model. ``children`` holds both nodes and edges."""

	id: str = ROOT_ID
	type: str = GRAPH_TYPE
	children: list[GraphElement] = field(default_factory=list)

	def nodes(self) -> list[DependencyNode]:
		return [child for child in self.children if is_node(child)]

	def edges(self) -> list[DependencyEdge]:
		return [child for child in self.children if is_edge(child)]


def node_id(name: str, version: str | None = None) -> str:
	"""
	Derive a node id from a package name and optional version.

	Names are canonicalised so that ``Foo_Bar`` and ``foo-bar`` map to the same
	node.

	Args:
	    name: Package name as written by the user or a requirement.
	    version: Exact version or version specifier, if any.

	Returns:
	    ``name`` or ``name@version``.

	"""
	canonical = canonicalize_name(name)
	return f"{canonical}@{version}" if version else canonical


def edge_id(source_id: str, target_id: str) -> str:
	"""Derive the id of the edge between two nodes."""
	return f"{source_id}->{target_id}"


def is_node(element: GraphElement | None) -> TypeGuard[DependencyNode]:
	return isinstance(element, DependencyNode) and element.type == NODE_TYPE


def is_edge(element: GraphElement | None) -> TypeGuard[DependencyEdge]:
	return isinstance(element, DependencyEdge) and element.type == EDGE_TYPE
