"""Dependency graph model, generation, filtering and layout."""

from .filter import DependencyGraphFilter
from .generator import IGraphGenerator, PyPIGraphGenerator
from .index import GraphIndex
from .layout import GraphLayoutEngine, LayoutError
from .models import DependencyEdge, DependencyGraph, DependencyNode, GraphElement, is_edge, is_node, node_id
from .registry import NoMatchingVersionError, PackageNotFoundError, PyPIRegistry, RegistryError

__all__ = [
	"DependencyEdge",
	"DependencyGraph",
	"DependencyGraphFilter",
	"DependencyNode",
	"GraphElement",
	"GraphIndex",
	"GraphLayoutEngine",
	"IGraphGenerator",
	"LayoutError",
	"NoMatchingVersionError",
	"PackageNotFoundError",
	"PyPIGraphGenerator",
	"PyPIRegistry",
	"RegistryError",
	"is_edge",
	"is_node",
	"node_id",
]
