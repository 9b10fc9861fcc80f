"""Tests for the dependency graph data models."""

import pytest

from depnav.graph.models import (
	DependencyEdge,
	DependencyGraph,
	DependencyNode,
	Dimension,
	GraphElement,
	edge_id,
	is_edge,
	is_node,
	node_id,
)


@pytest.mark.unit
@pytest.mark.parametrize(
	("name", "version", "expected"),
	[
		("requests", None, "requests"),
		("Foo_Bar", None, "foo-bar"),
		("urllib3", "<3", "urllib3@<3"),
		("Django", "4.2.1", "django@4.2.1"),
	],
)
def test_node_id(name, version, expected):
	"""Node ids use the canonical package name and append the version if given."""
	assert node_id(name, version) == expected


@pytest.mark.unit
def test_edge_id():
	assert edge_id("a", "b") == "a->b"


@pytest.mark.unit
def test_type_guards():
	"""Only nodes and edges with the matching type tag pass the guards."""
	node = DependencyNode(id="a", name="a")
	edge = DependencyEdge(id="a->b", source_id="a", target_id="b")
	plain = GraphElement(id="x", type="node")

	assert is_node(node)
	assert not is_node(edge)
	assert not is_node(plain)
	assert not is_node(None)
	assert is_edge(edge)
	assert not is_edge(node)


@pytest.mark.unit
def test_graph_nodes_and_edges():
	node = DependencyNode(id="a", name="a")
	edge = DependencyEdge(id="a->a", source_id="a", target_id="a")
	graph = DependencyGraph(children=[node, edge])

	assert graph.nodes() == [node]
	assert graph.edges() == [edge]


@pytest.mark.unit
def test_node_defaults_and_label():
	"""New nodes are unresolved, visible and unmeasured."""
	node = DependencyNode(id="django@>=4", name="Django", version=">=4")

	assert node.resolved is False
	assert node.hidden is False
	assert node.error is None
	assert node.size == Dimension()
	assert not node.size.is_valid
	assert node.label == "Django >=4"
	assert DependencyNode(id="a", name="a").label == "a"
