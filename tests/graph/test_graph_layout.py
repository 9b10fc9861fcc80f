"""Tests for GraphLayoutEngine."""

from unittest.mock import patch

import pytest

from depnav.graph.layout import LABEL_PADDING, GraphLayoutEngine, LayoutError
from depnav.graph.models import DependencyNode, Dimension, Point
from tests.fakes import FakeGraphGenerator, add_edge, add_node


def make_nodes(*names, width=50.0, height=20.0):
	return [DependencyNode(id=name, name=name, size=Dimension(width, height)) for name in names]


@pytest.mark.unit
def test_node_width_falls_back_to_label_length():
	engine = GraphLayoutEngine(char_width=10.0)
	measured = DependencyNode(id="a", name="a", size=Dimension(42.0, 10.0))
	unmeasured = DependencyNode(id="abc", name="abc")

	assert engine.node_width(measured) == 42.0
	assert engine.node_width(unmeasured) == 3 * 10.0 + LABEL_PADDING
	assert engine.node_row_height(unmeasured) == engine.node_height


@pytest.mark.unit
def test_compute_positions_one_row_per_depth():
	"""Dependants are placed above their dependencies; siblings share a row."""
	engine = GraphLayoutEngine(node_spacing=10.0, layer_spacing=5.0)
	nodes = make_nodes("app", "db", "web")
	edges = [("app", "db"), ("app", "web")]

	positions = engine.compute_positions(nodes, edges)

	assert positions["app"] == Point(0.0, 0.0)
	assert positions["db"] == Point(0.0, 25.0)
	assert positions["web"] == Point(60.0, 25.0)


@pytest.mark.unit
def test_compute_positions_ignores_edges_to_unknown_nodes():
	engine = GraphLayoutEngine()
	positions = engine.compute_positions(make_nodes("a"), [("a", "missing")])
	assert positions == {"a": Point(0.0, 0.0)}


@pytest.mark.unit
def test_compute_positions_with_cycle():
	"""Cycles fall back to breadth-first depth from the entry points."""
	engine = GraphLayoutEngine(layer_spacing=0.0)
	nodes = make_nodes("root", "a", "b", height=10.0)
	edges = [("root", "a"), ("a", "b"), ("b", "a")]

	positions = engine.compute_positions(nodes, edges)

	assert positions["root"].y == 0.0
	assert positions["a"].y == 10.0
	assert positions["b"].y == 20.0


@pytest.mark.unit
def test_compute_positions_pure_cycle():
	engine = GraphLayoutEngine(layer_spacing=0.0)
	positions = engine.compute_positions(make_nodes("a", "b", height=10.0), [("a", "b"), ("b", "a")])

	assert set(positions) == {"a", "b"}
	assert {positions["a"].y, positions["b"].y} == {0.0, 10.0}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_layout_positions_visible_nodes_only():
	generator = FakeGraphGenerator()
	add_node(generator, "a")
	add_node(generator, "b")
	hidden = add_node(generator, "c", hidden=True)
	hidden.position = Point(7.0, 7.0)
	add_edge(generator, "a->b", "a", "b")

	await GraphLayoutEngine().layout(generator.graph, generator.index)

	assert generator.index.get_by_id("a").position == Point(0.0, 0.0)
	assert generator.index.get_by_id("b").position.y > 0.0
	assert hidden.position == Point(7.0, 7.0)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_layout_wraps_failures():
	generator = FakeGraphGenerator()
	add_node(generator, "a")
	engine = GraphLayoutEngine()

	with patch.object(engine, "compute_positions", side_effect=ValueError("boom")), pytest.raises(LayoutError):
		await engine.layout(generator.graph, generator.index)
