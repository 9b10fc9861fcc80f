"""Tests for DependencyGraphFilter."""

import pytest

from depnav.graph.filter import DependencyGraphFilter
from tests.fakes import FakeGraphGenerator, add_edge, add_node


@pytest.fixture
def chain_graph():
	"""app -> web -> http, plus an unrelated cli package."""
	generator = FakeGraphGenerator()
	for name in ("app", "web", "http", "cli"):
		add_node(generator, name)
	add_edge(generator, "app->web", "app", "web")
	add_edge(generator, "web->http", "web", "http")
	return generator


def hidden_ids(generator):
	return {element.id for element in generator.graph.children if element.hidden}


@pytest.mark.unit
def test_set_filter_normalizes_text():
	graph_filter = DependencyGraphFilter()
	graph_filter.set_filter("  HTTP ")
	assert graph_filter.filter_text == "http"
	graph_filter.set_filter(None)
	assert graph_filter.filter_text == ""


@pytest.mark.unit
def test_empty_filter_shows_everything(chain_graph):
	"""Clearing the filter unhides every element."""
	for element in chain_graph.graph.children:
		element.hidden = True

	DependencyGraphFilter().refresh(chain_graph.graph, chain_graph.index)

	assert hidden_ids(chain_graph) == set()


@pytest.mark.unit
def test_match_keeps_its_dependants_visible(chain_graph):
	"""Packages that depend on a match stay visible along with the match."""
	graph_filter = DependencyGraphFilter()
	graph_filter.set_filter("http")

	graph_filter.refresh(chain_graph.graph, chain_graph.index)

	assert hidden_ids(chain_graph) == {"cli"}


@pytest.mark.unit
def test_dependencies_of_a_match_are_hidden(chain_graph):
	"""Edges are hidden as soon as one of their ends is."""
	graph_filter = DependencyGraphFilter()
	graph_filter.set_filter("web")

	graph_filter.refresh(chain_graph.graph, chain_graph.index)

	assert hidden_ids(chain_graph) == {"http", "cli", "web->http"}


@pytest.mark.unit
def test_filter_without_matches_hides_everything(chain_graph):
	graph_filter = DependencyGraphFilter()
	graph_filter.set_filter("nothing-matches")

	graph_filter.refresh(chain_graph.graph, chain_graph.index)

	assert hidden_ids(chain_graph) == {element.id for element in chain_graph.graph.children}


@pytest.mark.unit
def test_filter_terminates_on_cycles():
	generator = FakeGraphGenerator()
	for name in ("a", "b", "c"):
		add_node(generator, name)
	add_edge(generator, "a->b", "a", "b")
	add_edge(generator, "b->a", "b", "a")
	add_edge(generator, "b->c", "b", "c")
	graph_filter = DependencyGraphFilter()
	graph_filter.set_filter("c")

	graph_filter.refresh(generator.graph, generator.index)

	assert hidden_ids(generator) == set()
