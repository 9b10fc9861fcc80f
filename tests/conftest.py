"""Global test fixtures and configuration."""

from __future__ import annotations

from io import StringIO
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from depnav.graph.filter import DependencyGraphFilter
from depnav.graph.layout import GraphLayoutEngine
from depnav.view.actions import Action, ActionKind
from depnav.view.dispatcher import ActionDispatcher
from depnav.view.model_source import DepGraphModelSource
from tests.fakes import FakeGraphGenerator


@pytest.fixture
def console() -> Console:
	"""A console writing to memory, read back with ``console.file.getvalue()``."""
	return Console(file=StringIO(), width=120, force_terminal=False, color_system=None)


@pytest.fixture
def dispatcher() -> ActionDispatcher:
	return ActionDispatcher()


@pytest.fixture
def recorded_actions(dispatcher: ActionDispatcher) -> list[Action]:
	"""Every action dispatched, in order. Registered before any other handler."""
	actions: list[Action] = []
	for kind in ActionKind:
		dispatcher.register(kind, actions.append)
	return actions


@pytest.fixture
def generator() -> FakeGraphGenerator:
	return FakeGraphGenerator()


@pytest.fixture
def graph_filter() -> DependencyGraphFilter:
	return DependencyGraphFilter()


@pytest.fixture
def load_indicator() -> MagicMock:
	return MagicMock()


@pytest.fixture
def model_source(
	dispatcher: ActionDispatcher,
	recorded_actions: list[Action],
	generator: FakeGraphGenerator,
	graph_filter: DependencyGraphFilter,
	load_indicator: MagicMock,
) -> DepGraphModelSource:
	"""Model source with no surface attached, so commits never trigger a layout."""
	return DepGraphModelSource(
		dispatcher,
		generator,
		graph_filter,
		GraphLayoutEngine(),
		load_indicator=load_indicator,
	)
