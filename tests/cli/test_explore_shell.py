"""Tests for the interactive exploration shell."""

from unittest.mock import MagicMock

import pytest
import pytest_asyncio

from depnav.cli.shell import ExploreShell
from depnav.config.config_schema import AppConfigSchema
from depnav.view.session import create_session
from tests.fakes import FakeGraphGenerator


@pytest.fixture
def generator():
	return FakeGraphGenerator({"app": ["web", "db"], "web": ["db"]}, async_failures={"broken"})


@pytest_asyncio.fixture
async def shell(console, generator):
	session = create_session(AppConfigSchema(), console=console, generator=generator, load_indicator=MagicMock())
	await session.model_source.start()
	return ExploreShell(session, console)


@pytest.mark.cli
@pytest.mark.asyncio
async def test_blank_line_and_quit(shell):
	assert await shell.execute("") is True
	assert await shell.execute("   ") is True
	assert await shell.execute("quit") is False
	assert await shell.execute("EXIT") is False


@pytest.mark.cli
@pytest.mark.asyncio
async def test_unknown_command(shell, console):
	assert await shell.execute("frobnicate [now]") is True
	assert "Unknown command 'frobnicate'" in console.file.getvalue()


@pytest.mark.cli
@pytest.mark.asyncio
async def test_unbalanced_quotes(shell, console):
	assert await shell.execute('add "app') is True
	assert "Could not parse command" in console.file.getvalue()


@pytest.mark.cli
@pytest.mark.asyncio
async def test_add_expands_package(shell, generator, console):
	await shell.execute("add app")

	assert generator.index.get_by_id("app").resolved
	assert "web" in generator.index
	assert shell.surface.selected_ids == {"app"}
	assert "app" in console.file.getvalue()


@pytest.mark.cli
@pytest.mark.asyncio
async def test_add_usage(shell, console, generator):
	await shell.execute("add")
	await shell.execute("add a b c")

	assert "Usage: add <name> [version]" in console.file.getvalue()
	assert len(generator.index) == 0


@pytest.mark.cli
@pytest.mark.asyncio
async def test_add_with_version(shell, generator):
	await shell.execute("add app '>=1,<2'")
	assert "app@>=1,<2" in generator.index


@pytest.mark.cli
@pytest.mark.asyncio
async def test_expand_named_nodes(shell, generator, console):
	await shell.execute("add app")

	await shell.execute("expand web missing")

	assert generator.index.get_by_id("web").resolved
	assert generator.index.get_by_id("db").resolved is False
	assert "No package node 'missing'" in console.file.getvalue()


@pytest.mark.cli
@pytest.mark.asyncio
async def test_expand_without_selection(shell, console):
	await shell.execute("expand")
	assert "Nothing to expand." in console.file.getvalue()


@pytest.mark.cli
@pytest.mark.asyncio
async def test_select_expands(shell, generator):
	await shell.execute("add app")

	await shell.execute("select db")

	assert shell.surface.selected_ids == {"app", "db"}
	assert generator.index.get_by_id("db").resolved


@pytest.mark.cli
@pytest.mark.asyncio
async def test_expand_all(shell, generator, console):
	await shell.execute("add app")

	await shell.execute("expand-all")

	assert all(node.resolved for node in generator.graph.nodes())
	assert "Expanded the graph in 1 wave(s)." in console.file.getvalue()


@pytest.mark.cli
@pytest.mark.asyncio
async def test_failed_package_is_shown(shell, generator, console):
	await shell.execute("add broken")

	assert generator.index.get_by_id("broken").error == "broken could not be fetched"
	assert "broken could not be fetched" in console.file.getvalue()


@pytest.mark.cli
@pytest.mark.asyncio
async def test_filter_center_and_clear(shell, generator):
	await shell.execute("add app")

	await shell.execute("filter web")
	assert generator.index.get_by_id("db").hidden is True
	assert shell.surface.viewport_ids == ["app", "web"]

	await shell.execute("center db web")
	assert shell.surface.viewport_ids == ["web"]

	await shell.execute("clear")
	assert len(generator.index) == 0
	assert shell.model_source.graph_filter.filter_text == ""


@pytest.mark.cli
@pytest.mark.asyncio
async def test_show_and_help(shell, console):
	await shell.execute("add app")

	await shell.execute("show --table")
	await shell.execute("help")

	output = console.file.getvalue()
	assert "Dependency Graph" in output
	assert "expand-all" in output
	assert "show [--table]" in output
