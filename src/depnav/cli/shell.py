"""Line-oriented command shell for an exploration session."""

from __future__ import annotations

import logging
import shlex
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from depnav.graph.models import is_node

if TYPE_CHECKING:
	from collections.abc import Awaitable, Callable

	from rich.console import Console

	from depnav.view.session import Session

logger = logging.getLogger(__name__)

# "add" takes a name and an optional version
MAX_ADD_ARGS = 2

COMMAND_HELP = [
	("add <name> [version]", "Add a package and expand it"),
	("select <id>...", "Select nodes (expands the unresolved ones)"),
	("expand [id]...", "Expand the given nodes, or the current selection"),
	("expand-all", "Expand every unresolved node until the graph is complete"),
	("filter [text]", "Show only nodes matching text and their dependants"),
	("center <id>...", "Fit the view to the given nodes"),
	("clear", "Remove everything from the graph"),
	("show [--table]", "Print the graph as a tree, or as a table"),
	("help", "Show this help"),
	("quit", "Leave the session"),
]


class ExploreShell:
	"""Parses user commands and runs them against a session's model source."""

	def __init__(self, session: Session, console: Console) -> None:
		"""
		Initialize the shell.

		Args:
		    session: The session to drive.
		    console: Console for command output.

		"""
		self.session = session
		self.model_source = session.model_source
		self.surface = session.surface
		self.console = console
		self._commands: dict[str, Callable[[list[str]], Awaitable[bool]]] = {
			"add": self.cmd_add,
			"select": self.cmd_select,
			"expand": self.cmd_expand,
			"expand-all": self.cmd_expand_all,
			"filter": self.cmd_filter,
			"center": self.cmd_center,
			"clear": self.cmd_clear,
			"show": self.cmd_show,
			"help": self.cmd_help,
			"quit": self.cmd_quit,
			"exit": self.cmd_quit,
		}

	async def execute(self, line: str) -> bool:
		"""
		Run one command line.

		Returns:
		    False when the session should end, True otherwise.

		"""
		try:
			words = shlex.split(line)
		except ValueError as e:
			self.console.print(f"[yellow]Could not parse command: {escape(str(e))}[/yellow]")
			return True
		if not words:
			return True

		name, args = words[0].lower(), words[1:]
		command = self._commands.get(name)
		if command is None:
			self.console.print(f"[yellow]Unknown command '{escape(name)}'. Type 'help' for a list of commands.[/yellow]")
			return True
		logger.debug(f"Running command {name} {args}")
		return await command(args)

	async def cmd_add(self, args: list[str]) -> bool:
		if not args or len(args) > MAX_ADD_ARGS:
			self.console.print("[yellow]Usage: add <name> \\[version][/yellow]")
			return True
		await self.model_source.create_node(args[0], args[1] if len(args) > 1 else None)
		self.surface.render()
		return True

	async def cmd_select(self, args: list[str]) -> bool:
		await self.model_source.select(args)
		self.surface.render()
		return True

	async def cmd_expand(self, args: list[str]) -> bool:
		index = self.model_source.graph_generator.index
		ids = args or sorted(self.surface.selected_ids)
		nodes = []
		for element_id in ids:
			element = index.get_by_id(element_id)
			if is_node(element):
				nodes.append(element)
			else:
				self.console.print(f"[yellow]No package node '{escape(element_id)}'[/yellow]")
		if not nodes:
			self.console.print("Nothing to expand.")
			return True
		await self.model_source.resolve_nodes(nodes)
		self.surface.render()
		return True

	async def cmd_expand_all(self, _args: list[str]) -> bool:
		waves = await self.model_source.resolve_graph()
		self.console.print(f"Expanded the graph in {waves} wave(s).")
		self.surface.render()
		return True

	async def cmd_filter(self, args: list[str]) -> bool:
		await self.model_source.filter(" ".join(args))
		self.surface.render()
		return True

	async def cmd_center(self, args: list[str]) -> bool:
		await self.model_source.center(args)
		self.surface.render()
		return True

	async def cmd_clear(self, _args: list[str]) -> bool:
		await self.model_source.clear()
		self.surface.render()
		return True

	async def cmd_show(self, args: list[str]) -> bool:
		self.surface.render(table="--table" in args or "-t" in args)
		return True

	async def cmd_help(self, _args: list[str]) -> bool:
		table = Table(title="Commands", show_header=False)
		table.add_column("Command", style="green")
		table.add_column("Description")
		for usage, description in COMMAND_HELP:
			table.add_row(Text(usage), description)
		self.console.print(table)
		return True

	async def cmd_quit(self, _args: list[str]) -> bool:
		return False
