"""Utility functions for CLI operations in depnav."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
	from collections.abc import Sequence

	from rich.console import RenderableType
	from rich.status import Status

	from depnav.graph.models import DependencyNode

console = Console()
logger = logging.getLogger(__name__)


def _is_non_interactive() -> bool:
	return bool(os.environ.get("PYTEST_CURRENT_TEST") or os.environ.get("CI"))


class StatusIndicator:
	"""
	Load indicator backed by a rich status spinner.

	Calls nest: the spinner starts on the first ``True`` and stops when every
	``True`` has been matched by a ``False``.

	"""

	def __init__(self, message: str = "Resolving dependencies...", status_console: Console | None = None) -> None:
		"""
		Initialize the indicator.

		Args:
		    message: Text shown next to the spinner.
		    status_console: Console to draw on. Defaults to the shared console.

		"""
		self.message = message
		self.console = status_console or console
		self.depth = 0
		self._status: Status | None = None

	@property
	def is_active(self) -> bool:
		return self.depth > 0

	def __call__(self, loading: bool) -> None:
		if loading:
			self.depth += 1
			if self.depth == 1 and not _is_non_interactive():
				self._status = self.console.status(self.message)
				self._status.start()
			return

		self.depth = max(self.depth - 1, 0)
		if self.depth == 0 and self._status is not None:
			self._status.stop()
			self._status = None


def _print_summary(title: str, body: RenderableType, style: str) -> None:
	console.print()
	console.print(Panel(body, title=f"[bold {style}]{title}[/]", title_align="left", border_style=style))
	console.print()


def show_error(message: str, exception: Exception | None = None) -> None:
	"""
	Display an error summary with standardized formatting.

	Args:
	        message: The error message to display
	        exception: Optional exception that caused the error

	"""
	error_text = message
	if exception:
		error_text += f"\n\nDetails: {escape(str(exception))}"
		logger.debug("Error occurred", exc_info=exception)

	_print_summary("Error", error_text, "red")


def show_resolution_failures(nodes: Sequence[DependencyNode]) -> None:
	"""
	List packages whose dependencies could not be fetched.

	Args:
	        nodes: Nodes carrying a resolution error.

	"""
	if not nodes:
		return
	table = Table(box=None, show_header=True, header_style="bold")
	table.add_column("Package", style="cyan", no_wrap=True)
	table.add_column("Error")
	for node in nodes:
		table.add_row(escape(node.id), escape(node.error or ""))
	_print_summary("Some packages could not be resolved", table, "yellow")


def exit_with_error(message: str, exit_code: int = 1, exception: Exception | None = None) -> None:
	"""
	Display an error message and exit.

	Args:
	        message: Error message to display
	        exit_code: Exit code to use
	        exception: Optional exception that caused the error

	"""
	show_error(message, exception)
	raise typer.Exit(exit_code) from exception


def handle_keyboard_interrupt() -> None:
	"""Handles KeyboardInterrupt by printing a message and exiting cleanly."""
	console.print("\n[yellow]Operation cancelled by user.[/yellow]")
	raise typer.Exit(130)  # Standard exit code for SIGINT
