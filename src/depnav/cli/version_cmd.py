"""Version information command."""

from __future__ import annotations

import platform

import typer
from rich.table import Table

from depnav import __version__
from depnav.utils.cli_utils import console


def register_command(app: typer.Typer) -> None:
	"""Register the version command with the CLI app."""

	@app.command(name="version")
	def version_command() -> None:
		"""Show depnav version information."""
		table = Table(title="depnav Version Information")
		table.add_column("", style="green")
		table.add_column("", style="white")

		table.add_row("depnav version:", f"v{__version__}")
		table.add_row("Python version:", platform.python_version())
		table.add_row("Platform:", platform.platform())

		console.print(table)
