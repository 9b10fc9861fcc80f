"""
Logging setup for depnav.

Console output goes through rich. The ``depnav`` logger is opened up to DEBUG
whenever verbose output or a log file is requested, while the root logger
stays at WARNING so library chatter is only written when asked for.

"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.logging import RichHandler

PACKAGE_LOGGER = "depnav"
FILE_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s"

# HTTP client loggers that stay at WARNING unless verbose
NOISY_LOGGERS = ("urllib3", "requests", "asyncio")


def _file_handler(log_file_path: Path | str) -> logging.Handler | None:
	path = Path(log_file_path)
	try:
		path.parent.mkdir(parents=True, exist_ok=True)
		handler = logging.FileHandler(path, mode="a", encoding="utf-8")
	except OSError as e:
		logging.getLogger(PACKAGE_LOGGER).error(f"Could not log to {path}: {e}")
		return None
	handler.setLevel(logging.DEBUG)
	handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
	return handler


def setup_logging(
	is_verbose: bool = False,
	log_to_console: bool = True,
	log_file_path: Path | str | None = None,
) -> None:
	"""
	Configure the root and ``depnav`` loggers.

	Args:
	    is_verbose: Show DEBUG records from depnav and its libraries on the console.
	    log_to_console: Attach a rich console handler.
	    log_file_path: Also write every depnav record to this file.

	"""
	console_level = logging.DEBUG if is_verbose else logging.WARNING

	root_logger = logging.getLogger()
	for handler in root_logger.handlers[:]:
		root_logger.removeHandler(handler)
	root_logger.setLevel(console_level)

	if log_to_console:
		root_logger.addHandler(
			RichHandler(level=console_level, rich_tracebacks=True, show_time=is_verbose, show_path=is_verbose)
		)

	package_logger = logging.getLogger(PACKAGE_LOGGER)
	package_logger.setLevel(logging.DEBUG if is_verbose or log_file_path else logging.WARNING)

	for name in NOISY_LOGGERS:
		logging.getLogger(name).setLevel(logging.DEBUG if is_verbose else logging.WARNING)

	if log_file_path:
		file_handler = _file_handler(log_file_path)
		if file_handler is not None:
			root_logger.addHandler(file_handler)
			package_logger.debug(f"Logging to file: {log_file_path}")


def log_environment_info() -> None:
	"""Log information about the execution environment."""
	import platform

	from depnav import __version__

	logger = logging.getLogger(__name__)
	logger.info("depnav version: %s", __version__)
	logger.info("Python version: %s", platform.python_version())
	logger.info("Platform: %s", platform.platform())
