"""
Configuration loader for depnav.

This module provides functionality for loading and managing
configuration settings.

"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from xdg.BaseDirectory import xdg_config_home

from depnav.config.config_schema import AppConfigSchema

logger = logging.getLogger(__name__)

ENV_PREFIX = "DEPNAV_"
LOCAL_CONFIG_NAME = ".depnav.yml"


class ConfigError(Exception):
	"""Exception raised for configuration errors."""


class ConfigFileNotFoundError(ConfigError):
	"""Exception raised when configuration file is not found."""


class ConfigParsingError(ConfigError):
	"""Exception raised when configuration file cannot be parsed."""


class ConfigLoader:
	"""
	Loads and manages configuration for depnav using Pydantic schemas.

	Settings come from the defaults in ``AppConfigSchema``, overridden by a
	YAML file and then by ``DEPNAV_<SECTION>_<KEY>`` environment variables.

	"""

	_instance: ConfigLoader | None = None  # For singleton pattern

	@classmethod
	def get_instance(cls, config_file: Path | None = None, reload: bool = False) -> ConfigLoader:
		"""
		Get the singleton instance of ConfigLoader.

		Args:
			config_file: Path to configuration file (optional)
			reload: Whether to reload config even if already loaded

		Returns:
			ConfigLoader: Singleton instance

		"""
		if cls._instance is None or reload:
			cls._instance = cls(config_file)
		return cls._instance

	def __init__(self, config_file: Path | None = None) -> None:
		"""
		Initialize the configuration loader.

		Args:
			config_file: Path to configuration file (optional)

		Raises:
			ConfigFileNotFoundError: If an explicitly given file does not exist.
			ConfigParsingError: If the file cannot be parsed or validated.

		"""
		self._config_file = config_file
		self._resolved_config_file = self._resolve_config_file(config_file)
		self._app_config = self._load_config()
		logger.debug("ConfigLoader initialized")

	@property
	def config_file(self) -> Path | None:
		return self._resolved_config_file

	def _resolve_config_file(self, config_file: Path | None = None) -> Path | None:
		"""
		Resolve the configuration file path.

		If a config file is specified, use that. Otherwise, look in standard locations:
		1. ./.depnav.yml in the current directory
		2. $XDG_CONFIG_HOME/depnav/config.yml

		Args:
			config_file: Explicitly provided config file path (optional)

		Returns:
			Optional[Path]: Resolved config file path or None if no suitable file found

		Raises:
			ConfigFileNotFoundError: If ``config_file`` is given but missing.

		"""
		if config_file:
			path = Path(config_file).expanduser().resolve()
			if not path.exists():
				msg = f"Specified config file not found: {path}"
				raise ConfigFileNotFoundError(msg)
			return path

		local_config = Path(LOCAL_CONFIG_NAME)
		if local_config.exists():
			return local_config

		xdg_config_file = Path(xdg_config_home) / "depnav" / "config.yml"
		if xdg_config_file.exists():
			return xdg_config_file

		return None

	@staticmethod
	def _parse_yaml_file(file_path: Path) -> dict[str, Any]:
		"""
		Parse a YAML file.

		Raises:
			yaml.YAMLError: If the file cannot be parsed as a YAML mapping
		"""
		with file_path.open(encoding="utf-8") as f:
			content = yaml.safe_load(f)
			if content is None:  # Empty file
				return {}
			if not isinstance(content, dict):
				msg = f"File {file_path} does not contain a valid YAML dictionary"
				raise yaml.YAMLError(msg)
			return content

	def _load_config(self) -> AppConfigSchema:
		file_config: dict[str, Any] = {}
		if self._resolved_config_file:
			try:
				file_config = self._parse_yaml_file(self._resolved_config_file)
				logger.info("Loaded configuration from %s", self._resolved_config_file)
			except yaml.YAMLError as e:
				msg = f"Configuration file {self._resolved_config_file} does not contain a valid YAML dictionary."
				logger.exception(msg)
				raise ConfigParsingError(msg) from e
			except OSError as e:
				msg = f"Error accessing configuration file {self._resolved_config_file}: {e}"
				logger.exception(msg)
				raise ConfigParsingError(msg) from e
		else:
			logger.debug("No configuration file found. Using default configuration.")

		self._merge_configs(file_config, self._env_overrides())

		try:
			return AppConfigSchema(**file_config)
		except ValidationError as e:
			msg = f"Error parsing configuration into schema: {e}"
			logger.exception(msg)
			raise ConfigParsingError(msg) from e

	@staticmethod
	def _env_overrides() -> dict[str, Any]:
		"""Collect ``DEPNAV_<SECTION>_<KEY>`` environment variables."""
		sections = set(AppConfigSchema.model_fields)
		overrides: dict[str, dict[str, Any]] = {}
		for env_var, value in os.environ.items():
			if not env_var.startswith(ENV_PREFIX):
				continue
			section, _, key = env_var[len(ENV_PREFIX) :].lower().partition("_")
			if section in sections and key:
				overrides.setdefault(section, {})[key] = value
		return overrides

	def _merge_configs(self, base: dict[str, Any], override: dict[str, Any]) -> None:
		"""
		Recursively merge two configuration dictionaries.

		Args:
			base: Base configuration dictionary to merge into
			override: Override configuration to apply

		"""
		for key, value in override.items():
			if isinstance(value, dict) and key in base and isinstance(base[key], dict):
				self._merge_configs(base[key], value)
			else:
				base[key] = value

	@property
	def get(self) -> AppConfigSchema:
		"""
		Get the current application configuration.

		Returns:
			AppConfigSchema: The current configuration
		"""
		return self._app_config
