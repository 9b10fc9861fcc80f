"""Configuration for depnav."""

from .config_loader import ConfigError, ConfigFileNotFoundError, ConfigLoader, ConfigParsingError
from .config_schema import (
	AppConfigSchema,
	LayoutConfigSchema,
	RegistryConfigSchema,
	ResolutionConfigSchema,
	ViewConfigSchema,
)

__all__ = [
	"AppConfigSchema",
	"ConfigError",
	"ConfigFileNotFoundError",
	"ConfigLoader",
	"ConfigParsingError",
	"LayoutConfigSchema",
	"RegistryConfigSchema",
	"ResolutionConfigSchema",
	"ViewConfigSchema",
]
