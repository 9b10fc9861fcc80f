"""Schemas for the depnav configuration file."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RegistryConfigSchema(BaseModel):
	"""Package index settings."""

	base_url: str = "https://pypi.org/pypi"
	timeout: float = Field(default=10.0, gt=0)


class ViewConfigSchema(BaseModel):
	"""Viewport behaviour when centering on nodes."""

	padding: float = Field(default=20.0, ge=0)
	max_zoom: float = Field(default=1.0, gt=0)
	animate: bool = True


class LayoutConfigSchema(BaseModel):
	"""Spacing and sizing used by the layered layout."""

	node_spacing: float = Field(default=30.0, ge=0)
	layer_spacing: float = Field(default=60.0, ge=0)
	char_width: float = Field(default=8.0, gt=0)
	node_height: float = Field(default=30.0, gt=0)


class ResolutionConfigSchema(BaseModel):
	"""Limits for full graph resolution."""

	# 0 means no limit
	max_waves: int = Field(default=0, ge=0)


class AppConfigSchema(BaseModel):
	"""Top level configuration."""

	model_config = ConfigDict(extra="ignore")

	registry: RegistryConfigSchema = Field(default_factory=RegistryConfigSchema)
	view: ViewConfigSchema = Field(default_factory=ViewConfigSchema)
	layout: LayoutConfigSchema = Field(default_factory=LayoutConfigSchema)
	resolution: ResolutionConfigSchema = Field(default_factory=ResolutionConfigSchema)
