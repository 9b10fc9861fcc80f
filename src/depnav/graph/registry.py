"""
Client for the PyPI JSON API.

This module looks up package metadata on a Python package index and turns a
package name plus an optional version specifier into a concrete release and
its direct runtime requirements.

"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

import requests
from packaging.requirements import InvalidRequirement, Requirement
from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.utils import canonicalize_name
from packaging.version import InvalidVersion, Version

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_URL = "https://pypi.org/pypi"
DEFAULT_TIMEOUT = 10.0


class RegistryError(Exception):
	"""Exception raised when package metadata cannot be retrieved."""


class PackageNotFoundError(RegistryError):
	"""Exception raised when the registry does not know a package."""


class NoMatchingVersionError(RegistryError):
	"""Exception raised when no release satisfies a version specifier."""


def to_specifier(spec: str | None) -> SpecifierSet:
	"""
	Interpret a user or requirement supplied version string.

	A bare version such as ``1.0.0`` means that exact release; anything else is
	parsed as a PEP 440 specifier set.

	Raises:
	    RegistryError: If the string is not a valid specifier.

	"""
	text = (spec or "").strip()
	if not text:
		return SpecifierSet()
	if text[0].isdigit():
		text = f"=={text}"
	try:
		return SpecifierSet(text)
	except InvalidSpecifier as e:
		msg = f"Invalid version specifier '{spec}'"
		raise RegistryError(msg) from e


class PyPIRegistry:
	"""Fetches project and release metadata, caching it for the session."""

	def __init__(self, base_url: str = DEFAULT_REGISTRY_URL, timeout: float = DEFAULT_TIMEOUT) -> None:
		"""
		Initialize the registry client.

		Args:
		    base_url: Base URL of the JSON API, without a trailing slash.
		    timeout: Timeout in seconds for each HTTP request.

		"""
		self.base_url = base_url.rstrip("/")
		self.timeout = timeout
		self._projects: dict[str, dict[str, Any]] = {}
		self._releases: dict[tuple[str, str], dict[str, Any]] = {}

	def _get_json(self, url: str, name: str) -> dict[str, Any]:
		logger.debug(f"GET {url}")
		try:
			response = requests.get(url, timeout=self.timeout)
		except requests.RequestException as e:
			msg = f"Could not reach registry for '{name}': {e}"
			raise RegistryError(msg) from e

		if response.status_code == HTTPStatus.NOT_FOUND:
			msg = f"Package '{name}' not found"
			raise PackageNotFoundError(msg)
		try:
			response.raise_for_status()
			data = response.json()
		except (requests.RequestException, ValueError) as e:
			msg = f"Bad registry response for '{name}': {e}"
			raise RegistryError(msg) from e
		if not isinstance(data, dict):
			msg = f"Bad registry response for '{name}': expected a JSON object"
			raise RegistryError(msg)
		return data

	def fetch_project(self, name: str) -> dict[str, Any]:
		"""
		Fetch the project document listing all releases of a package.

		Args:
		    name: Package name.

		Returns:
		    The decoded JSON document.

		Raises:
		    PackageNotFoundError: If the package does not exist.
		    RegistryError: On any other transport or decoding failure.

		"""
		key = canonicalize_name(name)
		if key not in self._projects:
			self._projects[key] = self._get_json(f"{self.base_url}/{key}/json", name)
		return self._projects[key]

	def fetch_release(self, name: str, version: str) -> dict[str, Any]:
		"""Fetch the document describing a single release."""
		key = (canonicalize_name(name), version)
		if key not in self._releases:
			self._releases[key] = self._get_json(f"{self.base_url}/{key[0]}/{version}/json", name)
		return self._releases[key]

	@staticmethod
	def available_versions(project: dict[str, Any]) -> list[Version]:
		"""List the installable releases of a project, skipping yanked and empty ones."""
		versions: list[Version] = []
		for raw, files in (project.get("releases") or {}).items():
			if not files or all(f.get("yanked", False) for f in files):
				continue
			try:
				versions.append(Version(raw))
			except InvalidVersion:
				logger.debug(f"Skipping unparsable version '{raw}'")
		return versions

	def select_version(self, project: dict[str, Any], spec: str | None) -> str:
		"""
		Pick the newest release of a project satisfying a version string.

		Without a specifier, pre-releases are only chosen when nothing else exists.

		Raises:
		    NoMatchingVersionError: If no release matches.

		"""
		name = (project.get("info") or {}).get("name", "<unknown>")
		versions = self.available_versions(project)
		candidates = list(to_specifier(spec).filter(versions))
		if not candidates:
			msg = f"No release of '{name}' matches '{spec}'" if spec else f"'{name}' has no installable releases"
			raise NoMatchingVersionError(msg)
		return str(max(candidates))

	def fetch_requirements(self, name: str, spec: str | None = None) -> tuple[str, list[Requirement]]:
		"""
		Resolve a package to a release and list its runtime requirements.

		Requirements that only apply to an extra, or whose environment marker does
		not hold, are left out.

		Args:
		    name: Package name.
		    spec: Exact version or version specifier, if any.

		Returns:
		    The selected version and its direct requirements.

		"""
		version = self.select_version(self.fetch_project(name), spec)
		release = self.fetch_release(name, version)
		requires_dist = (release.get("info") or {}).get("requires_dist") or []

		requirements: list[Requirement] = []
		for line in requires_dist:
			try:
				requirement = Requirement(line)
			except InvalidRequirement:
				logger.warning(f"Ignoring malformed requirement of {name} {version}: {line!r}")
				continue
			if requirement.marker is not None and not requirement.marker.evaluate({"extra": ""}):
				continue
			requirements.append(requirement)

		logger.debug(f"{name} {version} requires {len(requirements)} package(s)")
		return version, requirements
