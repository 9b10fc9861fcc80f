"""Actions exchanged between the model source and the rendering surface."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
	from depnav.graph.models import Bounds, DependencyGraph, Point


class ActionKind(str, Enum):
	"""Tag identifying the kind of an action."""

	SELECT = "elementSelected"
	SELECT_ALL = "allSelected"
	FIT_TO_SCREEN = "fit"
	UPDATE_MODEL = "updateModel"
	REQUEST_MODEL = "requestModel"
	COMPUTED_BOUNDS = "computedBounds"


@dataclass
class Action:
	"""Base class of all actions."""

	kind: ActionKind = field(init=False)


@dataclass
class SelectAction(Action):
	"""Select the given elements and deselect the listed ones."""

	selected_element_ids: list[str] = field(default_factory=list)
	deselected_element_ids: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		self.kind = ActionKind.SELECT


@dataclass
class SelectAllAction(Action):
	"""Select (or, with ``select=False``, deselect) every element."""

	select: bool = True

	def __post_init__(self) -> None:
		self.kind = ActionKind.SELECT_ALL


@dataclass
class FitToScreenAction(Action):
	"""Fit the viewport around the given elements."""

	element_ids: list[str] = field(default_factory=list)
	padding: float = 20.0
	max_zoom: float = 1.0
	animate: bool = True

	def __post_init__(self) -> None:
		self.kind = ActionKind.FIT_TO_SCREEN


@dataclass
class UpdateModelAction(Action):
	"""Submit the model for display."""

	model: DependencyGraph | None = None
	request_bounds: bool = True

	def __post_init__(self) -> None:
		self.kind = ActionKind.UPDATE_MODEL


@dataclass
class RequestModelAction(Action):
	"""Ask the model source to submit its current model."""

	def __post_init__(self) -> None:
		self.kind = ActionKind.REQUEST_MODEL


@dataclass
class ElementAndBounds:
	element_id: str
	new_bounds: Bounds


@dataclass
class ElementAndAlignment:
	element_id: str
	new_alignment: Point


@dataclass
class ComputedBoundsAction(Action):
	"""Sizes measured by the surface, sent back to the model source for layout."""

	bounds: list[ElementAndBounds] = field(default_factory=list)
	alignments: list[ElementAndAlignment] | None = None

	def __post_init__(self) -> None:
		self.kind = ActionKind.COMPUTED_BOUNDS
