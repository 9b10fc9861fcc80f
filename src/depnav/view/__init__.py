"""View state: actions, dispatch, the rendering surface and the model source."""

from .actions import (
	Action,
	ActionKind,
	ComputedBoundsAction,
	ElementAndAlignment,
	ElementAndBounds,
	FitToScreenAction,
	RequestModelAction,
	SelectAction,
	SelectAllAction,
	UpdateModelAction,
)
from .dispatcher import ActionDispatcher
from .model_source import DepGraphModelSource
from .session import Session, create_session
from .surface import ConsoleSurface

__all__ = [
	"Action",
	"ActionDispatcher",
	"ActionKind",
	"ComputedBoundsAction",
	"ConsoleSurface",
	"DepGraphModelSource",
	"ElementAndAlignment",
	"ElementAndBounds",
	"FitToScreenAction",
	"RequestModelAction",
	"SelectAction",
	"SelectAllAction",
	"Session",
	"UpdateModelAction",
	"create_session",
]
