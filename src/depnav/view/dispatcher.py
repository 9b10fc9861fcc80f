"""Routes actions to the handlers registered for their kind."""

from __future__ import annotations

import inspect
import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable

from depnav.view.actions import Action, ActionKind

logger = logging.getLogger(__name__)

ActionHandler = Callable[[Action], Awaitable[None] | None]


class ActionDispatcher:
	"""
	Delivers each action to every handler registered for its kind.

	Handlers run in registration order and may be plain functions or
	coroutine functions. Handlers are awaited one after another, so a handler
	that dispatches further actions finishes those before the next handler of
	the original action runs.

	"""

	def __init__(self) -> None:
		"""Initialize an empty handler registry."""
		self._handlers: dict[ActionKind, list[ActionHandler]] = defaultdict(list)

	def register(self, kind: ActionKind, handler: ActionHandler) -> None:
		self._handlers[kind].append(handler)

	def has_handler(self, kind: ActionKind) -> bool:
		return bool(self._handlers.get(kind))

	async def dispatch(self, action: Action) -> None:
		"""
		Dispatch an action.

		Args:
		    action: The action to deliver.

		"""
		handlers = list(self._handlers.get(action.kind, ()))
		if not handlers:
			logger.debug(f"No handler registered for action '{action.kind.value}'")
			return
		for handler in handlers:
			result = handler(action)
			if inspect.isawaitable(result):
				await result
