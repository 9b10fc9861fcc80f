"""Tests for ActionDispatcher."""

import pytest

from depnav.view.actions import ActionKind, FitToScreenAction, SelectAction, UpdateModelAction
from depnav.view.dispatcher import ActionDispatcher


@pytest.mark.unit
def test_actions_carry_their_kind():
	assert SelectAction().kind is ActionKind.SELECT
	assert UpdateModelAction().kind is ActionKind.UPDATE_MODEL
	assert ActionKind.COMPUTED_BOUNDS.value == "computedBounds"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_handlers_run_in_registration_order():
	"""Sync and async handlers both run, one after another."""
	dispatcher = ActionDispatcher()
	calls = []

	def first(action):
		calls.append(("first", action.kind))

	async def second(action):
		calls.append(("second", action.kind))

	dispatcher.register(ActionKind.SELECT, first)
	dispatcher.register(ActionKind.SELECT, second)

	await dispatcher.dispatch(SelectAction(selected_element_ids=["a"]))

	assert calls == [("first", ActionKind.SELECT), ("second", ActionKind.SELECT)]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_nested_dispatch_completes_before_next_handler():
	dispatcher = ActionDispatcher()
	calls = []

	async def on_select(_action):
		calls.append("select")
		await dispatcher.dispatch(FitToScreenAction(element_ids=["a"]))

	dispatcher.register(ActionKind.SELECT, on_select)
	dispatcher.register(ActionKind.SELECT, lambda _action: calls.append("select-2"))
	dispatcher.register(ActionKind.FIT_TO_SCREEN, lambda _action: calls.append("fit"))

	await dispatcher.dispatch(SelectAction())

	assert calls == ["select", "fit", "select-2"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_dispatch_without_handlers():
	dispatcher = ActionDispatcher()

	await dispatcher.dispatch(SelectAction())

	assert not dispatcher.has_handler(ActionKind.SELECT)
