"""Shared fixtures for UI tests."""

import pytest
from textual.widgets import Input

from storydeck.models.config import Config
from storydeck.tui.app import StorydeckApp


@pytest.fixture
def app():
    """Storydeck app with default configuration."""
    return StorydeckApp(config=Config())


@pytest.fixture
def open_widget():
    """Coroutine that expands the launcher into the command input."""
    async def _open_widget(pilot) -> None:
        await pilot.click("#launcher")
        await pilot.pause()

    return _open_widget


@pytest.fixture
def submit_command():
    """Coroutine that types a command into the command input and presses enter."""
    async def _submit_command(pilot, command: str) -> None:
        field = pilot.app.screen.query_one("#command-input", Input)
        field.focus()
        await pilot.pause()
        await pilot.press(*command)
        await pilot.press("enter")
        await pilot.pause()

    return _submit_command
