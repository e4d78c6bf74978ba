"""Main Storydeck TUI Application.

This module defines the Textual App that hosts the story widget. The app owns
the ViewStateMachine for its whole lifetime and tears it down on quit, which
releases any dismissal listeners that are still bound.
"""

from typing import Optional

from textual.app import App
from textual.binding import Binding
import structlog

from storydeck.core.state_machine import ViewStateMachine
from storydeck.models.config import Config
from storydeck.tui.screens import WorkflowScreen

logger = structlog.get_logger()


class StorydeckApp(App):
    """Main Storydeck TUI Application."""

    CSS = """
    Screen {
        background: $surface;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", show=True, priority=True),
        Binding("q", "quit", "Quit", show=False),
    ]

    def __init__(
        self,
        config: Optional[Config] = None,
        machine: Optional[ViewStateMachine] = None,
    ):
        """Initialize the Storydeck app.

        Args:
            config: Application configuration (defaults when None)
            machine: State machine to drive (a new one is created when None)
        """
        super().__init__()
        self.config = config or Config()
        self.machine = machine or ViewStateMachine(config=self.config)

        logger.info(
            "app_initialized",
            launcher_label=self.config.widget.launcher_label,
            clear_command_on_submit=self.config.widget.clear_command_on_submit,
            max_conversation_entries=self.config.retention.max_conversation_entries,
        )

    def on_mount(self) -> None:
        """Called when app is mounted. Show the workflow screen."""
        self.push_screen(
            WorkflowScreen(
                machine=self.machine,
                widget_config=self.config.widget,
                name="workflow",
            )
        )
        logger.info("workflow_screen_pushed")

    def action_quit(self) -> None:
        """Tear down the state machine and exit."""
        logger.info("app_quit_requested", stage=self.machine.stage.value)
        self.machine.close()
        self.exit()
