"""Workflow Screen: hosts the story widget and its dismissal gestures.

The screen owns the two global listeners that collapse the widget back to
its launcher button: the Escape key and clicks outside the widget. Both are
registered with the state machine as listener factories, so they are only
live while the widget is open and are unbound on every path back to idle.
"""

from typing import Callable, Optional

from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Footer
import structlog

from storydeck.core.state_machine import ViewStateMachine
from storydeck.models.config import WidgetConfig
from storydeck.tui.widgets.story_widget import StoryWidget

logger = structlog.get_logger()

ESCAPE_LISTENER = "escape_key"
OUTSIDE_CLICK_LISTENER = "outside_click"


class WorkflowScreen(Screen):
    """Screen centering the story widget."""

    DEFAULT_CSS = """
    WorkflowScreen {
        align: center middle;
    }
    """

    BINDINGS = [
        # Priority so inputs and the editor cannot swallow it
        Binding("escape", "dismiss_story", "Close", show=False, priority=True),
    ]

    def __init__(
        self,
        machine: ViewStateMachine,
        widget_config: Optional[WidgetConfig] = None,
        **kwargs
    ):
        """Initialize WorkflowScreen.

        Args:
            machine: State machine driving the story widget
            widget_config: Labels and placeholders for the widget
        """
        super().__init__(**kwargs)
        self.machine = machine
        self.widget_config = widget_config
        self._escape_handler: Optional[Callable[[], None]] = None
        self._outside_click_handler: Optional[Callable[[], None]] = None

    def compose(self) -> ComposeResult:
        """Compose the screen layout."""
        yield StoryWidget(self.machine, self.widget_config)
        yield Footer()

    def on_mount(self) -> None:
        """Register dismissal listeners with the state machine."""
        self.machine.register_dismissal_listener(ESCAPE_LISTENER, self._bind_escape)
        self.machine.register_dismissal_listener(OUTSIDE_CLICK_LISTENER, self._bind_outside_click)

    def on_unmount(self) -> None:
        """Unregister dismissal listeners (unbinding them if live)."""
        self.machine.unregister_dismissal_listener(ESCAPE_LISTENER)
        self.machine.unregister_dismissal_listener(OUTSIDE_CLICK_LISTENER)

    @property
    def escape_listener_bound(self) -> bool:
        return self._escape_handler is not None

    @property
    def outside_click_listener_bound(self) -> bool:
        return self._outside_click_handler is not None

    def _bind_escape(self, callback: Callable[[], None]) -> Callable[[], None]:
        self._escape_handler = callback
        logger.debug("dismissal_listener_bound", listener=ESCAPE_LISTENER)

        def unbind() -> None:
            self._escape_handler = None
            logger.debug("dismissal_listener_unbound", listener=ESCAPE_LISTENER)

        return unbind

    def _bind_outside_click(self, callback: Callable[[], None]) -> Callable[[], None]:
        self._outside_click_handler = callback
        logger.debug("dismissal_listener_bound", listener=OUTSIDE_CLICK_LISTENER)

        def unbind() -> None:
            self._outside_click_handler = None
            logger.debug("dismissal_listener_unbound", listener=OUTSIDE_CLICK_LISTENER)

        return unbind

    def action_dismiss_story(self) -> None:
        """Collapse the widget on Escape (no-op while idle)."""
        if self._escape_handler is not None:
            logger.info("dismissal_triggered", trigger=ESCAPE_LISTENER)
            self._escape_handler()

    def on_click(self, event: events.Click) -> None:
        """Collapse the widget when a click lands outside its region."""
        if self._outside_click_handler is None:
            return
        story_widget = self.query_one(StoryWidget)
        if story_widget.region.contains(event.screen_x, event.screen_y):
            return
        logger.info(
            "dismissal_triggered",
            trigger=OUTSIDE_CLICK_LISTENER,
            x=event.screen_x,
            y=event.screen_y,
        )
        self._outside_click_handler()
