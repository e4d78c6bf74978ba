"""StoryWidget: the single widget that walks through all four stages.

The widget holds no workflow state of its own. User input is forwarded to the
ViewStateMachine, and every state change is drawn from ``render(state)``:
the descriptor picks the visible panel and the size variant, and fills the
inputs, message list, editor and card list.
"""

from typing import Callable, Optional

from textual import on
from textual.app import ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.message import Message
from textual.widgets import Button, ContentSwitcher, Input, Label, TextArea
import structlog

from storydeck.core.exceptions import WrongStageError
from storydeck.core.state_machine import ViewStateMachine
from storydeck.core.subscriptions import Subscription
from storydeck.core.view import ViewDescriptor, render
from storydeck.models.config import WidgetConfig
from storydeck.models.stage import Stage
from storydeck.models.workflow_state import WorkflowState
from storydeck.tui.widgets.card_list import CardList
from storydeck.tui.widgets.conversation_log import ConversationLog
from storydeck.tui.widgets.document_editor import DocumentEditor

logger = structlog.get_logger()

_LAYOUT_CLASSES = {
    "button": "-button",
    "compact": "-compact",
    "panel": "-panel",
}

_COMMAND_INPUTS = ("#command-input", "#chat-input")


class StoryWidget(Container):
    """Launcher button, command input, chat/editor panel and card review."""

    DEFAULT_CSS = """
    StoryWidget {
        height: auto;
        width: auto;
    }

    StoryWidget.-button ContentSwitcher {
        width: auto;
        height: auto;
    }

    StoryWidget.-compact {
        width: 64;
        height: auto;
        border: round $accent;
    }

    StoryWidget.-compact ContentSwitcher {
        height: auto;
    }

    StoryWidget.-panel {
        width: 90%;
        height: 85%;
        border: round $accent;
        background: $surface;
    }

    StoryWidget.-panel ContentSwitcher {
        height: 1fr;
    }

    StoryWidget #command-entry {
        height: auto;
    }

    StoryWidget #command-input, StoryWidget #chat-input {
        width: 1fr;
    }

    StoryWidget #conversation, StoryWidget #review {
        height: 1fr;
    }

    StoryWidget #conversation-panes {
        height: 1fr;
    }

    StoryWidget #chat-pane, StoryWidget #editor-pane {
        width: 1fr;
        height: 1fr;
        border: solid $panel-lighten-2;
        padding: 0 1;
    }

    StoryWidget .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }

    StoryWidget #message-list {
        height: 1fr;
    }

    StoryWidget #chat-input-row {
        height: auto;
    }

    StoryWidget DocumentEditor {
        height: 1fr;
    }

    StoryWidget #card-list {
        height: 1fr;
        padding: 0 1;
    }

    StoryWidget .nav-footer {
        height: auto;
        border-top: solid $panel-lighten-2;
    }

    StoryWidget .nav-spacer {
        width: 1fr;
    }
    """

    class StateChanged(Message):
        """Posted after the state machine changed; carries the new descriptor."""

        def __init__(self, view: ViewDescriptor) -> None:
            super().__init__()
            self.view = view

    def __init__(
        self,
        machine: ViewStateMachine,
        widget_config: Optional[WidgetConfig] = None,
        **kwargs
    ):
        """Initialize StoryWidget.

        Args:
            machine: State machine driving the widget
            widget_config: Labels and placeholders (defaults from machine config)
        """
        super().__init__(id="story-widget", **kwargs)
        self.machine = machine
        self.widget_config = widget_config or machine.config.widget
        self._subscription: Optional[Subscription] = None
        self._panel: Optional[str] = None

    def compose(self) -> ComposeResult:
        """Compose one panel per stage inside a content switcher."""
        placeholder = self.widget_config.command_placeholder
        with ContentSwitcher(initial="launcher"):
            yield Button(self.widget_config.launcher_label, id="launcher")

            with Horizontal(id="command-entry"):
                yield Input(placeholder=placeholder, id="command-input")
                yield Button("Generate", id="generate", variant="primary")

            with Vertical(id="conversation"):
                with Horizontal(id="conversation-panes"):
                    with Vertical(id="chat-pane"):
                        yield Label("Chat", classes="pane-title")
                        yield ConversationLog()
                        with Horizontal(id="chat-input-row"):
                            yield Input(placeholder=placeholder, id="chat-input")
                            yield Button("↑", id="send", variant="primary")
                    with Vertical(id="editor-pane"):
                        yield Label("Editor", classes="pane-title")
                        yield DocumentEditor()
                with Horizontal(classes="nav-footer"):
                    yield Button("← Back", id="conversation-back")
                    yield Label("", classes="nav-spacer")
                    yield Button("Submit", id="submit-review", variant="success")

            with Vertical(id="review"):
                yield CardList()
                with Horizontal(classes="nav-footer"):
                    yield Button("← Back", id="review-back")

    def on_mount(self) -> None:
        """Subscribe to the state machine and draw the current state."""
        self._subscription = self.machine.subscribe(self._on_state_changed)
        self.post_message(self.StateChanged(render(self.machine.state)))

    def on_unmount(self) -> None:
        """Stop receiving state changes."""
        if self._subscription is not None:
            self._subscription.release()
            self._subscription = None

    @property
    def view(self) -> ViewDescriptor:
        """Descriptor for the machine's current state."""
        return render(self.machine.state)

    def _on_state_changed(self, state: WorkflowState) -> None:
        self.post_message(self.StateChanged(render(state)))

    async def on_story_widget_state_changed(self, message: StateChanged) -> None:
        """Redraw from the latest state (queued messages may be stale)."""
        message.stop()
        await self.apply_view(self.view)

    async def apply_view(self, view: ViewDescriptor) -> None:
        """Draw a view descriptor.

        Inputs and the editor the user is typing in are left alone; their
        contents reach the machine through change events, and submit handlers
        write back anything the machine changed.
        """
        self.query_one(ContentSwitcher).current = view.panel
        for layout, css_class in _LAYOUT_CLASSES.items():
            self.set_class(view.layout == layout, css_class)

        for selector in _COMMAND_INPUTS:
            field = self.query_one(selector, Input)
            if field.value != view.command and not field.has_focus:
                field.value = view.command

        editor = self.query_one(DocumentEditor)
        if not editor.has_focus:
            editor.load_content(view.document)

        self.query_one("#conversation-back", Button).display = view.can_go_back
        self.query_one("#submit-review", Button).display = view.can_submit_review

        await self.query_one(ConversationLog).show_messages(view.messages)
        await self.query_one(CardList).show_cards(view.cards)

        if view.panel != self._panel:
            self._panel = view.panel
            self._focus_panel(view.stage)

    def _focus_panel(self, stage: Stage) -> None:
        targets = {
            Stage.IDLE: "#launcher",
            Stage.COMMAND_ENTRY: "#command-input",
            Stage.CONVERSATION: "#chat-input",
            Stage.REVIEW: "#review-back",
        }
        self.query_one(targets[stage]).focus()

    # ------------------------------------------------------------------
    # Input handlers
    # ------------------------------------------------------------------

    @on(Button.Pressed, "#launcher")
    def open_widget(self) -> None:
        self._dispatch(self.machine.open)

    @on(Input.Changed, "#command-input, #chat-input")
    def command_changed(self, event: Input.Changed) -> None:
        # Programmatic syncs also fire Changed, including while idle
        if self.machine.stage in (Stage.COMMAND_ENTRY, Stage.CONVERSATION):
            self._dispatch(self.machine.set_command, event.value)

    @on(Input.Submitted, "#command-input, #chat-input")
    def command_submitted(self, event: Input.Submitted) -> None:
        self._submit_command(event.value)

    @on(Button.Pressed, "#generate")
    def generate_pressed(self) -> None:
        self._submit_command(self.query_one("#command-input", Input).value)

    @on(Button.Pressed, "#send")
    def send_pressed(self) -> None:
        self._submit_command(self.query_one("#chat-input", Input).value)

    @on(TextArea.Changed, "#document-editor")
    def document_changed(self, event: TextArea.Changed) -> None:
        if self.machine.stage == Stage.CONVERSATION:
            self._dispatch(self.machine.edit_document, event.text_area.text)

    @on(Button.Pressed, "#submit-review")
    def review_pressed(self) -> None:
        editor = self.query_one(DocumentEditor)
        # Flush an edit whose Changed event has not been handled yet
        if self._dispatch(self.machine.edit_document, editor.get_content()):
            self._dispatch(self.machine.submit_review)

    @on(Button.Pressed, "#conversation-back, #review-back")
    def back_pressed(self) -> None:
        self._dispatch(self.machine.go_back)

    def _submit_command(self, value: str) -> None:
        if self.machine.stage not in (Stage.COMMAND_ENTRY, Stage.CONVERSATION):
            logger.warning("command_submit_ignored", stage=self.machine.stage.value)
            return
        if not self._dispatch(self.machine.submit_command, value):
            return

        # Write back what the machine decided, even into a focused field
        command = self.machine.command
        for selector in _COMMAND_INPUTS:
            self.query_one(selector, Input).value = command
        self.query_one(DocumentEditor).load_content(self.machine.document)

    def _dispatch(self, operation: Callable[..., None], *args) -> bool:
        """Run a state machine operation, logging it if the stage rejects it.

        Returns:
            True if the operation ran, False if it was rejected
        """
        try:
            operation(*args)
        except WrongStageError as e:
            # Input queued before a stage change can arrive late
            logger.error(
                "stage_operation_rejected",
                operation=e.operation,
                stage=e.stage.value,
                allowed=[s.value for s in e.allowed],
                exc_info=True,
            )
            return False
        return True
