"""ViewStateMachine: the four-stage workflow behind the story widget.

Stages run Idle → CommandEntry → Conversation → Review. ``go_back()`` steps
one stage backwards, ``dismiss()`` jumps straight to Idle from anywhere.
Nothing accumulated (conversation, document, cards) is discarded by either,
so the user can move forward again without loss; only ``reset()`` clears it.

Every operation runs to completion before observers are notified, so an
observer never sees a half-applied transition.
"""

from typing import Callable, List, Optional, Tuple

import structlog

from storydeck.core.exceptions import WrongStageError
from storydeck.core.placeholder import generate_placeholder_document
from storydeck.core.story_parser import parse_stories
from storydeck.core.subscriptions import ListenerFactory, ListenerScope, Subscription
from storydeck.models.card import Card
from storydeck.models.config import Config
from storydeck.models.conversation import ConversationEntry
from storydeck.models.stage import Stage
from storydeck.models.workflow_state import WorkflowState

logger = structlog.get_logger()


PREDECESSORS = {
    Stage.COMMAND_ENTRY: Stage.IDLE,
    Stage.CONVERSATION: Stage.COMMAND_ENTRY,
    Stage.REVIEW: Stage.CONVERSATION,
}

StateObserver = Callable[[WorkflowState], None]


class ViewStateMachine:
    """Owns the current stage and the data accumulated across stages.

    Operations called from a stage that does not allow them raise
    ``WrongStageError`` and leave the state untouched.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        parser: Callable[[str], List[Card]] = parse_stories,
    ):
        """Initialize the state machine in the Idle stage.

        Args:
            config: Application configuration (defaults used when None)
            parser: Function turning document text into cards
        """
        self.config = config or Config()
        self._parser = parser
        self._state = WorkflowState()
        self._observers: List[StateObserver] = []
        self._dismissal_listeners = ListenerScope(self.dismiss)
        self._closed = False

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def state(self) -> WorkflowState:
        """Snapshot of the current state (a copy, mutations are not applied)."""
        return self._state.model_copy(deep=True)

    @property
    def stage(self) -> Stage:
        return self._state.stage

    @property
    def command(self) -> str:
        return self._state.command

    @property
    def conversation(self) -> Tuple[ConversationEntry, ...]:
        return tuple(self._state.conversation)

    @property
    def document(self) -> str:
        return self._state.document

    @property
    def cards(self) -> Tuple[Card, ...]:
        return tuple(self._state.cards)

    @property
    def dismissal_listeners_bound(self) -> bool:
        """Whether the Escape/outside-click listeners are currently live."""
        return self._dismissal_listeners.held

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def open(self) -> None:
        """Expand the idle launcher into the command input."""
        self._require("open", Stage.IDLE)
        self._set_stage(Stage.COMMAND_ENTRY)
        self._notify()

    def set_command(self, text: str) -> None:
        """Record a raw change of the pending command input."""
        self._require("set_command", Stage.COMMAND_ENTRY, Stage.CONVERSATION)
        if text == self._state.command:
            return
        self._state.command = text
        self._notify()

    def submit_command(self, text: Optional[str] = None) -> None:
        """Submit a command and regenerate the document for it.

        Appends one user entry to the conversation, replaces the document with
        the placeholder for the command and moves to Conversation. Valid again
        while already in Conversation.

        Args:
            text: Command to submit (defaults to the pending command)
        """
        self._require("submit_command", Stage.COMMAND_ENTRY, Stage.CONVERSATION)
        if text is None:
            text = self._state.command

        self._state.conversation.append(ConversationEntry(role="user", content=text))
        self._apply_retention()
        self._state.document = generate_placeholder_document(
            text, self.config.placeholder.document_template
        )
        # The submitted command stays in the input unless configured otherwise
        self._state.command = "" if self.config.widget.clear_command_on_submit else text

        logger.info(
            "command_submitted",
            command_length=len(text),
            conversation_length=len(self._state.conversation),
        )
        logger.debug("command_text", command=text)

        self._set_stage(Stage.CONVERSATION)
        self._notify()

    def edit_document(self, text: str) -> None:
        """Replace the document verbatim with the editor's contents."""
        self._require("edit_document", Stage.CONVERSATION)
        if text == self._state.document:
            return
        self._state.document = text
        logger.debug("document_edited", document_length=len(text))
        self._notify()

    def submit_review(self) -> None:
        """Parse the current document into cards and show them."""
        self._require("submit_review", Stage.CONVERSATION)
        cards = self._parser(self._state.document)
        self._state.cards = list(cards)
        logger.info("review_submitted", num_cards=len(cards))
        self._set_stage(Stage.REVIEW)
        self._notify()

    def go_back(self) -> None:
        """Step back to the previous stage, keeping all accumulated data."""
        self._require("go_back", *PREDECESSORS)
        self._set_stage(PREDECESSORS[self._state.stage])
        self._notify()

    def dismiss(self) -> None:
        """Collapse to Idle from any stage. No-op when already Idle."""
        if self._state.stage == Stage.IDLE:
            return
        logger.info("widget_dismissed", from_stage=self._state.stage.value)
        self._set_stage(Stage.IDLE)
        self._notify()

    def reset(self) -> None:
        """Return to Idle and discard the command, conversation, document and cards."""
        logger.info(
            "workflow_reset",
            from_stage=self._state.stage.value,
            conversation_length=len(self._state.conversation),
            num_cards=len(self._state.cards),
        )
        self._set_stage(Stage.IDLE)
        self._state.command = ""
        self._state.conversation = []
        self._state.document = ""
        self._state.cards = []
        self._notify()

    # ------------------------------------------------------------------
    # Observers and listeners
    # ------------------------------------------------------------------

    def subscribe(self, observer: StateObserver) -> Subscription:
        """Call observer with a state snapshot after every change.

        Returns:
            Subscription whose release() stops the notifications
        """
        self._observers.append(observer)

        def unbind() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return Subscription(getattr(observer, "__name__", "observer"), unbind)

    def register_dismissal_listener(self, name: str, factory: ListenerFactory) -> None:
        """Register a global listener (Escape key, outside click) that dismisses.

        The factory is called with ``dismiss`` whenever the widget leaves Idle
        and must return a function that unbinds the listener again. If the
        widget is already open, the listener is bound immediately.
        """
        self._dismissal_listeners.register(name, factory)

    def unregister_dismissal_listener(self, name: str) -> None:
        self._dismissal_listeners.unregister(name)

    def close(self) -> None:
        """Tear down: release dismissal listeners and drop observers."""
        if self._closed:
            return
        self._closed = True
        self._dismissal_listeners.release()
        self._observers.clear()
        logger.info("state_machine_closed", stage=self._state.stage.value)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require(self, operation: str, *allowed: Stage) -> None:
        if self._state.stage not in allowed:
            raise WrongStageError(operation, self._state.stage, allowed)

    def _set_stage(self, stage: Stage) -> None:
        previous = self._state.stage
        self._state.stage = stage

        if stage == Stage.IDLE:
            self._dismissal_listeners.release()
        elif not self._closed:
            self._dismissal_listeners.acquire()

        if previous != stage:
            logger.info("stage_transition", from_stage=previous.value, to_stage=stage.value)

    def _apply_retention(self) -> None:
        limit = self.config.retention.max_conversation_entries
        if limit is not None and len(self._state.conversation) > limit:
            dropped = len(self._state.conversation) - limit
            del self._state.conversation[:dropped]
            logger.debug("conversation_trimmed", dropped=dropped, kept=limit)

    def _notify(self) -> None:
        if not self._observers:
            return
        snapshot = self.state
        for observer in list(self._observers):
            observer(snapshot)
