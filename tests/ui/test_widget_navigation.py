"""UI tests for moving through the four stages of the story widget."""

import pytest
from structlog.testing import capture_logs
from textual.widgets import ContentSwitcher, Input

from storydeck.core.state_machine import ViewStateMachine
from storydeck.models.config import Config, WidgetConfig
from storydeck.models.stage import Stage
from storydeck.tui.app import StorydeckApp
from storydeck.tui.widgets import CardList, ConversationLog, DocumentEditor, StoryCard, StoryWidget

APP_SIZE = (100, 40)


def current_panel(app) -> str:
    return app.screen.query_one(ContentSwitcher).current


@pytest.mark.asyncio
async def test_starts_with_launcher_button(app):
    """Test the idle widget shows only the launcher."""
    async with app.run_test(size=APP_SIZE) as pilot:
        await pilot.pause()

        assert app.machine.stage == Stage.IDLE
        assert current_panel(app) == "launcher"
        assert app.screen.query_one(StoryWidget).has_class("-button")


@pytest.mark.asyncio
async def test_launcher_label_from_config():
    """Test the launcher text comes from configuration."""
    app = StorydeckApp(config=Config(widget=WidgetConfig(launcher_label="stories")))

    async with app.run_test(size=APP_SIZE) as pilot:
        await pilot.pause()

        assert str(app.screen.query_one("#launcher").label) == "stories"


@pytest.mark.asyncio
async def test_launcher_opens_command_entry(app, open_widget):
    async with app.run_test(size=APP_SIZE) as pilot:
        await pilot.pause()

        await open_widget(pilot)

        assert app.machine.stage == Stage.COMMAND_ENTRY
        assert current_panel(app) == "command-entry"
        assert app.screen.query_one(StoryWidget).has_class("-compact")
        assert app.screen.query_one("#command-input", Input).has_focus


@pytest.mark.asyncio
async def test_typing_updates_pending_command(app, open_widget):
    async with app.run_test(size=APP_SIZE) as pilot:
        await pilot.pause()
        await open_widget(pilot)

        await pilot.press(*"login")
        await pilot.pause()

        assert app.machine.command == "login"


@pytest.mark.asyncio
async def test_submit_command_shows_conversation(app, open_widget, submit_command):
    """Test submitting moves to the chat/editor panel with the generated document."""
    async with app.run_test(size=APP_SIZE) as pilot:
        await pilot.pause()
        await open_widget(pilot)

        await submit_command(pilot, "login")

        assert app.machine.stage == Stage.CONVERSATION
        assert current_panel(app) == "conversation"
        assert app.screen.query_one(StoryWidget).has_class("-panel")

        log = app.screen.query_one(ConversationLog)
        assert [(m.role, m.content) for m in log.messages] == [("user", "login")]

        editor = app.screen.query_one(DocumentEditor)
        assert editor.get_content().startswith("# User Story: login")


@pytest.mark.asyncio
async def test_command_stays_in_chat_input(app, open_widget, submit_command):
    """Test the submitted command remains visible in the next input."""
    async with app.run_test(size=APP_SIZE) as pilot:
        await pilot.pause()
        await open_widget(pilot)

        await submit_command(pilot, "login")

        assert app.screen.query_one("#chat-input", Input).value == "login"


@pytest.mark.asyncio
async def test_command_cleared_when_configured(open_widget, submit_command):
    app = StorydeckApp(config=Config(widget=WidgetConfig(clear_command_on_submit=True)))

    async with app.run_test(size=APP_SIZE) as pilot:
        await pilot.pause()
        await open_widget(pilot)

        await submit_command(pilot, "login")

        assert app.screen.query_one("#chat-input", Input).value == ""
        assert app.screen.query_one("#command-input", Input).value == ""


@pytest.mark.asyncio
async def test_resubmit_from_chat_appends_message(app, open_widget, submit_command):
    """Test a second command from the chat input adds one message and replaces the document."""
    async with app.run_test(size=APP_SIZE) as pilot:
        await pilot.pause()
        await open_widget(pilot)
        await submit_command(pilot, "login")

        chat_input = app.screen.query_one("#chat-input", Input)
        chat_input.value = "logout"
        await pilot.pause()
        await pilot.click("#send")
        await pilot.pause()

        log = app.screen.query_one(ConversationLog)
        assert [m.content for m in log.messages] == ["login", "logout"]
        assert app.machine.document.startswith("# User Story: logout")
        assert app.screen.query_one(DocumentEditor).get_content() == app.machine.document


@pytest.mark.asyncio
async def test_submit_review_shows_cards(app, open_widget, submit_command):
    """Test Submit parses the edited document into cards."""
    async with app.run_test(size=APP_SIZE) as pilot:
        await pilot.pause()
        await open_widget(pilot)
        await submit_command(pilot, "login")

        app.screen.query_one(DocumentEditor).load_content("## A\n\nbody1\n\n## B\n\nbody2")
        await pilot.pause()
        await pilot.click("#submit-review")
        await pilot.pause()

        assert app.machine.stage == Stage.REVIEW
        assert current_panel(app) == "review"
        cards = [widget.card for widget in app.screen.query(StoryCard)]
        assert [(c.title, c.content) for c in cards] == [("A", "body1"), ("B", "body2")]


@pytest.mark.asyncio
async def test_empty_document_shows_no_cards_message(app, open_widget, submit_command):
    async with app.run_test(size=APP_SIZE) as pilot:
        await pilot.pause()
        await open_widget(pilot)
        await submit_command(pilot, "login")

        app.screen.query_one(DocumentEditor).load_content("   ")
        await pilot.pause()
        await pilot.click("#submit-review")
        await pilot.pause()

        assert app.machine.cards == ()
        assert len(app.screen.query(StoryCard)) == 0
        assert len(app.screen.query_one(CardList).query(".empty-cards")) == 1


@pytest.mark.asyncio
async def test_back_buttons_walk_predecessors(app, open_widget, submit_command):
    """Test Back goes Review → Conversation → CommandEntry without losing data."""
    async with app.run_test(size=APP_SIZE) as pilot:
        await pilot.pause()
        await open_widget(pilot)
        await submit_command(pilot, "login")
        await pilot.click("#submit-review")
        await pilot.pause()
        cards = app.machine.cards

        await pilot.click("#review-back")
        await pilot.pause()
        assert app.machine.stage == Stage.CONVERSATION
        assert current_panel(app) == "conversation"

        await pilot.click("#conversation-back")
        await pilot.pause()
        assert app.machine.stage == Stage.COMMAND_ENTRY
        assert current_panel(app) == "command-entry"

        assert app.machine.cards == cards
        assert len(app.machine.conversation) == 1


@pytest.mark.asyncio
async def test_widget_reflects_prepared_machine():
    """Test a machine driven before mounting is drawn in its current stage."""
    machine = ViewStateMachine()
    machine.open()
    machine.submit_command("prepared")
    machine.submit_review()
    app = StorydeckApp(machine=machine)

    async with app.run_test(size=APP_SIZE) as pilot:
        await pilot.pause()

        assert current_panel(app) == "review"
        assert len(app.screen.query(StoryCard)) == 2
        assert app.screen.escape_listener_bound


@pytest.mark.asyncio
async def test_editor_focus_styling_comes_from_css(app, open_widget, submit_command):
    """Test focusing and leaving the editor leaves no inline border behind."""
    async with app.run_test(size=APP_SIZE) as pilot:
        await pilot.pause()
        await open_widget(pilot)
        await submit_command(pilot, "login")

        editor = app.screen.query_one(DocumentEditor)
        editor.focus()
        await pilot.pause()
        assert editor.has_focus

        app.screen.query_one("#chat-input", Input).focus()
        await pilot.pause()

        assert not editor.styles.inline.has_rule("border_top")
        assert not editor.styles.inline.has_rule("border_bottom")


@pytest.mark.asyncio
async def test_late_submit_from_review_is_logged_not_raised():
    """Test a Submit press that arrives after the stage moved on is logged as an error."""
    machine = ViewStateMachine()
    machine.open()
    machine.submit_command("prepared")
    machine.submit_review()
    app = StorydeckApp(machine=machine)

    async with app.run_test(size=APP_SIZE) as pilot:
        await pilot.pause()
        cards = machine.cards

        with capture_logs() as logs:
            app.screen.query_one(StoryWidget).review_pressed()

        assert machine.stage == Stage.REVIEW
        assert machine.cards == cards
        rejected = [entry for entry in logs if entry["event"] == "stage_operation_rejected"]
        assert len(rejected) == 1
        assert rejected[0]["log_level"] == "error"
        assert rejected[0]["operation"] == "edit_document"
