"""Unit tests for data models."""

import pytest
from storydeck.models.card import Card
from storydeck.models.conversation import ConversationEntry
from storydeck.models.stage import Stage
from storydeck.models.workflow_state import WorkflowState


class TestStage:
    """Test Stage enum."""

    def test_values(self):
        assert [stage.value for stage in Stage] == [
            "idle",
            "command_entry",
            "conversation",
            "review",
        ]

    def test_is_string_enum(self):
        """Test stages compare equal to their string values."""
        assert Stage.REVIEW == "review"


class TestConversationEntry:
    """Test ConversationEntry model."""

    def test_create_user_entry(self):
        entry = ConversationEntry(role="user", content="Add login")

        assert entry.role == "user"
        assert entry.content == "Add login"

    def test_rejects_unknown_role(self):
        with pytest.raises(Exception):  # Pydantic ValidationError
            ConversationEntry(role="system", content="x")

    def test_entry_is_immutable(self):
        entry = ConversationEntry(role="assistant", content="Sure")

        with pytest.raises(Exception):  # Pydantic ValidationError
            entry.content = "changed"


class TestCard:
    """Test Card model."""

    def test_create_card(self):
        card = Card(id="1700000000000-1", title="Login", content="As a user...")

        assert card.id == "1700000000000-1"
        assert card.title == "Login"

    def test_cards_compare_by_value(self):
        assert Card(id="a", title="T", content="C") == Card(id="a", title="T", content="C")

    def test_requires_all_fields(self):
        with pytest.raises(Exception):  # Pydantic ValidationError
            Card(id="a", title="T")


class TestWorkflowState:
    """Test WorkflowState model."""

    def test_defaults(self):
        state = WorkflowState()

        assert state.stage == Stage.IDLE
        assert state.command == ""
        assert state.conversation == []
        assert state.document == ""
        assert state.cards == []

    def test_lists_are_not_shared(self):
        """Test default lists are created per instance."""
        first = WorkflowState()
        second = WorkflowState()

        first.conversation.append(ConversationEntry(role="user", content="x"))

        assert second.conversation == []

    def test_state_is_mutable(self):
        state = WorkflowState()

        state.stage = Stage.COMMAND_ENTRY

        assert state.stage == Stage.COMMAND_ENTRY
