"""Pydantic data models for Storydeck."""

from storydeck.models.stage import Stage
from storydeck.models.conversation import ConversationEntry
from storydeck.models.card import Card
from storydeck.models.workflow_state import WorkflowState

__all__ = [
    "Stage",
    "ConversationEntry",
    "Card",
    "WorkflowState",
]
