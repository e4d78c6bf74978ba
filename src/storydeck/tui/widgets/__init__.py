"""Textual widget components."""

from storydeck.tui.widgets.card_list import CardList, StoryCard
from storydeck.tui.widgets.conversation_log import ConversationLog
from storydeck.tui.widgets.document_editor import DocumentEditor
from storydeck.tui.widgets.story_widget import StoryWidget

__all__ = [
    "CardList",
    "StoryCard",
    "ConversationLog",
    "DocumentEditor",
    "StoryWidget",
]
