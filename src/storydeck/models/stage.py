"""Stage enum for the story workflow."""

from enum import Enum


class Stage(str, Enum):
    """Enum for the visible stage of the story widget."""

    IDLE = "idle"
    COMMAND_ENTRY = "command_entry"
    CONVERSATION = "conversation"
    REVIEW = "review"
