"""Stage machine, story parser and view projection behind the story widget."""

from storydeck.core.exceptions import StorydeckError, WrongStageError
from storydeck.core.state_machine import ViewStateMachine
from storydeck.core.story_parser import parse_stories
from storydeck.core.view import ViewDescriptor, render

__all__ = [
    "StorydeckError",
    "WrongStageError",
    "ViewStateMachine",
    "parse_stories",
    "ViewDescriptor",
    "render",
]
