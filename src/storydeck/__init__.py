"""Storydeck: turn a free-text command into user story cards."""

__version__ = "0.1.0"
