"""Textual screen components."""

from storydeck.tui.screens.workflow import WorkflowScreen

__all__ = [
    "WorkflowScreen",
]
