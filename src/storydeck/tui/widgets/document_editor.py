"""DocumentEditor widget for editing the generated story document.

This widget provides the multi-line markdown editor shown next to the
conversation while the user refines a command.
"""

from textual.widgets import TextArea


class DocumentEditor(TextArea):
    """Multi-line text editor for the story document."""

    DEFAULT_CSS = """
    DocumentEditor {
        border: solid $panel-lighten-2;
    }

    DocumentEditor:focus {
        border: heavy $accent;
    }
    """

    def __init__(
        self,
        *args,
        **kwargs
    ):
        """Initialize DocumentEditor."""
        super().__init__("", *args, id="document-editor", **kwargs)
        self.show_line_numbers = False

    def load_content(self, content: str) -> None:
        """Load content into the editor, leaving it alone if unchanged.

        Args:
            content: Markdown text to show
        """
        if self.text != content:
            self.text = content

    def get_content(self) -> str:
        """Get current content from editor.

        Returns:
            Current text content
        """
        return self.text
