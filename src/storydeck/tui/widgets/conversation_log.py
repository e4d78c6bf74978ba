"""ConversationLog widget listing the messages exchanged so far."""

from typing import List

from textual.containers import VerticalScroll
from textual.widgets import Static

from storydeck.models.conversation import ConversationEntry


class ConversationLog(VerticalScroll):
    """Scrollable list of conversation messages, user on the right."""

    DEFAULT_CSS = """
    ConversationLog .message {
        padding: 0 1;
        margin-bottom: 1;
        width: 80%;
    }

    ConversationLog .message.-user {
        background: $primary 20%;
        margin-left: 4;
    }

    ConversationLog .message.-assistant {
        background: $panel;
    }
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, id="message-list", **kwargs)
        self._shown: List[ConversationEntry] = []

    @property
    def messages(self) -> List[ConversationEntry]:
        """Messages currently displayed."""
        return list(self._shown)

    async def show_messages(self, messages: List[ConversationEntry]) -> None:
        """Display messages, appending only what is new.

        The log is append-only, so a longer list sharing the displayed prefix
        just mounts the tail. Anything else (retention trimming, reset)
        rebuilds the list.
        """
        if messages == self._shown:
            return

        if messages[:len(self._shown)] == self._shown:
            new_messages = messages[len(self._shown):]
        else:
            await self.remove_children()
            self._shown = []
            new_messages = messages

        if new_messages:
            await self.mount(*[
                Static(entry.content, classes=f"message -{entry.role}", markup=False)
                for entry in new_messages
            ])
            self.scroll_end(animate=False)
        self._shown = list(messages)
