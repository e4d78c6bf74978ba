"""CardList widget showing parsed story cards with rendered markdown bodies."""

from typing import List

from rich.console import Group
from rich.markdown import Markdown
from rich.text import Text
from textual.containers import VerticalScroll
from textual.widgets import Static

from storydeck.models.card import Card


class StoryCard(Static):
    """A single card: bold title over the markdown-rendered content."""

    DEFAULT_CSS = """
    StoryCard {
        border: round $accent;
        padding: 0 1;
        margin-bottom: 1;
        height: auto;
    }
    """

    def __init__(self, card: Card, **kwargs):
        self.card = card
        super().__init__(self._build_renderable(card), classes="story-card", **kwargs)

    @staticmethod
    def _build_renderable(card: Card) -> Group:
        parts = [Text(card.title, style="bold")]
        if card.content:
            parts.append(Markdown(card.content))
        return Group(*parts)


class CardList(VerticalScroll):
    """Scrollable list of StoryCard widgets."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, id="card-list", **kwargs)
        self._shown: List[Card] = []
        self._rendered = False

    @property
    def cards(self) -> List[Card]:
        """Cards currently displayed."""
        return list(self._shown)

    async def show_cards(self, cards: List[Card]) -> None:
        """Replace the displayed cards wholesale."""
        if self._rendered and cards == self._shown:
            return
        await self.remove_children()
        if cards:
            await self.mount(*[StoryCard(card) for card in cards])
        else:
            await self.mount(Static("No stories found in the document", classes="empty-cards"))
        self.scroll_home(animate=False)
        self._shown = list(cards)
        self._rendered = True
