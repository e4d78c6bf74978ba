"""Parse a markdown document into story cards.

The document is cut into sections at every second-level heading (a line
starting with ``## ``, or a bare ``##`` line). Each non-blank section becomes
one card:

- a first-level heading (``# Title``) inside the section gives the title and
  is removed from the body
- otherwise the section's own ``## `` heading text is the title
- otherwise the title is ``Story N``, counting kept sections from 1

Text before the first ``## `` line forms a section of its own, so a document
with no second-level headings at all yields a single card.
"""

import re
import time
from typing import Callable, List, Tuple

import structlog

from storydeck.models.card import Card
from storydeck.utils.ids import current_timestamp_ms, generate_card_id

logger = structlog.get_logger()

# Exactly two marks, then whitespace or the end of the line ("##" alone is an
# empty heading). "### " fails because its third mark is not whitespace.
_SECTION_MARKER = re.compile(r"^##(?:[ \t]+|$)", re.MULTILINE)
_TITLE_HEADING = re.compile(r"^#[ \t]+(\S.*)$", re.MULTILINE)


def parse_stories(document: str, clock: Callable[[], float] = time.time) -> List[Card]:
    """
    Convert markdown document text into an ordered list of cards.

    Titles and contents depend only on the document text. IDs combine one
    timestamp read per call with the card's 1-based position, so they are
    unique within the returned list.

    Args:
        document: Markdown text from the editor
        clock: Callable returning seconds since the epoch (used for IDs)

    Returns:
        Cards in document order (empty for an empty or blank document)

    Example:
        >>> cards = parse_stories("## A\\n\\nbody1\\n\\n## B\\n\\nbody2")
        >>> [(c.title, c.content) for c in cards]
        [('A', 'body1'), ('B', 'body2')]
    """
    sections = [
        (heading, body)
        for heading, body in _split_sections(document.replace("\r\n", "\n"))
        if (heading + body).strip()
    ]

    timestamp_ms = current_timestamp_ms(clock)
    cards = []
    for index, (heading, body) in enumerate(sections, start=1):
        title, content = _extract_title(heading, body, index)
        cards.append(
            Card(
                id=generate_card_id(timestamp_ms, index),
                title=title,
                content=content,
            )
        )

    logger.debug(
        "stories_parsed",
        document_length=len(document),
        num_sections=len(sections),
        titles=[card.title for card in cards],
    )
    return cards


def _split_sections(document: str) -> List[Tuple[str, str]]:
    """Split document into (heading, body) pairs at second-level headings.

    The leading section has no heading line, so its heading is empty.
    """
    pieces = _SECTION_MARKER.split(document)
    sections = [("", pieces[0])]
    for piece in pieces[1:]:
        heading, _, body = piece.partition("\n")
        sections.append((heading.strip(), body))
    return sections


def _extract_title(heading: str, body: str, index: int) -> Tuple[str, str]:
    """Pick the card title for one section and return (title, content)."""
    match = _TITLE_HEADING.search(body)
    if match:
        # Only the first heading is consumed, later ones stay in the content
        title = match.group(1).strip()
        body = body[:match.start()] + body[match.end():]
    elif heading:
        title = heading
    else:
        title = f"Story {index}"
    return title, body.strip()
