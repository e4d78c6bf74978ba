"""Card identifier generation for Storydeck."""

import time
from typing import Callable


def current_timestamp_ms(clock: Callable[[], float] = time.time) -> int:
    """
    Read the clock once and return whole milliseconds.

    Args:
        clock: Callable returning seconds since the epoch (defaults to time.time)

    Returns:
        Milliseconds since the epoch
    """
    return int(clock() * 1000)


def generate_card_id(timestamp_ms: int, index: int) -> str:
    """
    Build a card ID from a parse timestamp and the card's position.

    All cards of one parse pass share the timestamp, so the index alone keeps
    them distinct. IDs from different passes usually differ but are not
    guaranteed to.

    Example:
        >>> generate_card_id(1700000000000, 2)
        "1700000000000-2"
    """
    return f"{timestamp_ms}-{index}"
