"""
Entry list parsing for Witcher Alchemy.

Commands carry comma separated `<qty> <name>` lists, e.g.
"5 Vitriol, 2 Rebis". Parsing never mutates the input; entries are
produced lazily so a handler can act on each one before the next is read.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from witcher.models import Component

# "<qty> <name>" with a one-word name (ingredients)
ENTRY_PATTERN = re.compile(r"^([0-9]+)\s+(\S+)$")

# "<qty> <name...>" where the name may span words (trophies)
MULTI_WORD_ENTRY_PATTERN = re.compile(r"^([0-9]+)\s+(\S.*)$")

WORD_PATTERN = re.compile(r"\s+")


def validate_name(name: str, max_name_length: int | None = None) -> str:
    """
    Check a name is usable as a record key.

    Raises:
        ValueError: If the name is empty or too long
    """
    if not name:
        raise ValueError("Name must not be empty")
    if max_name_length is not None and len(name) >= max_name_length:
        raise ValueError(f"Name too long ({len(name)} >= {max_name_length}): {name}")
    return name


def split_list(text: str) -> Iterator[str]:
    """Yield the trimmed comma separated tokens of a list."""
    for token in text.split(","):
        yield token.strip()


def parse_entry(
    token: str,
    *,
    multi_word: bool = False,
    max_name_length: int | None = None,
) -> Component:
    """
    Parse one `<qty> <name>` entry.

    Args:
        token: A single list entry, already trimmed
        multi_word: Allow names made of several words
        max_name_length: Reject names this long or longer

    Returns:
        Component with the name and a positive quantity

    Raises:
        ValueError: If the entry is malformed or the quantity is not positive
    """
    pattern = MULTI_WORD_ENTRY_PATTERN if multi_word else ENTRY_PATTERN
    match = pattern.match(token)
    if not match:
        raise ValueError(f"Invalid entry: '{token}'")

    quantity = int(match.group(1))
    if quantity <= 0:
        raise ValueError(f"Quantity must be positive: '{token}'")

    name = WORD_PATTERN.sub(" ", match.group(2).strip())
    return Component(name=validate_name(name, max_name_length), quantity=quantity)


def iter_entries(
    text: str,
    *,
    multi_word: bool = False,
    max_name_length: int | None = None,
) -> Iterator[Component]:
    """
    Lazily parse a comma separated entry list.

    Raises:
        ValueError: On the first malformed entry, or if the list is empty
    """
    if not text.strip():
        raise ValueError("Entry list must not be empty")
    for token in split_list(text):
        yield parse_entry(token, multi_word=multi_word, max_name_length=max_name_length)


def parse_entries(
    text: str,
    *,
    multi_word: bool = False,
    max_name_length: int | None = None,
) -> list[Component]:
    """Parse a whole entry list before anything acts on it."""
    return list(iter_entries(text, multi_word=multi_word, max_name_length=max_name_length))


def split_words(text: str) -> list[str]:
    """Split text on runs of whitespace."""
    return text.split()


def find_word(text: str, word: str) -> int:
    """Index of the first standalone occurrence of word, or -1."""
    match = re.search(rf"(?<!\S){re.escape(word)}(?!\S)", text)
    return match.start() if match else -1
