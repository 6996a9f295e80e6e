"""
Text helpers for Witcher Alchemy.

Names are compared ignoring case everywhere, so "Griffin" and "griffin"
refer to the same monster, item, or formula.
"""

from __future__ import annotations


def trim(text: str) -> str:
    """Remove leading and trailing whitespace."""
    return text.strip()


def ends_with_question_mark(text: str) -> bool:
    """Check whether the last non-whitespace character is '?'."""
    return text.rstrip().endswith("?")


def fold(text: str) -> str:
    """Case-folded form used as a lookup key and sort key."""
    return text.lower()


def equals_ignore_case(a: str, b: str) -> bool:
    return fold(a) == fold(b)


def find_ignore_case(haystack: str, needle: str) -> int:
    """Index of the first case-insensitive match of needle, or -1."""
    return fold(haystack).find(fold(needle))


def contains_ignore_case(haystack: str, needle: str) -> bool:
    return find_ignore_case(haystack, needle) != -1


def starts_with_ignore_case(text: str, prefix: str) -> bool:
    return fold(text).startswith(fold(prefix))


def ends_with_ignore_case(text: str, suffix: str) -> bool:
    return fold(text).endswith(fold(suffix))
