"""
Command Parser for Witcher Alchemy.

Turns one input line into a tagged Command, and question lines into a
tagged Query. Matching is literal prefix matching against fixed phrase
tables; the handlers parse whatever follows the phrase.
"""

from __future__ import annotations

import logging

from witcher.engine.models import Command, CommandType, Query, QueryType
from witcher.utils.text import (
    ends_with_question_mark,
    equals_ignore_case,
    starts_with_ignore_case,
    trim,
)

logger = logging.getLogger(__name__)

# Full leading phrases the action handlers require (case-sensitive)
LOOT_PHRASE = "Geralt loots "
TRADE_PHRASE = "Geralt trades "
BREW_PHRASE = "Geralt brews "
LEARN_PHRASE = "Geralt learns "
ENCOUNTER_PHRASE = "Geralt encounters a "

# Router keywords, tried in this order
COMMAND_PREFIXES: list[tuple[CommandType, str]] = [
    (CommandType.LOOT, LOOT_PHRASE.rstrip()),
    (CommandType.TRADE, TRADE_PHRASE.rstrip()),
    (CommandType.BREW, BREW_PHRASE.rstrip()),
    (CommandType.LEARN, LEARN_PHRASE.rstrip()),
    (CommandType.ENCOUNTER, ENCOUNTER_PHRASE.rstrip()),
]

EXIT_COMMAND = "Exit"

# Question prefixes (case-insensitive), tried in this order
QUERY_PREFIXES: list[tuple[QueryType, str]] = [
    (QueryType.EFFECTIVENESS, "What is effective against"),
    (QueryType.TOTAL_INGREDIENT, "Total ingredient"),
    (QueryType.TOTAL_POTION, "Total potion"),
    (QueryType.TOTAL_TROPHY, "Total trophy"),
    (QueryType.FORMULA, "What is in"),
]

# Questions that must name a subject
SUBJECT_REQUIRED = {QueryType.EFFECTIVENESS, QueryType.FORMULA}


def strip_phrase(line: str, phrase: str) -> str:
    """
    Return what follows a required leading phrase.

    Raises:
        ValueError: If the line does not start with the phrase
    """
    if not line.startswith(phrase):
        raise ValueError(f"Expected '{phrase.strip()}' at start of: {line}")
    return trim(line[len(phrase) :])


class CommandParser:
    """Rule-based router using the fixed phrase tables."""

    def parse(self, line: str) -> Command:
        """
        Tag an input line with its command family.

        Args:
            line: Raw text from the user

        Returns:
            Command with the matched type, UNKNOWN if nothing matched
        """
        text = trim(line)

        if ends_with_question_mark(text):
            command_type = CommandType.QUERY
        else:
            command_type = CommandType.UNKNOWN
            for candidate, prefix in COMMAND_PREFIXES:
                if text.startswith(prefix):
                    command_type = candidate
                    break
            else:
                if equals_ignore_case(text, EXIT_COMMAND):
                    command_type = CommandType.EXIT

        logger.debug("Routed %r as %s", text, command_type.value)
        return Command(type=command_type, original_input=text)

    def parse_query(self, line: str) -> Query:
        """
        Match a question line against the question shapes.

        The subject is the text between the prefix and the first '?'.
        A prefix must be followed by whitespace or the '?' itself, so
        "Total potions?" stays unmatched and answers INVALID.
        """
        text = trim(line)

        for query_type, prefix in QUERY_PREFIXES:
            if not starts_with_ignore_case(text, prefix):
                continue

            rest = text[len(prefix) :]
            if not (rest.startswith("?") or rest[:1].isspace()):
                continue

            subject = trim(rest.split("?", 1)[0])
            if not subject and query_type in SUBJECT_REQUIRED:
                break
            return Query(type=query_type, subject=subject, original_input=text)

        return Query(type=QueryType.UNKNOWN, original_input=text)
