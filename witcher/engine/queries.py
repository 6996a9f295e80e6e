"""
Query Engine for Witcher Alchemy.

Answers question lines (those ending with '?') against the state store.
Listings are comma separated and sorted ignoring case.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from witcher.engine.classifier import items_in_category, strip_trophy_suffix, trophy_name
from witcher.engine.models import INVALID, NO_FORMULA, NO_KNOWLEDGE, NONE_LISTED, Query, QueryType
from witcher.models import ItemCategory
from witcher.utils.text import fold

if TYPE_CHECKING:
    from witcher.db.interfaces import StateStore
    from witcher.models import InventoryItem


def format_listing(entries: list[tuple[int, str]]) -> str:
    """Join `(qty, name)` pairs as "<qty> <name>, ...", or "None"."""
    if not entries:
        return NONE_LISTED
    return ", ".join(f"{quantity} {name}" for quantity, name in entries)


class QueryEngine:
    """Answers the five question shapes."""

    def __init__(self, store: StateStore) -> None:
        self.store = store

    def answer(self, query: Query) -> str:
        """
        Answer a parsed question.

        Args:
            query: Output of CommandParser.parse_query

        Returns:
            The answer text, INVALID for unrecognised questions
        """
        if query.type == QueryType.EFFECTIVENESS:
            return self.effective_against(query.subject)

        elif query.type == QueryType.TOTAL_INGREDIENT:
            return self.total(ItemCategory.INGREDIENT, query.subject)

        elif query.type == QueryType.TOTAL_POTION:
            return self.total(ItemCategory.POTION, query.subject)

        elif query.type == QueryType.TOTAL_TROPHY:
            return self.total(ItemCategory.TROPHY, query.subject)

        elif query.type == QueryType.FORMULA:
            return self.formula_contents(query.subject)

        return INVALID

    def effective_against(self, monster_name: str) -> str:
        """List the known counters for a monster, sorted ignoring case."""
        entry = self.store.find_bestiary_entry(monster_name)
        counters = entry.known_counters() if entry else []
        if not counters:
            return NO_KNOWLEDGE.format(name=monster_name)
        return ", ".join(sorted(counters, key=fold))

    def total(self, category: ItemCategory, name: str = "") -> str:
        """
        Report a single quantity, or list every held item of a category.

        A named lookup is not filtered by category. For trophies the
        name is the monster's, and listings show monster names.
        """
        if name:
            if category == ItemCategory.TROPHY:
                name = trophy_name(name)
            return str(self.store.get_quantity(name))

        items = items_in_category(
            self.store.list_items(), self.store.list_formulas(), category
        )
        if category == ItemCategory.TROPHY:
            return format_listing(self._trophy_listing(items))

        items.sort(key=lambda item: fold(item.name))
        return format_listing([(item.quantity, item.name) for item in items])

    def _trophy_listing(self, items: list[InventoryItem]) -> list[tuple[int, str]]:
        entries = [(item.quantity, strip_trophy_suffix(item.name)) for item in items]
        entries.sort(key=lambda entry: fold(entry[1]))
        return entries

    def formula_contents(self, potion_name: str) -> str:
        """List a formula's components by descending quantity, then name."""
        formula = self.store.find_formula(potion_name)
        if formula is None or not formula.components:
            return NO_FORMULA.format(name=potion_name)

        components = sorted(
            formula.components, key=lambda c: (-c.quantity, fold(c.name))
        )
        return format_listing([(c.quantity, c.name) for c in components])
