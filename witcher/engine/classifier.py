"""
Item classification for Witcher Alchemy.

An inventory item is a trophy if its name ends with " trophy", a potion
if its name matches a known formula, and an ingredient otherwise. The
trophy rule is checked first.
"""

from __future__ import annotations

from collections.abc import Iterable

from witcher.models import TROPHY_SUFFIX, Formula, InventoryItem, ItemCategory
from witcher.utils.text import ends_with_ignore_case, fold


def is_trophy(name: str) -> bool:
    return ends_with_ignore_case(name, TROPHY_SUFFIX)


def trophy_name(monster_name: str) -> str:
    """Name of the trophy taken from a monster."""
    return f"{monster_name}{TROPHY_SUFFIX}"


def strip_trophy_suffix(name: str) -> str:
    """Monster name a trophy was taken from."""
    if is_trophy(name):
        return name[: -len(TROPHY_SUFFIX)]
    return name


def classify(item: InventoryItem, formulas: Iterable[Formula]) -> ItemCategory:
    """
    Decide how an inventory item is listed.

    Args:
        item: The inventory item
        formulas: Currently known formulas

    Returns:
        TROPHY, POTION, or INGREDIENT
    """
    if is_trophy(item.name):
        return ItemCategory.TROPHY
    key = fold(item.name)
    if any(formula.key == key for formula in formulas):
        return ItemCategory.POTION
    return ItemCategory.INGREDIENT


def items_in_category(
    items: Iterable[InventoryItem],
    formulas: Iterable[Formula],
    category: ItemCategory,
) -> list[InventoryItem]:
    """Held items (quantity above zero) of one category, in store order."""
    formulas = list(formulas)
    return [
        item
        for item in items
        if item.quantity > 0 and classify(item, formulas) == category
    ]
