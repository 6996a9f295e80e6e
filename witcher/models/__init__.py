"""
Core Data Models for Witcher Alchemy.

These models define what the state store keeps between commands:
inventory items, potion formulas, and bestiary entries.
"""

from witcher.models.alchemy import (
    TROPHY_SUFFIX,
    BestiaryEntry,
    CapacityExceededError,
    Component,
    CounterKind,
    Formula,
    InventoryItem,
    ItemCategory,
)

__all__ = [
    "TROPHY_SUFFIX",
    "BestiaryEntry",
    "CapacityExceededError",
    "Component",
    "CounterKind",
    "Formula",
    "InventoryItem",
    "ItemCategory",
]
