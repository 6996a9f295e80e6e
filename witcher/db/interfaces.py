"""
State store interface definitions for Witcher Alchemy.

Uses a Protocol class to define the contract for state operations,
so handlers and queries do not depend on a concrete store.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable

    from witcher.models import BestiaryEntry, CounterKind, Formula, InventoryItem


class UpsertResult(str, Enum):
    """Outcome of recording a bestiary counter."""

    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    DROPPED = "dropped"


class StateStore(Protocol):
    """
    Interface for the alchemy state.

    Holds three insertion-ordered collections: inventory items,
    potion formulas, and bestiary entries. Names are unique per
    collection, ignoring case. Quantities never go below zero.
    """

    # Inventory operations
    def add_or_increment_item(self, name: str, quantity: int) -> InventoryItem | None:
        """Create the item or add to its quantity."""
        ...

    def try_remove_item(self, name: str, quantity: int) -> bool:
        """Remove quantity if enough is held; otherwise change nothing."""
        ...

    def has_at_least(self, name: str, quantity: int) -> bool:
        """Check whether at least quantity of the item is held."""
        ...

    def get_quantity(self, name: str) -> int:
        """Get the held quantity, 0 if the item is unknown."""
        ...

    def list_items(self) -> list[InventoryItem]:
        """Get all inventory items in insertion order."""
        ...

    def ensure_item_capacity(self, names: Iterable[str]) -> None:
        """Fail before mutation if adding these names would overflow."""
        ...

    # Formula operations
    def find_formula(self, potion_name: str) -> Formula | None:
        """Get a formula by potion name."""
        ...

    def add_formula(self, formula: Formula) -> bool:
        """Add a formula; False if the potion already has one."""
        ...

    def list_formulas(self) -> list[Formula]:
        """Get all formulas in insertion order."""
        ...

    # Bestiary operations
    def find_bestiary_entry(self, monster_name: str) -> BestiaryEntry | None:
        """Get a bestiary entry by monster name."""
        ...

    def upsert_bestiary_counter(
        self, monster_name: str, kind: CounterKind, value: str
    ) -> UpsertResult:
        """Record a counter for a monster, creating the entry if needed."""
        ...

    def list_bestiary(self) -> list[BestiaryEntry]:
        """Get all bestiary entries in insertion order."""
        ...
