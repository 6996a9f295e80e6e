"""
In-memory implementation of the state store.

Every collection is a dict keyed by the lower-cased name, which keeps
insertion order and gives case-insensitive identity for free.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from witcher.db.interfaces import UpsertResult
from witcher.models import (
    BestiaryEntry,
    CapacityExceededError,
    CounterKind,
    Formula,
    InventoryItem,
)
from witcher.utils.text import equals_ignore_case, fold

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


class InMemoryStateStore:
    """
    In-memory implementation of StateStore.

    Capacities of None mean the collection can grow without bound.
    With strict_capacity, a full collection raises CapacityExceededError;
    otherwise the addition is dropped with a warning.
    """

    def __init__(
        self,
        *,
        max_items: int | None = 100,
        max_formulas: int | None = 50,
        max_bestiary_entries: int | None = 100,
        strict_capacity: bool = True,
    ) -> None:
        self.max_items = max_items
        self.max_formulas = max_formulas
        self.max_bestiary_entries = max_bestiary_entries
        self.strict_capacity = strict_capacity

        self._items: dict[str, InventoryItem] = {}
        self._formulas: dict[str, Formula] = {}
        self._bestiary: dict[str, BestiaryEntry] = {}

    def _is_full(self, collection: dict, capacity: int | None, name: str) -> bool:
        """Check capacity, raising in strict mode."""
        if capacity is None or len(collection) < capacity:
            return False
        if self.strict_capacity:
            raise CapacityExceededError(name, capacity)
        logger.warning("Dropping addition to %s: capacity of %d reached", name, capacity)
        return True

    # Inventory operations
    def add_or_increment_item(self, name: str, quantity: int) -> InventoryItem | None:
        """Create the item or add to its quantity."""
        if quantity < 0:
            raise ValueError(f"Quantity must not be negative: {quantity}")

        item = self._items.get(fold(name))
        if item is not None:
            item.quantity += quantity
            logger.info("Added %d %s (now %d)", quantity, item.name, item.quantity)
            return item

        if self._is_full(self._items, self.max_items, "inventory"):
            return None

        item = InventoryItem(name=name, quantity=quantity)
        self._items[item.key] = item
        logger.info("New inventory item %s (%d)", name, quantity)
        return item

    def try_remove_item(self, name: str, quantity: int) -> bool:
        """Remove quantity if enough is held; otherwise change nothing."""
        item = self._items.get(fold(name))
        if item is None or item.quantity < quantity:
            return False
        item.quantity -= quantity
        logger.info("Removed %d %s (now %d)", quantity, item.name, item.quantity)
        return True

    def has_at_least(self, name: str, quantity: int) -> bool:
        """Check whether at least quantity of the item is held."""
        item = self._items.get(fold(name))
        return item is not None and item.quantity >= quantity

    def get_quantity(self, name: str) -> int:
        """Get the held quantity, 0 if the item is unknown."""
        item = self._items.get(fold(name))
        return item.quantity if item else 0

    def list_items(self) -> list[InventoryItem]:
        """Get all inventory items in insertion order."""
        return list(self._items.values())

    def ensure_item_capacity(self, names: Iterable[str]) -> None:
        """Fail before mutation if adding these names would overflow."""
        if self.max_items is None or not self.strict_capacity:
            return
        new_keys = {fold(n) for n in names} - self._items.keys()
        if len(self._items) + len(new_keys) > self.max_items:
            raise CapacityExceededError("inventory", self.max_items)

    # Formula operations
    def find_formula(self, potion_name: str) -> Formula | None:
        """Get a formula by potion name."""
        return self._formulas.get(fold(potion_name))

    def add_formula(self, formula: Formula) -> bool:
        """Add a formula; False if the potion already has one or it was dropped."""
        if formula.key in self._formulas:
            return False
        if self._is_full(self._formulas, self.max_formulas, "formula book"):
            return False
        self._formulas[formula.key] = formula
        logger.info(
            "Learned formula for %s (%d components)",
            formula.potion_name,
            len(formula.components),
        )
        return True

    def list_formulas(self) -> list[Formula]:
        """Get all formulas in insertion order."""
        return list(self._formulas.values())

    # Bestiary operations
    def find_bestiary_entry(self, monster_name: str) -> BestiaryEntry | None:
        """Get a bestiary entry by monster name."""
        return self._bestiary.get(fold(monster_name))

    def upsert_bestiary_counter(
        self, monster_name: str, kind: CounterKind, value: str
    ) -> UpsertResult:
        """
        Record a counter for a monster.

        Only the slot for the given kind is compared, so learning the
        same name as a sign and as a potion fills both slots.
        """
        entry = self._bestiary.get(fold(monster_name))
        if entry is None:
            if self._is_full(self._bestiary, self.max_bestiary_entries, "bestiary"):
                return UpsertResult.DROPPED
            entry = BestiaryEntry(monster_name=monster_name)
            entry.set_counter(kind, value)
            self._bestiary[entry.key] = entry
            logger.info("New bestiary entry %s: %s %s", monster_name, value, kind.value)
            return UpsertResult.CREATED

        current = entry.get_counter(kind)
        if current and equals_ignore_case(current, value):
            return UpsertResult.UNCHANGED

        entry.set_counter(kind, value)
        logger.info("Bestiary entry %s: %s is now %s", entry.monster_name, kind.value, value)
        return UpsertResult.UPDATED

    def list_bestiary(self) -> list[BestiaryEntry]:
        """Get all bestiary entries in insertion order."""
        return list(self._bestiary.values())
