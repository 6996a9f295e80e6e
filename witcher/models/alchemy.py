"""
Alchemy Models for Witcher Alchemy.

Defines the records kept by the state store:
- InventoryItem: an ingredient, potion, or trophy and how many are held
- Formula: a potion recipe and its components
- BestiaryEntry: which sign and potion counter a monster
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

TROPHY_SUFFIX = " trophy"


class CapacityExceededError(ValueError):
    """Raised when a collection in the state store is already full."""

    def __init__(self, collection: str, capacity: int) -> None:
        super().__init__(f"Cannot add to {collection}: capacity of {capacity} reached")
        self.collection = collection
        self.capacity = capacity


class ItemCategory(str, Enum):
    """How an inventory item is listed."""

    INGREDIENT = "ingredient"
    POTION = "potion"
    TROPHY = "trophy"


class CounterKind(str, Enum):
    """Kinds of counter a bestiary entry can record."""

    SIGN = "sign"
    POTION = "potion"

    @classmethod
    def from_word(cls, word: str) -> CounterKind:
        """Resolve a counter kind from a word, ignoring case."""
        try:
            return cls(word.lower())
        except ValueError:
            raise ValueError(f"Unknown counter kind: {word}") from None


class InventoryItem(BaseModel):
    """A named stack of items held by Geralt."""

    name: str = Field(min_length=1, description="Item name, matched ignoring case")
    quantity: int = Field(default=0, ge=0)

    @property
    def key(self) -> str:
        return self.name.lower()


class Component(BaseModel):
    """One ingredient line of a formula, or one `<qty> <name>` entry."""

    name: str = Field(min_length=1)
    quantity: int = Field(gt=0)

    model_config = {"frozen": True}


class Formula(BaseModel):
    """A potion recipe. Formulas cannot be edited once learned."""

    potion_name: str = Field(min_length=1)
    components: list[Component] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def key(self) -> str:
        return self.potion_name.lower()


class BestiaryEntry(BaseModel):
    """What is known to be effective against one monster."""

    monster_name: str = Field(min_length=1)
    effective_potion: str | None = Field(default=None, description="Potion counter")
    effective_sign: str | None = Field(default=None, description="Sign counter")

    @property
    def key(self) -> str:
        return self.monster_name.lower()

    def get_counter(self, kind: CounterKind) -> str | None:
        """Get the counter recorded for a kind, if any."""
        if kind == CounterKind.SIGN:
            return self.effective_sign
        return self.effective_potion

    def set_counter(self, kind: CounterKind, value: str) -> None:
        """Record a counter, replacing the previous one of the same kind."""
        if kind == CounterKind.SIGN:
            self.effective_sign = value
        else:
            self.effective_potion = value

    def known_counters(self) -> list[str]:
        """Counters that are set, potion slot first."""
        return [c for c in (self.effective_potion, self.effective_sign) if c]
