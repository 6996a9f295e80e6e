"""
Action Handlers for Witcher Alchemy.

Each handler takes a routed line, parses what follows its leading
phrase, and applies the command to the state store. Malformed input
raises ValueError before any state is changed; domain failures such as
missing ingredients are returned as ordinary response text.
"""

from __future__ import annotations

import logging
from collections import Counter
from itertools import islice
from typing import TYPE_CHECKING

from witcher.db.interfaces import UpsertResult
from witcher.engine.classifier import trophy_name
from witcher.engine.intent import (
    BREW_PHRASE,
    ENCOUNTER_PHRASE,
    LEARN_PHRASE,
    LOOT_PHRASE,
    TRADE_PHRASE,
    strip_phrase,
)
from witcher.engine.models import (
    ALREADY_KNOWN_EFFECTIVENESS,
    ALREADY_KNOWN_FORMULA,
    BESTIARY_UPDATED,
    BREW_SUCCESS,
    DEFEATS,
    INVALID,
    LOOT_SUCCESS,
    NEW_BESTIARY_ENTRY,
    NEW_FORMULA,
    NO_FORMULA,
    NOT_ENOUGH_INGREDIENTS,
    NOT_ENOUGH_TROPHIES,
    TRADE_SUCCESS,
    UNPREPARED,
    EngineConfig,
)
from witcher.engine.parsing import (
    find_word,
    iter_entries,
    parse_entries,
    split_words,
    validate_name,
)
from witcher.models import (
    TROPHY_SUFFIX,
    CapacityExceededError,
    Component,
    CounterKind,
    Formula,
)
from witcher.utils.text import fold, trim

if TYPE_CHECKING:
    from witcher.db.interfaces import StateStore

logger = logging.getLogger(__name__)

TRADE_SEPARATOR = "for"
EFFECTIVE_AGAINST = "is effective against"
CONSISTS_OF = "consists of"
POTION_WORD = "potion"


class ActionHandlers:
    """
    The five state-changing commands.

    Handlers share one store and one config; each call is a single
    command applied in full or not at all.
    """

    def __init__(self, store: StateStore, config: EngineConfig | None = None) -> None:
        self.store = store
        self.config = config or EngineConfig()

    @property
    def max_name_length(self) -> int:
        return self.config.max_name_length

    @property
    def max_monster_name_length(self) -> int:
        """Monster names leave room for the trophy suffix."""
        return self.max_name_length - len(TROPHY_SUFFIX)

    def loot(self, line: str) -> str:
        """
        Geralt loots <qty> <ingredient>, ...

        Every entry is parsed before any is added.
        """
        entries = parse_entries(
            strip_phrase(line, LOOT_PHRASE), max_name_length=self.max_name_length
        )
        self.store.ensure_item_capacity(entry.name for entry in entries)

        for entry in entries:
            self.store.add_or_increment_item(entry.name, entry.quantity)
        return LOOT_SUCCESS

    def trade(self, line: str) -> str:
        """
        Geralt trades <qty> <trophy>, ... for <qty> <ingredient>, ...

        Trophies are checked one at a time as they are parsed, and the
        first shortfall ends the trade before the ingredient list is
        read. Trophies are removed only after every ingredient is added.
        """
        rest = strip_phrase(line, TRADE_PHRASE)
        split_at = find_word(rest, TRADE_SEPARATOR)
        if split_at == -1:
            raise ValueError(f"Trade is missing '{TRADE_SEPARATOR}': {line}")

        trophy_text = rest[:split_at]
        ingredient_text = rest[split_at + len(TRADE_SEPARATOR) :]

        trophies: list[Component] = []
        for trophy in iter_entries(
            trophy_text, multi_word=True, max_name_length=self.max_name_length
        ):
            if not self.store.has_at_least(trophy.name, trophy.quantity):
                return NOT_ENOUGH_TROPHIES
            trophies.append(trophy)

        ingredients = parse_entries(ingredient_text, max_name_length=self.max_name_length)
        self.store.ensure_item_capacity(entry.name for entry in ingredients)

        for ingredient in ingredients:
            self.store.add_or_increment_item(ingredient.name, ingredient.quantity)

        for trophy in trophies:
            if not self.store.try_remove_item(trophy.name, trophy.quantity):
                logger.warning(
                    "Trade could not remove %d %s; entry was listed more than once",
                    trophy.quantity,
                    trophy.name,
                )
        return TRADE_SUCCESS

    def brew(self, line: str) -> str:
        """Geralt brews <potion>"""
        potion_name = validate_name(strip_phrase(line, BREW_PHRASE))

        formula = self.store.find_formula(potion_name)
        if formula is None:
            return NO_FORMULA.format(name=potion_name)

        # A formula may list one ingredient more than once
        required: Counter[str] = Counter()
        names: dict[str, str] = {}
        for component in formula.components:
            required[fold(component.name)] += component.quantity
            names.setdefault(fold(component.name), component.name)

        for key, quantity in required.items():
            if not self.store.has_at_least(names[key], quantity):
                return NOT_ENOUGH_INGREDIENTS

        self.store.ensure_item_capacity([potion_name])
        for key, quantity in required.items():
            self.store.try_remove_item(names[key], quantity)
        self.store.add_or_increment_item(potion_name, 1)
        return BREW_SUCCESS.format(name=potion_name)

    def learn(self, line: str) -> str:
        """
        Geralt learns <counter> <sign|potion> is effective against <monster>
        Geralt learns <potion> potion consists of <qty> <ingredient>, ...
        """
        rest = strip_phrase(line, LEARN_PHRASE)
        if EFFECTIVE_AGAINST in rest:
            return self._learn_effectiveness(rest)
        if CONSISTS_OF in rest:
            return self._learn_formula(rest)
        raise ValueError(f"Unrecognised learn command: {line}")

    def _learn_effectiveness(self, rest: str) -> str:
        subject, enemy = rest.split(EFFECTIVE_AGAINST, 1)
        enemy = validate_name(trim(enemy), self.max_monster_name_length)

        words = split_words(subject)
        if len(words) != 2:
            raise ValueError(f"Expected '<counter> <sign|potion>', got: '{trim(subject)}'")
        counter = validate_name(words[0], self.max_name_length)
        kind = CounterKind.from_word(words[1])

        result = self.store.upsert_bestiary_counter(enemy, kind, counter)
        if result == UpsertResult.CREATED:
            return NEW_BESTIARY_ENTRY.format(name=enemy)
        if result == UpsertResult.UNCHANGED:
            return ALREADY_KNOWN_EFFECTIVENESS
        if result == UpsertResult.UPDATED:
            return BESTIARY_UPDATED.format(name=enemy)
        return ""

    def _learn_formula(self, rest: str) -> str:
        head, component_text = rest.split(CONSISTS_OF, 1)

        potion_at = find_word(head, POTION_WORD)
        if potion_at == -1 or trim(head[potion_at + len(POTION_WORD) :]):
            raise ValueError(f"Expected '<name> {POTION_WORD} {CONSISTS_OF}': {rest}")
        potion_name = validate_name(trim(head[:potion_at]), self.max_name_length)

        components = self._parse_components(component_text)

        if self.store.find_formula(potion_name) is not None:
            return ALREADY_KNOWN_FORMULA

        if not self.store.add_formula(Formula(potion_name=potion_name, components=components)):
            return INVALID
        return NEW_FORMULA.format(name=potion_name)

    def _parse_components(self, text: str) -> list[Component]:
        """Parse a formula's components, honouring max_components."""
        limit = self.config.max_components
        entries = iter_entries(text, max_name_length=self.max_name_length)
        if limit is None:
            return list(entries)

        if self.config.strict_capacity:
            components = list(entries)
            if len(components) > limit:
                raise CapacityExceededError("formula components", limit)
            return components

        components = list(islice(entries, limit))
        if len(text.split(",")) > limit:
            logger.warning("Formula truncated to its first %d components", limit)
        return components

    def encounter(self, line: str) -> str:
        """
        Geralt encounters a <monster>

        A known sign is always usable; a known potion only while one is
        held, and it is used up. Signs are never consumed.
        """
        monster_name = validate_name(strip_phrase(line, ENCOUNTER_PHRASE))

        entry = self.store.find_bestiary_entry(monster_name)
        if entry is None:
            return UNPREPARED
        trophy = trophy_name(monster_name)

        potion = entry.effective_potion
        potion_usable = bool(potion) and self.store.has_at_least(potion, 1)
        if not entry.effective_sign and not potion_usable:
            return UNPREPARED

        self.store.ensure_item_capacity([trophy])
        if potion_usable:
            self.store.try_remove_item(potion, 1)
        self.store.add_or_increment_item(trophy, 1)
        return DEFEATS.format(name=monster_name)
