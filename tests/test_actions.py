"""Tests for the action handlers."""

from __future__ import annotations

import pytest

from witcher.db import InMemoryStateStore
from witcher.engine.actions import ActionHandlers
from witcher.engine.models import EngineConfig
from witcher.models import CapacityExceededError, Component, CounterKind, Formula


def _make_handlers(**config) -> tuple[ActionHandlers, InMemoryStateStore]:
    """Create handlers over an empty store."""
    cfg = EngineConfig(**config)
    store = InMemoryStateStore(
        max_items=cfg.max_inventory_items,
        max_formulas=cfg.max_formulas,
        max_bestiary_entries=cfg.max_bestiary_entries,
        strict_capacity=cfg.strict_capacity,
    )
    return ActionHandlers(store, cfg), store


def _stock_swallow(store: InMemoryStateStore) -> None:
    store.add_formula(
        Formula(
            potion_name="Swallow",
            components=[
                Component(name="Vitriol", quantity=2),
                Component(name="Rebis", quantity=1),
            ],
        )
    )


class TestLoot:
    """Tests for Geralt loots."""

    def test_loot_adds_items(self):
        handlers, store = _make_handlers()
        assert handlers.loot("Geralt loots 5 Vitriol, 2 Rebis") == "Alchemy ingredients obtained"
        assert store.get_quantity("Vitriol") == 5
        assert store.get_quantity("Rebis") == 2

    def test_loot_aggregates_case_insensitively(self):
        handlers, store = _make_handlers()
        handlers.loot("Geralt loots 5 Vitriol, 1 vitriol")
        handlers.loot("Geralt loots 2 VITRIOL")
        assert store.get_quantity("Vitriol") == 8

    @pytest.mark.parametrize(
        "line",
        [
            "Geralt loots 5 Vitriol, 0 Rebis",
            "Geralt loots 5 Vitriol, Rebis",
            "Geralt loots 5 Vitriol,",
            "Geralt loots",
        ],
    )
    def test_malformed_loot_changes_nothing(self, line: str):
        handlers, store = _make_handlers()
        with pytest.raises(ValueError):
            handlers.loot(line)
        assert store.list_items() == []

    def test_loot_over_capacity_changes_nothing(self):
        handlers, store = _make_handlers(max_inventory_items=2)
        with pytest.raises(CapacityExceededError):
            handlers.loot("Geralt loots 1 Vitriol, 1 Rebis, 1 Aether")
        assert store.list_items() == []


class TestTrade:
    """Tests for Geralt trades."""

    def test_successful_trade(self):
        handlers, store = _make_handlers()
        store.add_or_increment_item("Leshen trophy", 2)
        result = handlers.trade("Geralt trades 2 Leshen trophy for 3 Vitriol, 1 Rebis")
        assert result == "Trade successful"
        assert store.get_quantity("Leshen trophy") == 0
        assert store.get_quantity("Vitriol") == 3
        assert store.get_quantity("Rebis") == 1

    def test_not_enough_trophies(self):
        handlers, store = _make_handlers()
        store.add_or_increment_item("Leshen trophy", 1)
        result = handlers.trade("Geralt trades 2 Leshen trophy for 3 Vitriol")
        assert result == "Not enough trophies"
        assert store.get_quantity("Leshen trophy") == 1
        assert store.get_quantity("Vitriol") == 0

    def test_shortfall_reported_before_ingredients_are_parsed(self):
        handlers, _ = _make_handlers()
        result = handlers.trade("Geralt trades 1 Griffin trophy for nonsense")
        assert result == "Not enough trophies"

    def test_bad_ingredient_list_changes_nothing(self):
        handlers, store = _make_handlers()
        store.add_or_increment_item("Leshen trophy", 1)
        with pytest.raises(ValueError):
            handlers.trade("Geralt trades 1 Leshen trophy for 3 Vitriol, lots of Rebis")
        assert store.get_quantity("Leshen trophy") == 1
        assert store.get_quantity("Vitriol") == 0

    def test_missing_for_is_invalid(self):
        handlers, store = _make_handlers()
        store.add_or_increment_item("Leshen trophy", 1)
        with pytest.raises(ValueError):
            handlers.trade("Geralt trades 1 Leshen trophy 3 Vitriol")

    def test_duplicate_trophy_entries_each_checked_alone(self):
        handlers, store = _make_handlers()
        store.add_or_increment_item("Leshen trophy", 1)
        result = handlers.trade("Geralt trades 1 Leshen trophy, 1 Leshen trophy for 1 Vitriol")
        assert result == "Trade successful"
        assert store.get_quantity("Leshen trophy") == 0
        assert store.get_quantity("Vitriol") == 1


class TestBrew:
    """Tests for Geralt brews."""

    def test_no_formula(self):
        handlers, _ = _make_handlers()
        assert handlers.brew("Geralt brews Swallow") == "No formula for Swallow"

    def test_not_enough_ingredients(self):
        handlers, store = _make_handlers()
        _stock_swallow(store)
        store.add_or_increment_item("Vitriol", 2)
        assert handlers.brew("Geralt brews Swallow") == "Not enough ingredients"
        assert store.get_quantity("Vitriol") == 2
        assert store.get_quantity("Swallow") == 0

    def test_brew_consumes_components(self):
        handlers, store = _make_handlers()
        _stock_swallow(store)
        store.add_or_increment_item("Vitriol", 3)
        store.add_or_increment_item("Rebis", 1)
        assert handlers.brew("Geralt brews swallow") == "Alchemy item created: swallow"
        assert store.get_quantity("Vitriol") == 1
        assert store.get_quantity("Rebis") == 0
        assert store.get_quantity("Swallow") == 1

    def test_long_unknown_potion_has_no_formula(self):
        handlers, store = _make_handlers()
        name = "P" * 70
        assert handlers.brew(f"Geralt brews {name}") == f"No formula for {name}"
        assert store.list_items() == []

    def test_repeated_component_needs_the_total(self):
        handlers, store = _make_handlers()
        store.add_formula(
            Formula(
                potion_name="Cat",
                components=[Component(name="Aether", quantity=2), Component(name="aether", quantity=2)],
            )
        )
        store.add_or_increment_item("Aether", 3)
        assert handlers.brew("Geralt brews Cat") == "Not enough ingredients"
        assert store.get_quantity("Aether") == 3


class TestLearn:
    """Tests for Geralt learns."""

    def test_new_bestiary_entry(self):
        handlers, store = _make_handlers()
        result = handlers.learn("Geralt learns Igni sign is effective against Leshen")
        assert result == "New bestiary entry added: Leshen"
        assert store.find_bestiary_entry("Leshen").effective_sign == "Igni"

    def test_already_known_effectiveness(self):
        handlers, _ = _make_handlers()
        handlers.learn("Geralt learns Igni sign is effective against Leshen")
        result = handlers.learn("Geralt learns igni SIGN is effective against leshen")
        assert result == "Already known effectiveness"

    def test_updated_entry(self):
        handlers, store = _make_handlers()
        handlers.learn("Geralt learns Igni sign is effective against Leshen")
        result = handlers.learn("Geralt learns Swallow potion is effective against Leshen")
        assert result == "Bestiary entry updated: Leshen"
        entry = store.find_bestiary_entry("Leshen")
        assert entry.effective_sign == "Igni"
        assert entry.effective_potion == "Swallow"

    @pytest.mark.parametrize(
        "line",
        [
            "Geralt learns Igni spell is effective against Leshen",
            "Geralt learns Igni is effective against Leshen",
            "Geralt learns Black Blood potion is effective against Leshen",
            "Geralt learns Igni sign is effective against",
            "Geralt learns nothing useful",
        ],
    )
    def test_malformed_learn(self, line: str):
        handlers, store = _make_handlers()
        with pytest.raises(ValueError):
            handlers.learn(line)
        assert store.list_bestiary() == []

    def test_new_formula(self):
        handlers, store = _make_handlers()
        result = handlers.learn("Geralt learns Black Blood potion consists of 3 Vitriol, 2 Rebis")
        assert result == "New alchemy formula obtained: Black Blood"
        formula = store.find_formula("black blood")
        assert [(c.quantity, c.name) for c in formula.components] == [(3, "Vitriol"), (2, "Rebis")]

    def test_already_known_formula(self):
        handlers, store = _make_handlers()
        handlers.learn("Geralt learns Swallow potion consists of 1 Vitriol")
        result = handlers.learn("Geralt learns swallow potion consists of 5 Rebis")
        assert result == "Already known formula"
        assert store.find_formula("Swallow").components[0].name == "Vitriol"

    def test_malformed_component_creates_no_formula(self):
        handlers, store = _make_handlers()
        with pytest.raises(ValueError):
            handlers.learn("Geralt learns Swallow potion consists of 1 Vitriol, 0 Rebis")
        assert store.list_formulas() == []

    def test_formula_without_potion_word(self):
        handlers, _ = _make_handlers()
        with pytest.raises(ValueError):
            handlers.learn("Geralt learns Swallow consists of 1 Vitriol")

    def test_too_many_components(self):
        handlers, store = _make_handlers(max_components=2)
        with pytest.raises(CapacityExceededError):
            handlers.learn("Geralt learns Swallow potion consists of 1 A, 1 B, 1 C")
        assert store.list_formulas() == []

    def test_too_many_components_truncated_in_legacy_mode(self):
        handlers, store = _make_handlers(max_components=2, strict_capacity=False)
        handlers.learn("Geralt learns Swallow potion consists of 1 A, 1 B, 1 C")
        assert [c.name for c in store.find_formula("Swallow").components] == ["A", "B"]


class TestEncounter:
    """Tests for Geralt encounters a."""

    def test_unknown_monster(self):
        handlers, store = _make_handlers()
        result = handlers.encounter("Geralt encounters a Leshen")
        assert result == "Geralt is unprepared and barely escapes with his life"
        assert store.list_items() == []

    def test_sign_is_not_consumed(self):
        handlers, store = _make_handlers()
        store.upsert_bestiary_counter("Leshen", CounterKind.SIGN, "Igni")
        assert handlers.encounter("Geralt encounters a Leshen") == "Geralt defeats Leshen"
        assert handlers.encounter("Geralt encounters a leshen") == "Geralt defeats leshen"
        assert store.get_quantity("Leshen trophy") == 2

    def test_potion_needs_to_be_held(self):
        handlers, store = _make_handlers()
        store.upsert_bestiary_counter("Leshen", CounterKind.POTION, "Swallow")
        result = handlers.encounter("Geralt encounters a Leshen")
        assert result == "Geralt is unprepared and barely escapes with his life"
        assert store.get_quantity("Leshen trophy") == 0

    def test_potion_is_consumed(self):
        handlers, store = _make_handlers()
        store.upsert_bestiary_counter("Leshen", CounterKind.POTION, "Swallow")
        store.add_or_increment_item("Swallow", 1)
        assert handlers.encounter("Geralt encounters a Leshen") == "Geralt defeats Leshen"
        assert store.get_quantity("Swallow") == 0
        assert store.get_quantity("Leshen trophy") == 1

    def test_potion_consumed_even_with_sign(self):
        handlers, store = _make_handlers()
        store.upsert_bestiary_counter("Leshen", CounterKind.POTION, "Swallow")
        store.upsert_bestiary_counter("Leshen", CounterKind.SIGN, "Igni")
        store.add_or_increment_item("Swallow", 2)
        handlers.encounter("Geralt encounters a Leshen")
        assert store.get_quantity("Swallow") == 1

    def test_sign_used_when_potion_missing(self):
        handlers, store = _make_handlers()
        store.upsert_bestiary_counter("Leshen", CounterKind.POTION, "Swallow")
        store.upsert_bestiary_counter("Leshen", CounterKind.SIGN, "Igni")
        assert handlers.encounter("Geralt encounters a Leshen") == "Geralt defeats Leshen"
        assert store.get_quantity("Swallow") == 0

    def test_longest_learnable_monster_can_be_defeated(self):
        handlers, store = _make_handlers()
        monster = "M" * (handlers.max_monster_name_length - 1)
        assert handlers.learn(f"Geralt learns Igni sign is effective against {monster}") == (
            f"New bestiary entry added: {monster}"
        )
        assert handlers.encounter(f"Geralt encounters a {monster}") == f"Geralt defeats {monster}"
        assert store.get_quantity(f"{monster} trophy") == 1

    def test_monster_name_too_long_for_its_trophy_is_not_learned(self):
        handlers, store = _make_handlers()
        monster = "M" * 60
        with pytest.raises(ValueError, match="too long"):
            handlers.learn(f"Geralt learns Igni sign is effective against {monster}")
        assert store.list_bestiary() == []

    def test_long_unknown_monster_is_unprepared(self):
        handlers, store = _make_handlers()
        monster = "M" * 80
        result = handlers.encounter(f"Geralt encounters a {monster}")
        assert result == "Geralt is unprepared and barely escapes with his life"
        assert store.list_items() == []

    def test_an_is_not_accepted(self):
        handlers, _ = _make_handlers()
        with pytest.raises(ValueError):
            handlers.encounter("Geralt encounters an Alghoul")
