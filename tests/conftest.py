"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the WTII test suite.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator

    from wtii.engine.roster import Roster
    from wtii.models.combatant import Combatant
    from wtii.models.search import CreatureSearchResult


class FixedDie:
    """Die source returning scripted values, cycling through them."""

    def __init__(self, *values: int) -> None:
        self._values = list(values) or [10]
        self._index = 0
        self.calls: list[tuple[int, int]] = []

    def roll_range(self, low: int, high: int) -> int:
        self.calls.append((low, high))
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from wtii.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def isolated_home(tmp_path: Any, monkeypatch: pytest.MonkeyPatch) -> Any:
    """Point HOME and the working directory at a temporary directory."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    return tmp_path


# =============================================================================
# Dice Fixtures
# =============================================================================


@pytest.fixture
def make_die() -> Callable[..., FixedDie]:
    """Factory for scripted die sources."""
    return FixedDie


@pytest.fixture
def fixed_die() -> FixedDie:
    """A die that always rolls 10."""
    return FixedDie(10)


@pytest.fixture
def dice_roller() -> Any:
    """Create a DiceRoller with a fixed seed for reproducible tests."""
    from wtii.engine.dice import DiceRoller

    return DiceRoller(seed=42)


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def goblin_data() -> dict[str, Any]:
    """A trimmed Open5e record for a goblin."""
    return {
        "slug": "goblin",
        "name": "Goblin",
        "desc": "",
        "size": "Small",
        "type": "humanoid",
        "subtype": "goblinoid",
        "alignment": "neutral evil",
        "armor_class": 15,
        "armor_desc": "leather armor, shield",
        "hit_points": 7,
        "hit_dice": "2d6",
        "speed": {"walk": 30},
        "strength": 8,
        "dexterity": 14,
        "constitution": 10,
        "intelligence": 10,
        "wisdom": 8,
        "charisma": 8,
        "strength_save": None,
        "dexterity_save": None,
        "perception": 9,
        "skills": {"stealth": 6, "perception": None},
        "damage_vulnerabilities": "",
        "damage_resistances": "",
        "damage_immunities": "",
        "condition_immunities": "",
        "senses": "darkvision 60 ft., passive Perception 9",
        "languages": "Common, Goblin",
        "challenge_rating": "1/4",
        "cr": 0.25,
        "actions": [
            {
                "name": "Scimitar",
                "desc": "Melee Weapon Attack: +4 to hit, reach 5 ft., one target.",
                "attack_bonus": 4,
                "damage_dice": "1d6",
                "damage_bonus": 2,
            },
        ],
        "reactions": "",
        "legendary_desc": "",
        "legendary_actions": "",
        "special_abilities": [
            {
                "name": "Nimble Escape",
                "desc": "The goblin can take the Disengage or Hide action as a bonus action.",
            },
        ],
        "spell_list": [],
        "document__slug": "wotc-srd",
        "document__title": "5e Core Rules",
    }


@pytest.fixture
def goblin_result(goblin_data: dict[str, Any]) -> CreatureSearchResult:
    """Validated goblin record."""
    from wtii.models.search import CreatureSearchResult

    return CreatureSearchResult.model_validate(goblin_data)


@pytest.fixture
def search_result_factory() -> Callable[..., CreatureSearchResult]:
    """Build minimal search records."""
    from wtii.models.search import CreatureSearchResult

    def _build(name: str = "Bandit", **fields: Any) -> CreatureSearchResult:
        fields.setdefault("hit_points", 11)
        fields.setdefault("dexterity", 12)
        return CreatureSearchResult(name=name, **fields)

    return _build


@pytest.fixture
def make_creature() -> Callable[..., Combatant]:
    """Build creature combatants with a given initiative."""
    from wtii.models.combatant import AbilityScores, Combatant, Faction

    def _build(
        name: str,
        initiative: int | None,
        *,
        health: int = 10,
        dexterity: int | None = 10,
    ) -> Combatant:
        return Combatant(
            name=name,
            faction=Faction.CREATURE,
            initiative=initiative,
            current_health=health,
            max_health=max(health, 1),
            abilities=AbilityScores(dexterity=dexterity),
        )

    return _build


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def make_roster(fixed_die: FixedDie) -> Callable[..., Roster]:
    """Build a roster from combatants with a scripted die."""
    from wtii.engine.roster import Roster

    def _build(combatants: Iterable[Combatant] = (), **kwargs: Any) -> Roster:
        kwargs.setdefault("random_source", fixed_die)
        return Roster(combatants, **kwargs)

    return _build


@pytest.fixture
def five_roster(make_roster: Callable[..., Roster], make_creature: Callable[..., Combatant]) -> Roster:
    """Five creatures with initiatives 20, 16, 12, 8, 4."""
    return make_roster(
        [make_creature(f"C{i}", initiative) for i, initiative in enumerate((20, 16, 12, 8, 4))]
    )


# =============================================================================
# Storage Fixtures
# =============================================================================


class StaticSeed:
    """In-memory seed source."""

    def __init__(self, entries: list[Any]) -> None:
        self.entries = entries

    def load(self) -> list[Any]:
        return list(self.entries)


@pytest.fixture
def static_seed() -> StaticSeed:
    """Seed source with the three default party members."""
    from wtii.models.seed import SeedEntry

    return StaticSeed(
        [
            SeedEntry(name="Samson", description="A real bastard."),
            SeedEntry(name="Thaurun", description="Very nice guy!"),
            SeedEntry(name="Borbur", description="A king."),
        ]
    )
