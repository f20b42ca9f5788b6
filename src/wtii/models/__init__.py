"""Pydantic V2 schemas for the WTII encounter tracker.

Submodules:
    combatant: The roster entity, its enums and factories.
    search: Monster database search records.
    seed: Default roster entries.

Example:
    >>> from wtii.models import create_player
    >>> hero = create_player("Thaurun", "Very nice guy!")
    >>> hero.initiative is None
    True
"""

from __future__ import annotations

from wtii.models.combatant import (
    AbilityScores,
    Combatant,
    CombatText,
    Faction,
    Status,
    create_creature,
    create_player,
)
from wtii.models.search import (
    ActionEntry,
    CreatureSearchResult,
    NamedEntry,
    Speed,
    parse_search_response,
)
from wtii.models.seed import SeedEntry


__all__ = [
    # Combatant
    "Status",
    "Faction",
    "AbilityScores",
    "CombatText",
    "Combatant",
    "create_player",
    "create_creature",
    # Search
    "Speed",
    "NamedEntry",
    "ActionEntry",
    "CreatureSearchResult",
    "parse_search_response",
    # Seed
    "SeedEntry",
]
