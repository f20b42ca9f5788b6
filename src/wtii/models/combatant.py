"""Combatant model for the encounter roster.

A Combatant is either a manually entered player or a creature built from
a monster database search result. Both live in the same roster and share
one invariant: status follows health. Zero hit points means Dead, anything
above zero means Alive, and every health mutation re-derives the status.
"""

from __future__ import annotations

from enum import StrEnum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from wtii.core.constants import PLAYER_DEFAULT_HIT_POINTS
from wtii.core.exceptions import DataQualityError
from wtii.core.logging import get_logger
from wtii.engine.dice import RandomSource, ability_modifier, roll_initiative
from wtii.models.search import ActionEntry, CreatureSearchResult, NamedEntry, Speed


logger = get_logger(__name__)


# =============================================================================
# Enumerations
# =============================================================================


class Status(StrEnum):
    """Whether a combatant is still standing."""

    ALIVE = "alive"
    DEAD = "dead"


class Faction(StrEnum):
    """Who controls a combatant."""

    PLAYER = "player"
    CREATURE = "creature"


# =============================================================================
# Components
# =============================================================================


class AbilityScores(BaseModel):
    """The six ability scores and their saving throw modifiers.

    Every value is optional: players are entered by name only and search
    records frequently omit saves.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    strength: int | None = None
    dexterity: int | None = None
    constitution: int | None = None
    intelligence: int | None = None
    wisdom: int | None = None
    charisma: int | None = None
    strength_save: int | None = None
    dexterity_save: int | None = None
    constitution_save: int | None = None
    intelligence_save: int | None = None
    wisdom_save: int | None = None
    charisma_save: int | None = None

    def modifier(self, ability: str) -> int | None:
        """Modifier for an ability name, or None if the score is unknown."""
        score = getattr(self, ability)
        return None if score is None else ability_modifier(score)


class CombatText(BaseModel):
    """Descriptive stat-block text. Display only."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    size: str | None = None
    creature_type: str | None = None
    alignment: str | None = None
    armor_desc: str | None = None
    hit_dice: str | None = None
    speed: Speed | None = None
    perception: int | None = None
    skills: dict[str, int] | None = None
    senses: str | None = None
    languages: str | None = None
    damage_vulnerabilities: str | None = None
    damage_resistances: str | None = None
    damage_immunities: str | None = None
    condition_immunities: str | None = None
    challenge_rating: str | None = None
    actions: list[ActionEntry] = Field(default_factory=list)
    legendary_actions: list[ActionEntry] = Field(default_factory=list)
    reactions: list[NamedEntry] = Field(default_factory=list)
    special_abilities: list[NamedEntry] = Field(default_factory=list)


# =============================================================================
# Entity
# =============================================================================


class Combatant(BaseModel):
    """One participant in an encounter.

    Attributes:
        id: Unique identity; names are not unique.
        name: Display name.
        description: Optional free text.
        status: Alive or Dead, derived from current_health.
        faction: Player or Creature.
        initiative: Turn order value, None until rolled or assigned.
        current_health: Hit points left, within [0, max_health].
        max_health: Hit point maximum.
        armor_class: Armor class, if known.
        abilities: Ability scores and saves.
        combat_text: Display-only stat-block text.
    """

    model_config = ConfigDict(extra="forbid")

    id: UUID = Field(default_factory=uuid4, description="Unique combatant ID")
    name: str = Field(min_length=1, description="Display name")
    description: str | None = Field(default=None, description="Free text")
    status: Status = Field(default=Status.ALIVE)
    faction: Faction = Field(default=Faction.CREATURE)
    initiative: int | None = Field(default=None)
    current_health: int = Field(ge=0)
    max_health: int = Field(ge=0)
    armor_class: int | None = Field(default=None)
    abilities: AbilityScores = Field(default_factory=AbilityScores)
    combat_text: CombatText = Field(default_factory=CombatText)

    @model_validator(mode="after")
    def sync_status_with_health(self) -> "Combatant":
        """Reject health above the maximum and derive status from health."""
        if self.current_health > self.max_health:
            raise ValueError(
                f"current_health ({self.current_health}) exceeds "
                f"max_health ({self.max_health})"
            )
        self.status = Status.ALIVE if self.current_health > 0 else Status.DEAD
        return self

    @property
    def is_alive(self) -> bool:
        return self.status == Status.ALIVE

    @property
    def has_initiative(self) -> bool:
        return self.initiative is not None

    def apply_health_delta(self, delta: int) -> int:
        """Change current health, clamped to [0, max_health].

        Args:
            delta: Requested signed change.

        Returns:
            The change actually applied, which is smaller in magnitude
            than the request when clamping kicks in.
        """
        before = self.current_health
        self.current_health = min(self.max_health, max(0, before + delta))
        self.status = Status.ALIVE if self.current_health > 0 else Status.DEAD
        applied = self.current_health - before

        if before > 0 and self.current_health == 0:
            logger.info("Combatant dropped to zero health", name=self.name)
        elif before == 0 and self.current_health > 0:
            logger.info("Combatant revived", name=self.name, health=self.current_health)

        return applied

    def clone(self, *, initiative: int | None) -> Combatant:
        """Deep copy with a fresh identity and the given initiative."""
        return self.model_copy(
            deep=True,
            update={"id": uuid4(), "initiative": initiative},
        )


# =============================================================================
# Factories
# =============================================================================


def create_player(name: str, description: str | None = None) -> Combatant:
    """Create a player combatant.

    Players start without initiative and with a single hit point; the
    tracker is not their character sheet.
    """
    return Combatant(
        name=name,
        description=description or None,
        faction=Faction.PLAYER,
        initiative=None,
        current_health=PLAYER_DEFAULT_HIT_POINTS,
        max_health=PLAYER_DEFAULT_HIT_POINTS,
    )


def create_creature(result: CreatureSearchResult, source: RandomSource) -> Combatant:
    """Create a creature combatant from a search result.

    Initiative is rolled immediately: 1d20 plus the dexterity modifier.
    A record reporting zero hit points produces a Dead creature.

    Args:
        result: The chosen search record.
        source: Die source for the initiative roll.

    Returns:
        The new combatant.

    Raises:
        DataQualityError: If the record has no hit points.
    """
    if result.hit_points is None:
        raise DataQualityError(
            f"{result.name} has no hit points",
            field_name="hit_points",
            source=result.name,
        )

    initiative = roll_initiative(result.dexterity, source)
    creature = Combatant(
        name=result.name,
        description=result.desc,
        faction=Faction.CREATURE,
        initiative=initiative,
        current_health=result.hit_points,
        max_health=result.hit_points,
        armor_class=result.armor_class,
        abilities=AbilityScores(
            strength=result.strength,
            dexterity=result.dexterity,
            constitution=result.constitution,
            intelligence=result.intelligence,
            wisdom=result.wisdom,
            charisma=result.charisma,
            strength_save=result.strength_save,
            dexterity_save=result.dexterity_save,
            constitution_save=result.constitution_save,
            intelligence_save=result.intelligence_save,
            wisdom_save=result.wisdom_save,
            charisma_save=result.charisma_save,
        ),
        combat_text=CombatText(
            size=result.size,
            creature_type=result.type,
            alignment=result.alignment,
            armor_desc=result.armor_desc,
            hit_dice=result.hit_dice,
            speed=result.speed,
            perception=result.perception,
            skills=result.skills,
            senses=result.senses,
            languages=result.languages,
            damage_vulnerabilities=result.damage_vulnerabilities,
            damage_resistances=result.damage_resistances,
            damage_immunities=result.damage_immunities,
            condition_immunities=result.condition_immunities,
            challenge_rating=result.challenge_rating,
            actions=result.actions or [],
            legendary_actions=result.legendary_actions or [],
            reactions=result.reactions or [],
            special_abilities=result.special_abilities or [],
        ),
    )
    logger.info(
        "Creature created",
        name=creature.name,
        initiative=initiative,
        hit_points=creature.max_health,
    )
    return creature


__all__ = [
    "Status",
    "Faction",
    "AbilityScores",
    "CombatText",
    "Combatant",
    "create_player",
    "create_creature",
]
