"""Tests for the combatant model and its factories."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from wtii.core.exceptions import DataQualityError
from wtii.models.combatant import (
    AbilityScores,
    Combatant,
    Faction,
    Status,
    create_creature,
    create_player,
)


class TestCombatant:
    """Tests for the Combatant entity."""

    def test_status_derived_from_health(self) -> None:
        """Test status is computed, not trusted."""
        alive = Combatant(name="A", current_health=3, max_health=5, status=Status.DEAD)
        dead = Combatant(name="B", current_health=0, max_health=5)

        assert alive.status == Status.ALIVE
        assert dead.status == Status.DEAD
        assert not dead.is_alive

    def test_health_above_max_rejected(self) -> None:
        """Test current health may not exceed the maximum."""
        with pytest.raises(ValidationError):
            Combatant(name="A", current_health=6, max_health=5)

    def test_negative_health_rejected(self) -> None:
        """Test health has a floor of zero."""
        with pytest.raises(ValidationError):
            Combatant(name="A", current_health=-1, max_health=5)

    def test_empty_name_rejected(self) -> None:
        """Test a name is required."""
        with pytest.raises(ValidationError):
            Combatant(name="", current_health=1, max_health=1)

    def test_unique_ids(self) -> None:
        """Test each combatant gets its own identity."""
        first = Combatant(name="Rat", current_health=1, max_health=1)
        second = Combatant(name="Rat", current_health=1, max_health=1)

        assert first.id != second.id


class TestApplyHealthDelta:
    """Tests for clamped health changes."""

    def test_damage(self) -> None:
        """Test ordinary damage."""
        combatant = Combatant(name="A", current_health=10, max_health=10)

        assert combatant.apply_health_delta(-4) == -4
        assert combatant.current_health == 6

    def test_clamp_at_zero_kills(self) -> None:
        """Test overkill is clamped and reported."""
        combatant = Combatant(name="A", current_health=5, max_health=20)

        applied = combatant.apply_health_delta(-100)

        assert applied == -5
        assert combatant.current_health == 0
        assert combatant.status == Status.DEAD

    def test_clamp_at_max(self) -> None:
        """Test healing stops at the maximum."""
        combatant = Combatant(name="A", current_health=18, max_health=20)

        assert combatant.apply_health_delta(7) == 2
        assert combatant.current_health == 20

    def test_healing_revives(self) -> None:
        """Test a dead combatant healed above zero is alive again."""
        combatant = Combatant(name="A", current_health=0, max_health=20)

        combatant.apply_health_delta(1)

        assert combatant.status == Status.ALIVE

    def test_zero_delta(self) -> None:
        """Test a zero change changes nothing."""
        combatant = Combatant(name="A", current_health=4, max_health=8)

        assert combatant.apply_health_delta(0) == 0
        assert combatant.current_health == 4


class TestClone:
    """Tests for cloning."""

    def test_clone_fresh_identity(self) -> None:
        """Test a clone has a new id and the given initiative."""
        original = Combatant(
            name="Orc",
            initiative=12,
            current_health=15,
            max_health=15,
            abilities=AbilityScores(dexterity=12),
        )

        clone = original.clone(initiative=7)

        assert clone.id != original.id
        assert clone.initiative == 7
        assert original.initiative == 12
        assert clone.abilities == original.abilities


class TestCreatePlayer:
    """Tests for the player factory."""

    def test_defaults(self) -> None:
        """Test players start with one hit point and no initiative."""
        player = create_player("Samson", "A real bastard.")

        assert player.faction == Faction.PLAYER
        assert player.status == Status.ALIVE
        assert player.current_health == 1
        assert player.max_health == 1
        assert player.initiative is None
        assert player.description == "A real bastard."

    def test_blank_description(self) -> None:
        """Test an empty description is stored as None."""
        assert create_player("Thaurun", "").description is None


class TestCreateCreature:
    """Tests for the creature factory."""

    def test_from_search_result(self, goblin_result, make_die) -> None:
        """Test fields are copied and initiative rolled."""
        goblin = create_creature(goblin_result, make_die(10))

        assert goblin.faction == Faction.CREATURE
        assert goblin.initiative == 12
        assert goblin.current_health == 7
        assert goblin.max_health == 7
        assert goblin.armor_class == 15
        assert goblin.abilities.dexterity == 14
        assert goblin.combat_text.size == "Small"
        assert goblin.combat_text.creature_type == "humanoid"
        assert goblin.combat_text.challenge_rating == "1/4"
        assert goblin.combat_text.skills == {"stealth": 6}
        assert goblin.combat_text.actions[0].name == "Scimitar"
        assert goblin.combat_text.special_abilities[0].name == "Nimble Escape"
        assert goblin.combat_text.reactions == []
        assert goblin.description is None

    def test_fixed_die_and_high_dexterity(self, search_result_factory, make_die) -> None:
        """Test a roll of one with dexterity 20 gives six."""
        creature = create_creature(search_result_factory(dexterity=20), make_die(1))

        assert creature.initiative == 6

    def test_missing_dexterity(self, search_result_factory, make_die) -> None:
        """Test a record without dexterity uses a score of zero."""
        creature = create_creature(search_result_factory(dexterity=None), make_die(10))

        assert creature.initiative == 5

    def test_missing_hit_points_rejected(self, search_result_factory, make_die) -> None:
        """Test records without hit points are refused."""
        with pytest.raises(DataQualityError) as exc_info:
            create_creature(search_result_factory("Phantom", hit_points=None), make_die(10))

        assert exc_info.value.details == {"field_name": "hit_points", "source": "Phantom"}

    def test_zero_hit_points_is_dead(self, search_result_factory, make_die) -> None:
        """Test a zero hit point record yields a dead creature."""
        creature = create_creature(search_result_factory(hit_points=0), make_die(10))

        assert creature.status == Status.DEAD
