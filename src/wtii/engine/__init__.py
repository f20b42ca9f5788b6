"""Game engine: dice mechanics and the encounter roster.

The roster lives in ``wtii.engine.roster`` and is imported from there;
the models package depends on the dice helpers exported here.

Example:
    >>> from wtii.engine import DiceRoller, roll_initiative
    >>> 1 <= roll_initiative(10, DiceRoller()) <= 20
    True
"""

from __future__ import annotations

from wtii.engine.dice import (
    DiceExpression,
    DiceRoller,
    RandomSource,
    ability_modifier,
    roll_initiative,
)


__all__ = [
    "RandomSource",
    "DiceExpression",
    "DiceRoller",
    "ability_modifier",
    "roll_initiative",
]
