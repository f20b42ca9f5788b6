"""Dice rolling and initiative mechanics for D&D 5E.

Rolls go through the d20 library. Anything that needs randomness takes a
RandomSource, so tests can pass a fixed die instead of a DiceRoller.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import d20

from wtii.core.constants import (
    ABILITY_SCORE_BASELINE,
    INITIATIVE_DIE_SIDES,
    MISSING_DEXTERITY,
)
from wtii.core.exceptions import DiceRollError
from wtii.core.logging import get_logger


logger = get_logger(__name__)


@runtime_checkable
class RandomSource(Protocol):
    """Anything that can roll an inclusive integer range."""

    def roll_range(self, low: int, high: int) -> int:
        """Return an integer in ``[low, high]``."""
        ...


@dataclass(frozen=True)
class DiceExpression:
    """A rolled dice expression.

    Attributes:
        expression: The original dice expression string.
        total: The total result of the roll.
        dice: Individual kept dice results.
        modifier: Static modifier applied.
    """

    expression: str
    total: int
    dice: list[int]
    modifier: int


class DiceRoller:
    """Dice rolling backed by the d20 library.

    Example:
        >>> roller = DiceRoller()
        >>> result = roller.roll("1d20+3")
        >>> 4 <= result.total <= 23
        True
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional random seed for reproducible rolls.
        """
        self._seed = seed
        if seed is not None:
            random.seed(seed)
        logger.debug("DiceRoller initialized", seed=seed)

    def roll(self, expression: str) -> DiceExpression:
        """Roll dice according to the given expression.

        Args:
            expression: Dice expression (e.g., '1d20+5', '2d6+3').

        Returns:
            DiceExpression containing roll results.

        Raises:
            DiceRollError: If the expression is invalid.
        """
        if not expression or not expression.strip():
            raise DiceRollError("Empty dice expression", expression=expression)

        try:
            result = d20.roll(expression)
        except d20.RollError as exc:
            raise DiceRollError(
                f"Invalid dice expression: {exc}",
                expression=expression,
            ) from exc

        dice_values = self._extract_dice_values(result.expr)
        rolled = DiceExpression(
            expression=expression,
            total=result.total,
            dice=dice_values,
            modifier=result.total - sum(dice_values),
        )
        logger.debug("Dice rolled", expression=expression, total=result.total)
        return rolled

    def _extract_dice_values(self, expr: Any) -> list[int]:
        values: list[int] = []

        def traverse(node: Any) -> None:
            if isinstance(node, d20.Dice):
                for die in node.values:
                    if die.kept:
                        values.append(die.number)
            elif hasattr(node, "children"):
                for child in node.children:
                    traverse(child)

        traverse(expr)
        return values

    def roll_range(self, low: int, high: int) -> int:
        """Roll a single die covering ``[low, high]`` inclusive.

        Raises:
            DiceRollError: If the range is empty.
        """
        sides = high - low + 1
        if sides < 1:
            raise DiceRollError(
                "Cannot roll an empty range",
                details={"low": low, "high": high},
            )
        return self.roll(f"1d{sides}").total + low - 1


def ability_modifier(score: int) -> int:
    """Calculate the ability modifier for a score.

    Uses floor division, so 8 gives -1 and 9 gives -1.
    """
    return (score - ABILITY_SCORE_BASELINE) // 2


def roll_initiative(dexterity: int | None, source: RandomSource) -> int:
    """Roll initiative: one d20 plus the dexterity modifier.

    Args:
        dexterity: Dexterity score, or None when the record has none.
        source: Die source used for the d20.

    Returns:
        The initiative value.
    """
    score = MISSING_DEXTERITY if dexterity is None else dexterity
    natural = source.roll_range(1, INITIATIVE_DIE_SIDES)
    return natural + ability_modifier(score)


__all__ = [
    "RandomSource",
    "DiceExpression",
    "DiceRoller",
    "ability_modifier",
    "roll_initiative",
]
