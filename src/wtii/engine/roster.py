"""Encounter roster: turn order, focus cursor and roster mutations.

The roster keeps its combatants sorted by turn order at all times.
Combatants without initiative come first, so un-rolled entries surface
for attention; the rest follow in descending initiative. Ties keep their
relative order.

Every index-based operation is a no-op when the index is None or out of
range. "Nothing selected" is the normal resting state of the tracker, not
an error.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from enum import StrEnum
from functools import cmp_to_key
from typing import Protocol

from wtii.core.logging import get_logger
from wtii.engine.dice import DiceRoller, RandomSource, roll_initiative
from wtii.models.combatant import Combatant, create_player
from wtii.models.seed import SeedEntry


logger = get_logger(__name__)


class Direction(StrEnum):
    """Focus movement direction through the turn order."""

    FORWARD = "forward"
    BACKWARD = "backward"


class SeedSource(Protocol):
    """Supplies the players a fresh encounter starts with."""

    def load(self) -> Sequence[SeedEntry]:
        ...


def compare_turn_order(a: Combatant, b: Combatant) -> int:
    """Turn-order comparator.

    Returns:
        Negative if ``a`` acts before ``b``, positive if after, zero if
        they tie (both un-rolled, or equal initiative).
    """
    if a.initiative is None and b.initiative is None:
        return 0
    if a.initiative is None:
        return -1
    if b.initiative is None:
        return 1
    return (b.initiative > a.initiative) - (b.initiative < a.initiative)


_turn_order_key = cmp_to_key(compare_turn_order)


class Roster:
    """Ordered combatants for one encounter plus a focus cursor.

    Besides the live cursor the roster holds a single peek shadow: the
    first peek remembers where focus was, further peeks move freely, and
    the next committing move starts again from the remembered position.
    The cursor and the shadow follow their combatant across re-sorts,
    insertions and removals.

    Example:
        >>> roster = Roster([create_player("Samson")])
        >>> roster.set_initiative(0, 12)
        0
        >>> roster.combatants[0].initiative
        12
    """

    def __init__(
        self,
        combatants: Iterable[Combatant] = (),
        *,
        seed_source: SeedSource | None = None,
        random_source: RandomSource | None = None,
    ) -> None:
        """Initialize the roster.

        Args:
            combatants: Initial combatants, in any order.
            seed_source: Provider of the default players used by reset().
            random_source: Die source for duplicate initiative rolls.
        """
        self._combatants: list[Combatant] = list(combatants)
        self._cursor: int | None = None
        self._peeking = False
        self._peek_origin: Combatant | None = None
        self._health_delta = 0
        self._health_delta_target: Combatant | None = None
        self._seed_source = seed_source
        self._random_source: RandomSource = random_source or DiceRoller()
        self._sort()

    @classmethod
    def from_seed(
        cls,
        seed_source: SeedSource | None,
        *,
        random_source: RandomSource | None = None,
    ) -> Roster:
        """Build a roster seeded with the default players."""
        roster = cls(seed_source=seed_source, random_source=random_source)
        roster.reset()
        return roster

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @property
    def combatants(self) -> tuple[Combatant, ...]:
        """Combatants in turn order."""
        return tuple(self._combatants)

    @property
    def cursor(self) -> int | None:
        """Index of the focused combatant, or None."""
        return self._cursor

    @property
    def selected(self) -> Combatant | None:
        """The focused combatant, or None."""
        if self._cursor is None:
            return None
        return self._combatants[self._cursor]

    @property
    def is_peeking(self) -> bool:
        return self._peeking

    @property
    def health_delta(self) -> int | None:
        """Health change applied to the focused combatant since focus last moved."""
        if self._health_delta_target is None or self._health_delta_target is not self.selected:
            return None
        return self._health_delta

    def __len__(self) -> int:
        return len(self._combatants)

    def __iter__(self) -> Iterator[Combatant]:
        return iter(self._combatants)

    def index_of(self, combatant: Combatant) -> int | None:
        """Position of a combatant by identity, or None if absent."""
        for index, candidate in enumerate(self._combatants):
            if candidate is combatant:
                return index
        return None

    # -------------------------------------------------------------------------
    # Focus
    # -------------------------------------------------------------------------

    def advance_focus(self, direction: Direction) -> int | None:
        """Move focus one step, wrapping around the ends.

        A pending peek is committed first: the move starts from where focus
        was before peeking began.

        Returns:
            The new cursor.
        """
        if self._peeking:
            origin = self._peek_origin
            self._cursor = None if origin is None else self.index_of(origin)
            self._clear_peek()
        self._step(direction)
        self._clear_health_delta()
        return self._cursor

    def peek(self, direction: Direction) -> int | None:
        """Move focus without losing the pre-peek position.

        Returns:
            The new (peeked) cursor.
        """
        if not self._peeking:
            self._peeking = True
            self._peek_origin = self.selected
        self._step(direction)
        self._clear_health_delta()
        return self._cursor

    def select(self, index: int | None) -> int | None:
        """Focus a specific row."""
        if not self._is_valid(index):
            return self._cursor
        self._cursor = index
        self._clear_peek()
        self._clear_health_delta()
        return self._cursor

    def select_none(self) -> None:
        """Drop focus entirely."""
        self._cursor = None
        self._clear_peek()
        self._clear_health_delta()

    def _step(self, direction: Direction) -> None:
        count = len(self._combatants)
        if count == 0:
            self._cursor = None
            return
        if self._cursor is None:
            self._cursor = 0 if direction == Direction.FORWARD else count - 1
            return
        step = 1 if direction == Direction.FORWARD else -1
        self._cursor = (self._cursor + step) % count

    def _clear_peek(self) -> None:
        self._peeking = False
        self._peek_origin = None

    def _clear_health_delta(self) -> None:
        self._health_delta = 0
        self._health_delta_target = None

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def insert(self, combatant: Combatant) -> int | None:
        """Add a combatant and restore turn order.

        Un-rolled combatants go to the very front, ahead of any other
        un-rolled ones.

        Returns:
            The combatant's index after sorting.
        """
        focused = self.selected
        if combatant.initiative is None:
            self._combatants.insert(0, combatant)
        else:
            self._combatants.append(combatant)
        self._resort(focused)
        index = self.index_of(combatant)
        logger.info(
            "Combatant inserted",
            name=combatant.name,
            faction=combatant.faction,
            initiative=combatant.initiative,
            index=index,
        )
        return index

    def set_initiative(self, index: int | None, value: int) -> int | None:
        """Assign initiative and restore turn order.

        Indices held by the caller are stale afterwards.

        Returns:
            The combatant's new index, or None if the index was invalid.
        """
        if not self._is_valid(index):
            return None
        combatant = self._combatants[index]
        combatant.initiative = value
        self._resort(self.selected)
        new_index = self.index_of(combatant)
        logger.info(
            "Initiative set",
            name=combatant.name,
            initiative=value,
            old_index=index,
            new_index=new_index,
        )
        return new_index

    def duplicate(self, index: int | None) -> Combatant | None:
        """Clone a combatant with a freshly rolled initiative.

        The clone is inserted right after the original, the roster is
        re-sorted and focus moves to the clone.

        Returns:
            The clone, or None if the index was invalid.
        """
        if not self._is_valid(index):
            return None
        original = self._combatants[index]
        initiative = roll_initiative(original.abilities.dexterity, self._random_source)
        clone = original.clone(initiative=initiative)
        self._combatants.insert(index + 1, clone)
        self._sort()
        self._cursor = self.index_of(clone)
        self._clear_peek()
        self._clear_health_delta()
        logger.info(
            "Combatant duplicated",
            name=clone.name,
            initiative=initiative,
            index=self._cursor,
        )
        return clone

    def remove(self, index: int | None) -> Combatant | None:
        """Delete a combatant.

        Removing the focused combatant leaves nothing selected.

        Returns:
            The removed combatant, or None if the index was invalid.
        """
        if not self._is_valid(index):
            return None
        focused = self.selected
        removed = self._combatants.pop(index)
        if removed is focused:
            self._cursor = None
            self._clear_health_delta()
        else:
            self._cursor = None if focused is None else self.index_of(focused)
        if self._peek_origin is removed:
            self._peek_origin = None
        logger.info("Combatant removed", name=removed.name, index=index)
        return removed

    def apply_health_change(self, index: int | None, delta: int) -> int | None:
        """Change a combatant's health, clamped to its bounds.

        The applied change accumulates for display until focus moves.

        Returns:
            The change actually applied, or None if the index was invalid.
        """
        if not self._is_valid(index):
            return None
        combatant = self._combatants[index]
        applied = combatant.apply_health_delta(delta)
        if self._health_delta_target is not combatant:
            self._health_delta_target = combatant
            self._health_delta = 0
        self._health_delta += applied
        logger.debug(
            "Health changed",
            name=combatant.name,
            requested=delta,
            applied=applied,
            health=combatant.current_health,
            status=combatant.status,
        )
        return applied

    def set_description(self, index: int | None, text: str) -> bool:
        """Replace a combatant's description; blank text clears it."""
        if not self._is_valid(index):
            return False
        self._combatants[index].description = text.strip() or None
        return True

    def reset(self) -> None:
        """Start a new encounter from the default players."""
        entries: Sequence[SeedEntry] = self._seed_source.load() if self._seed_source else []
        self._combatants = [create_player(e.name, e.description) for e in entries]
        self._cursor = None
        self._clear_peek()
        self._clear_health_delta()
        logger.info("Roster reset", players=len(self._combatants))

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _is_valid(self, index: int | None) -> bool:
        return index is not None and 0 <= index < len(self._combatants)

    def _sort(self) -> None:
        self._combatants.sort(key=_turn_order_key)

    def _resort(self, focused: Combatant | None) -> None:
        """Sort, keeping the cursor on ``focused`` (captured before mutating)."""
        self._sort()
        if focused is not None:
            self._cursor = self.index_of(focused)


__all__ = [
    "Direction",
    "SeedSource",
    "Roster",
    "compare_turn_order",
]
