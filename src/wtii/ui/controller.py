"""Key handling for the encounter tracker.

The controller turns key presses into roster operations. It knows nothing
about Textual: commands that need text from the user return a
PromptRequest, and the view calls submit_prompt() once the text is in.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from wtii.core.config import KeyBindingSettings
from wtii.core.exceptions import DataQualityError
from wtii.core.logging import get_logger
from wtii.engine.dice import DiceRoller, RandomSource
from wtii.engine.roster import Direction, Roster
from wtii.models.combatant import Combatant, create_creature, create_player
from wtii.models.search import CreatureSearchResult
from wtii.search.dispatcher import SearchDispatcher


logger = get_logger(__name__)


class PromptKind(StrEnum):
    """Text the controller can ask the user for."""

    INITIATIVE = "initiative"
    PLAYER_NAME = "player_name"
    DESCRIPTION = "description"
    SEARCH = "search"


@dataclass(frozen=True)
class PromptRequest:
    """A request for one line of text."""

    kind: PromptKind
    label: str
    initial: str = ""


class EncounterController:
    """Route key presses to roster operations.

    Attributes:
        roster: The encounter being tracked.
        should_exit: Set once the user asks to quit.
        status_message: One-line feedback for the status bar.
        search_results: Records of the latest search, awaiting a choice.
    """

    def __init__(
        self,
        roster: Roster,
        dispatcher: SearchDispatcher,
        *,
        bindings: KeyBindingSettings | None = None,
        random_source: RandomSource | None = None,
        health_step: int = 1,
    ) -> None:
        self.roster = roster
        self.should_exit = False
        self.status_message = ""
        self.search_results: list[CreatureSearchResult] = []
        self._dispatcher = dispatcher
        self._bindings = bindings or KeyBindingSettings()
        self._random_source: RandomSource = random_source or DiceRoller()
        self._health_step = health_step
        self._prompt_target: Combatant | None = None

    @property
    def bindings(self) -> KeyBindingSettings:
        return self._bindings

    @property
    def searching(self) -> bool:
        return self._dispatcher.pending

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def handle_key(self, key: str) -> PromptRequest | None:
        """Run the command bound to ``key``.

        Returns:
            A prompt to show, if the command needs text.
        """
        command = self._bindings.command_for(key)
        if command is None:
            return None
        return self.run_command(command)

    def run_command(self, command: str) -> PromptRequest | None:
        """Run a command by its binding name (e.g. ``"move_down"``)."""
        handler = getattr(self, f"_cmd_{command}", None)
        if handler is None:
            logger.warning("Unknown command", command=command)
            return None
        self.status_message = ""
        return handler()

    def _cmd_quit_app(self) -> None:
        self.should_exit = True

    def _cmd_new_encounter(self) -> None:
        self.roster.reset()
        self.search_results = []
        self.status_message = "New encounter"

    def _cmd_unselect_all(self) -> None:
        self.roster.select_none()

    def _cmd_move_down(self) -> None:
        self.roster.advance_focus(Direction.FORWARD)

    def _cmd_move_up(self) -> None:
        self.roster.advance_focus(Direction.BACKWARD)

    def _cmd_peek_down(self) -> None:
        self.roster.peek(Direction.FORWARD)

    def _cmd_peek_up(self) -> None:
        self.roster.peek(Direction.BACKWARD)

    def _cmd_lower_health(self) -> None:
        self.roster.apply_health_change(self.roster.cursor, -self._health_step)

    def _cmd_increase_health(self) -> None:
        self.roster.apply_health_change(self.roster.cursor, self._health_step)

    def _cmd_delete_creature(self) -> None:
        removed = self.roster.remove(self.roster.cursor)
        if removed is not None:
            self.status_message = f"Removed {removed.name}"

    def _cmd_duplicate_creature(self) -> None:
        clone = self.roster.duplicate(self.roster.cursor)
        if clone is not None:
            self.status_message = f"Duplicated {clone.name} (initiative {clone.initiative})"

    def _cmd_set_initiative(self) -> PromptRequest | None:
        target = self._require_selection()
        if target is None:
            return None
        current = "" if target.initiative is None else str(target.initiative)
        return PromptRequest(PromptKind.INITIATIVE, f"Initiative for {target.name}", current)

    def _cmd_set_creature_description(self) -> PromptRequest | None:
        target = self._require_selection()
        if target is None:
            return None
        return PromptRequest(
            PromptKind.DESCRIPTION,
            f"Description for {target.name}",
            target.description or "",
        )

    def _cmd_insert_new_player(self) -> PromptRequest:
        return PromptRequest(PromptKind.PLAYER_NAME, "Player name")

    def _cmd_search_for_new_creature(self) -> PromptRequest:
        return PromptRequest(PromptKind.SEARCH, "Search creatures")

    def _require_selection(self) -> Combatant | None:
        target = self.roster.selected
        if target is None:
            self.status_message = "Nothing selected"
        self._prompt_target = target
        return target

    # -------------------------------------------------------------------------
    # Prompts
    # -------------------------------------------------------------------------

    def submit_prompt(self, kind: PromptKind, text: str) -> None:
        """Complete a command that asked for text."""
        text = text.strip()
        target, self._prompt_target = self._prompt_target, None

        if kind == PromptKind.PLAYER_NAME:
            if not text:
                self.status_message = "Player name cannot be empty"
                return
            self.roster.insert(create_player(text))
            self.status_message = f"Added {text}"
        elif kind == PromptKind.SEARCH:
            if not text:
                return
            self._dispatcher.submit(text)
            self.status_message = f"Searching for {text!r}..."
        elif kind == PromptKind.INITIATIVE:
            index = None if target is None else self.roster.index_of(target)
            try:
                value = int(text)
            except ValueError:
                self.status_message = f"Initiative must be a whole number, got {text!r}"
                return
            if self.roster.set_initiative(index, value) is not None:
                self.status_message = f"{target.name} acts on {value}"
        elif kind == PromptKind.DESCRIPTION:
            index = None if target is None else self.roster.index_of(target)
            self.roster.set_description(index, text)

    def cancel_prompt(self) -> None:
        self._prompt_target = None

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def poll_search(self) -> bool:
        """Pick up the latest search outcome without blocking.

        Returns:
            True if there was something new to show.
        """
        outcome = self._dispatcher.poll()
        if outcome is None:
            return False
        if outcome.error is not None:
            self.search_results = []
            self.status_message = f"Search failed: {outcome.error.message}"
        elif not outcome.results:
            self.search_results = []
            self.status_message = f"No creatures found for {outcome.query!r}"
        else:
            self.search_results = outcome.results
            self.status_message = f"{len(outcome.results)} result(s) for {outcome.query!r}"
        return True

    def choose_search_result(self, index: int) -> Combatant | None:
        """Add the chosen search record to the roster as a creature."""
        if not 0 <= index < len(self.search_results):
            return None
        result = self.search_results[index]
        self.search_results = []
        try:
            creature = create_creature(result, self._random_source)
        except DataQualityError as exc:
            logger.warning("Creature rejected", name=result.name, error=str(exc))
            self.status_message = f"Cannot add {result.name}: {exc.message}"
            return None
        self.roster.insert(creature)
        self.status_message = f"Added {creature.name} (initiative {creature.initiative})"
        return creature

    def dismiss_search_results(self) -> None:
        self.search_results = []

    def shutdown(self) -> None:
        self._dispatcher.shutdown()


__all__ = [
    "PromptKind",
    "PromptRequest",
    "EncounterController",
]
