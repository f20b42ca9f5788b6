"""Tests for key handling."""

from __future__ import annotations

import pytest

from wtii.core.config import KeyBindingSettings
from wtii.core.exceptions import SearchRequestError
from wtii.engine.roster import Roster
from wtii.search.dispatcher import SearchOutcome
from wtii.ui.controller import EncounterController, PromptKind, PromptRequest


class FakeDispatcher:
    """Records submitted queries and hands back queued outcomes."""

    def __init__(self) -> None:
        self.submitted: list[str] = []
        self.outcomes: list[SearchOutcome] = []
        self.closed = False

    @property
    def pending(self) -> bool:
        return len(self.submitted) > 0 and not self.outcomes

    def submit(self, query: str) -> int:
        self.submitted.append(query)
        return len(self.submitted)

    def poll(self) -> SearchOutcome | None:
        return self.outcomes.pop(0) if self.outcomes else None

    def shutdown(self) -> None:
        self.closed = True


@pytest.fixture
def dispatcher() -> FakeDispatcher:
    return FakeDispatcher()


@pytest.fixture
def controller(five_roster: Roster, dispatcher: FakeDispatcher, make_die) -> EncounterController:
    return EncounterController(
        five_roster,
        dispatcher,
        bindings=KeyBindingSettings(),
        random_source=make_die(10),
    )


class TestCommands:
    """Tests for single-key commands."""

    def test_quit(self, controller: EncounterController) -> None:
        """Test q asks the app to exit."""
        controller.handle_key("q")

        assert controller.should_exit

    def test_unbound_key_ignored(self, controller: EncounterController) -> None:
        """Test unknown keys do nothing."""
        assert controller.handle_key("z") is None
        assert controller.roster.cursor is None

    def test_unknown_command_ignored(self, controller: EncounterController) -> None:
        """Test unknown command names do nothing."""
        assert controller.run_command("teleport") is None

    def test_move_and_peek(self, controller: EncounterController) -> None:
        """Test movement keys drive the cursor."""
        controller.handle_key("j")
        controller.handle_key("j")
        controller.handle_key("J")
        controller.handle_key("J")

        assert controller.roster.cursor == 3

        controller.handle_key("k")

        assert controller.roster.cursor == 0

    def test_unselect(self, controller: EncounterController) -> None:
        """Test u drops focus."""
        controller.handle_key("j")
        controller.handle_key("u")

        assert controller.roster.selected is None

    def test_health_keys(self, controller: EncounterController) -> None:
        """Test h and l change the focused combatant's health."""
        controller.handle_key("j")
        controller.handle_key("h")
        controller.handle_key("h")
        controller.handle_key("l")

        assert controller.roster.selected.current_health == 9
        assert controller.roster.health_delta == -1

    def test_health_step(self, five_roster: Roster, dispatcher: FakeDispatcher) -> None:
        """Test the configured step size is used."""
        controller = EncounterController(five_roster, dispatcher, health_step=5)
        controller.handle_key("j")

        controller.handle_key("h")

        assert controller.roster.selected.current_health == 5

    def test_health_without_selection(self, controller: EncounterController) -> None:
        """Test health keys with nothing selected are no-ops."""
        controller.handle_key("h")

        assert all(c.current_health == 10 for c in controller.roster)

    def test_delete(self, controller: EncounterController) -> None:
        """Test D removes the focused combatant."""
        controller.handle_key("j")

        controller.handle_key("D")

        assert len(controller.roster) == 4
        assert controller.roster.cursor is None
        assert controller.status_message == "Removed C0"

    def test_duplicate(self, controller: EncounterController) -> None:
        """Test x clones the focused combatant and focuses the clone."""
        controller.handle_key("j")

        controller.handle_key("x")

        assert len(controller.roster) == 6
        assert controller.roster.selected.name == "C0"
        assert controller.roster.selected.initiative == 10
        assert controller.status_message == "Duplicated C0 (initiative 10)"

    def test_new_encounter(self, controller: EncounterController) -> None:
        """Test e resets the roster."""
        controller.handle_key("e")

        assert len(controller.roster) == 0
        assert controller.status_message == "New encounter"

    def test_custom_bindings(self, five_roster: Roster, dispatcher: FakeDispatcher) -> None:
        """Test rebound keys are honored."""
        bindings = KeyBindingSettings(move_down="n", new_encounter="j")
        controller = EncounterController(five_roster, dispatcher, bindings=bindings)

        controller.handle_key("n")

        assert controller.roster.cursor == 0


class TestPrompts:
    """Tests for commands that ask for text."""

    def test_initiative_needs_selection(self, controller: EncounterController) -> None:
        """Test i with nothing selected reports it."""
        assert controller.handle_key("i") is None
        assert controller.status_message == "Nothing selected"

    def test_initiative_prompt(self, controller: EncounterController) -> None:
        """Test the prompt is prefilled with the current value."""
        controller.handle_key("j")

        request = controller.handle_key("i")

        assert request == PromptRequest(PromptKind.INITIATIVE, "Initiative for C0", "20")

    def test_initiative_submitted(self, controller: EncounterController) -> None:
        """Test a new value re-sorts the roster."""
        controller.handle_key("j")
        controller.handle_key("i")

        controller.submit_prompt(PromptKind.INITIATIVE, " 7 ")

        assert [c.name for c in controller.roster] == ["C1", "C2", "C3", "C0", "C4"]
        assert controller.roster.selected.name == "C0"
        assert controller.status_message == "C0 acts on 7"

    def test_initiative_not_a_number(self, controller: EncounterController) -> None:
        """Test garbage input leaves the roster alone."""
        controller.handle_key("j")
        controller.handle_key("i")

        controller.submit_prompt(PromptKind.INITIATIVE, "fast")

        assert controller.roster.combatants[0].initiative == 20
        assert controller.status_message == "Initiative must be a whole number, got 'fast'"

    def test_initiative_target_removed(self, controller: EncounterController) -> None:
        """Test submitting for a combatant deleted meanwhile is a no-op."""
        controller.handle_key("j")
        controller.handle_key("i")
        controller.roster.remove(0)

        controller.submit_prompt(PromptKind.INITIATIVE, "3")

        assert [c.initiative for c in controller.roster] == [16, 12, 8, 4]

    def test_add_player(self, controller: EncounterController) -> None:
        """Test c adds an un-rolled player at the front."""
        request = controller.handle_key("c")
        assert request.kind == PromptKind.PLAYER_NAME

        controller.submit_prompt(request.kind, "Lia")

        assert controller.roster.combatants[0].name == "Lia"
        assert controller.roster.combatants[0].initiative is None
        assert controller.status_message == "Added Lia"

    def test_add_player_blank(self, controller: EncounterController) -> None:
        """Test an empty name is refused."""
        controller.submit_prompt(PromptKind.PLAYER_NAME, "  ")

        assert len(controller.roster) == 5
        assert controller.status_message == "Player name cannot be empty"

    def test_description(self, controller: EncounterController) -> None:
        """Test d edits the focused combatant's description."""
        controller.handle_key("j")
        request = controller.handle_key("d")

        controller.submit_prompt(request.kind, "Missing an ear")

        assert controller.roster.selected.description == "Missing an ear"

    def test_cancel_forgets_target(self, controller: EncounterController) -> None:
        """Test a cancelled prompt does not leak into the next one."""
        controller.handle_key("j")
        controller.handle_key("i")
        controller.cancel_prompt()

        controller.submit_prompt(PromptKind.INITIATIVE, "1")

        assert controller.roster.combatants[0].initiative == 20


class TestSearch:
    """Tests for creature search."""

    def test_search_submitted(
        self,
        controller: EncounterController,
        dispatcher: FakeDispatcher,
    ) -> None:
        """Test s submits the query in the background."""
        request = controller.handle_key("s")

        controller.submit_prompt(request.kind, "goblin")

        assert dispatcher.submitted == ["goblin"]
        assert controller.searching
        assert controller.status_message == "Searching for 'goblin'..."

    def test_blank_search_ignored(
        self,
        controller: EncounterController,
        dispatcher: FakeDispatcher,
    ) -> None:
        """Test an empty query is not sent."""
        controller.submit_prompt(PromptKind.SEARCH, "")

        assert dispatcher.submitted == []

    def test_nothing_to_poll(self, controller: EncounterController) -> None:
        """Test polling with no outcome."""
        assert not controller.poll_search()

    def test_results_then_choose(
        self,
        controller: EncounterController,
        dispatcher: FakeDispatcher,
        goblin_result,
    ) -> None:
        """Test choosing a result adds the creature."""
        dispatcher.outcomes.append(SearchOutcome(1, "goblin", results=[goblin_result]))

        assert controller.poll_search()
        assert controller.status_message == "1 result(s) for 'goblin'"

        creature = controller.choose_search_result(0)

        assert creature.initiative == 12
        assert creature in controller.roster.combatants
        assert controller.search_results == []
        assert controller.status_message == "Added Goblin (initiative 12)"

    def test_no_results(self, controller: EncounterController, dispatcher: FakeDispatcher) -> None:
        """Test an empty result set is reported."""
        dispatcher.outcomes.append(SearchOutcome(1, "zzz"))

        controller.poll_search()

        assert controller.search_results == []
        assert controller.status_message == "No creatures found for 'zzz'"

    def test_failure_reported(
        self,
        controller: EncounterController,
        dispatcher: FakeDispatcher,
    ) -> None:
        """Test a failed search shows its message."""
        error = SearchRequestError("Monster search failed with HTTP 500", query="orc")
        dispatcher.outcomes.append(SearchOutcome(1, "orc", error=error))

        controller.poll_search()

        assert controller.status_message == "Search failed: Monster search failed with HTTP 500"

    def test_result_without_hit_points(
        self,
        controller: EncounterController,
        dispatcher: FakeDispatcher,
        search_result_factory,
    ) -> None:
        """Test an unusable record is refused with a message."""
        phantom = search_result_factory("Phantom", hit_points=None)
        dispatcher.outcomes.append(SearchOutcome(1, "phantom", results=[phantom]))
        controller.poll_search()

        assert controller.choose_search_result(0) is None
        assert len(controller.roster) == 5
        assert controller.status_message == "Cannot add Phantom: Phantom has no hit points"

    def test_choose_out_of_range(self, controller: EncounterController) -> None:
        """Test choosing without results is a no-op."""
        assert controller.choose_search_result(0) is None

    def test_dismiss_and_shutdown(
        self,
        controller: EncounterController,
        dispatcher: FakeDispatcher,
        goblin_result,
    ) -> None:
        """Test dismissing results and shutting down."""
        controller.search_results = [goblin_result]

        controller.dismiss_search_results()
        controller.shutdown()

        assert controller.search_results == []
        assert dispatcher.closed
