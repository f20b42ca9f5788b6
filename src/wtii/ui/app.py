"""Textual terminal UI for the encounter tracker."""

from __future__ import annotations

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Footer, Header, Input, OptionList, Static

from wtii.core.config import get_settings
from wtii.core.logging import configure_logging, get_logger, shutdown_logging
from wtii.engine.dice import DiceRoller
from wtii.engine.roster import Roster
from wtii.models.search import CreatureSearchResult
from wtii.search.client import MonsterSearchClient
from wtii.search.dispatcher import SearchDispatcher
from wtii.storage.seed_store import SeedStore
from wtii.ui.controller import EncounterController, PromptRequest
from wtii.ui.render import detail_text, help_text, roster_text, status_text


logger = get_logger(__name__)


def describe_result(result: CreatureSearchResult) -> str:
    """One option line for the search results list."""
    parts = [result.name]
    if result.challenge_rating:
        parts.append(f"CR {result.challenge_rating}")
    parts.append(f"HP {result.hit_points if result.hit_points is not None else '?'}")
    if result.document_title:
        parts.append(result.document_title)
    return " | ".join(parts)


class SearchResultsScreen(ModalScreen[int | None]):
    """Modal list of search results; dismisses with the chosen index."""

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, results: list[CreatureSearchResult]) -> None:
        super().__init__()
        self._results = results

    def compose(self) -> ComposeResult:
        with Vertical(id="search-dialog"):
            yield Static("Choose a creature (Enter to add, Esc to cancel)")
            yield OptionList(
                *[Text(describe_result(r)) for r in self._results],
                id="search-options",
            )

    def on_mount(self) -> None:
        self.query_one("#search-options", OptionList).focus()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.dismiss(event.option_index)

    def action_cancel(self) -> None:
        self.dismiss(None)


class WtiiApp(App[None]):
    """Main TUI application: roster, stat block, prompt and status line."""

    CSS = """
    #roster {
        height: 1fr;
        border: solid $accent;
        padding: 0 1;
    }

    #details {
        height: 1fr;
        border: solid $secondary;
        padding: 0 1;
        overflow-y: auto;
    }

    #status {
        height: 1;
        padding: 0 1;
    }

    #help {
        height: auto;
        padding: 0 1;
        color: $text-muted;
    }

    #prompt {
        dock: bottom;
    }

    SearchResultsScreen {
        align: center middle;
    }

    #search-dialog {
        width: 80%;
        height: 60%;
        border: thick $accent;
        background: $surface;
        padding: 1;
    }
    """

    ARROW_COMMANDS = {
        "down": "move_down",
        "up": "move_up",
        "left": "lower_health",
        "right": "increase_health",
        "escape": "quit_app",
    }

    def __init__(
        self,
        controller: EncounterController,
        *,
        poll_interval: float = 0.1,
        title: str = "Whose Turn Is It?",
    ) -> None:
        super().__init__()
        self.controller = controller
        self._poll_interval = poll_interval
        self._title = title
        self._prompt: PromptRequest | None = None
        self._choosing = False

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(id="roster")
        yield Static(id="details")
        yield Static(id="status")
        yield Static(Text(help_text(self.controller.bindings)), id="help")
        yield Input(id="prompt")
        yield Footer()

    def on_mount(self) -> None:
        self.title = self._title
        self.query_one("#prompt", Input).display = False
        self.set_interval(self._poll_interval, self._poll_search)
        self.refresh_view()

    def refresh_view(self) -> None:
        """Re-render every panel from the controller's state."""
        roster = self.controller.roster
        self.query_one("#roster", Static).update(roster_text(roster))
        self.query_one("#details", Static).update(detail_text(roster))
        self.query_one("#status", Static).update(
            status_text(self.controller.status_message, self.controller.searching)
        )

    # -------------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------------

    def on_key(self, event: events.Key) -> None:
        if self._choosing:
            return
        if self._prompt is not None:
            if event.key == "escape":
                event.stop()
                self._close_prompt()
                self.controller.cancel_prompt()
            return

        command = self.ARROW_COMMANDS.get(event.key)
        if command is not None:
            request = self.controller.run_command(command)
        elif event.character:
            request = self.controller.handle_key(event.character)
        else:
            return
        event.stop()

        if self.controller.should_exit:
            self.exit()
            return
        if request is not None:
            self._open_prompt(request)
        self.refresh_view()

    def _open_prompt(self, request: PromptRequest) -> None:
        self._prompt = request
        prompt = self.query_one("#prompt", Input)
        prompt.placeholder = request.label
        prompt.value = request.initial
        prompt.display = True
        prompt.focus()

    def _close_prompt(self) -> None:
        self._prompt = None
        prompt = self.query_one("#prompt", Input)
        prompt.value = ""
        prompt.display = False
        self.set_focus(None)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        request = self._prompt
        self._close_prompt()
        if request is not None:
            self.controller.submit_prompt(request.kind, event.value)
        self.refresh_view()

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def _poll_search(self) -> None:
        if not self.controller.poll_search():
            if self.controller.searching:
                self.refresh_view()
            return
        self.refresh_view()
        if self.controller.search_results and not self._choosing:
            self._choosing = True
            self.push_screen(
                SearchResultsScreen(self.controller.search_results),
                self._on_search_choice,
            )

    def _on_search_choice(self, index: int | None) -> None:
        self._choosing = False
        if index is None:
            self.controller.dismiss_search_results()
        else:
            self.controller.choose_search_result(index)
        self.refresh_view()


def main() -> None:
    """Entry point for the ``wtii`` console script."""
    settings = get_settings()
    configure_logging(
        level=settings.effective_log_level,
        json_format=settings.json_logs,
        log_file=settings.log_file,
    )
    logger.info(
        "Starting",
        app=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
    )

    dice = DiceRoller()
    roster = Roster.from_seed(SeedStore(settings.storage.seed_roster_path), random_source=dice)
    dispatcher = SearchDispatcher(MonsterSearchClient.from_settings(settings).search)
    controller = EncounterController(
        roster,
        dispatcher,
        bindings=settings.keys,
        random_source=dice,
        health_step=settings.ui.health_step,
    )
    try:
        WtiiApp(
            controller,
            poll_interval=settings.ui.poll_interval_seconds,
            title=settings.app_name,
        ).run()
    finally:
        controller.shutdown()
        logger.info("Stopped")
        shutdown_logging()


__all__ = [
    "SearchResultsScreen",
    "WtiiApp",
    "describe_result",
    "main",
]
