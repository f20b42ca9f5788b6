"""Rich text rendering of the roster for the terminal UI.

Pure functions: they read the roster and return rich Text, so they can be
tested without a running terminal.
"""

from __future__ import annotations

from rich.text import Text

from wtii.core.config import KeyBindingSettings
from wtii.engine.roster import Roster
from wtii.models.combatant import Combatant
from wtii.models.search import NamedEntry


ALIVE_STYLE = "green"
NO_INITIATIVE_STYLE = "yellow"
DEAD_STYLE = "red"
SELECTED_STYLE = "bold reverse"
LABEL_STYLE = "bold"
DIM_STYLE = "dim"

NOTHING_SELECTED = "Nothing selected..."


def combatant_style(combatant: Combatant) -> str:
    """Green when ready, yellow while waiting for initiative, red when dead."""
    if not combatant.is_alive:
        return DEAD_STYLE
    if combatant.has_initiative:
        return ALIVE_STYLE
    return NO_INITIATIVE_STYLE


def combatant_line(combatant: Combatant) -> Text:
    """One roster row, e.g. `` ✓ Goblin`` or `` X Goblin``."""
    symbol = "✓" if combatant.is_alive else "X"
    return Text(f" {symbol} {combatant.name}", style=combatant_style(combatant))


def format_delta(delta: int | None) -> str:
    """Health annotation such as ``(-3)``; empty when there is nothing to show."""
    if not delta:
        return ""
    return f"({delta:+d})"


def roster_text(roster: Roster) -> Text:
    """The turn order, one combatant per line, cursor marked with ``>``."""
    if len(roster) == 0:
        return Text("No combatants in this encounter.", style=DIM_STYLE)

    text = Text()
    for index, combatant in enumerate(roster.combatants):
        selected = index == roster.cursor
        initiative = "  -" if combatant.initiative is None else f"{combatant.initiative:>3}"
        row = Text(">" if selected else " ")
        row.append(f"{initiative} ", style=DIM_STYLE)
        row.append_text(combatant_line(combatant))
        if selected:
            row.stylize(SELECTED_STYLE)
        if index:
            text.append("\n")
        text.append_text(row)
    return text


def _entries(title: str, entries: list[NamedEntry]) -> Text:
    block = Text(f"\n {title}\n", style=LABEL_STYLE)
    for entry in entries:
        block.append(f"  {entry.name}. ", style=LABEL_STYLE)
        block.append(f"{entry.desc}\n")
    return block


def detail_text(roster: Roster) -> Text:
    """Stat block of the focused combatant."""
    combatant = roster.selected
    if combatant is None:
        return Text(NOTHING_SELECTED, style=DIM_STYLE)

    stats = combatant.combat_text
    initiative = "-" if combatant.initiative is None else str(combatant.initiative)
    health = f"{combatant.current_health}/{combatant.max_health}"
    delta = format_delta(roster.health_delta)
    if delta:
        health = f"{health} {delta}"

    fields: list[tuple[str, str | None]] = [
        ("Initiative", initiative),
        ("Name", combatant.name),
        ("HP", health),
        ("AC", None if combatant.armor_class is None else str(combatant.armor_class)),
        ("Size", stats.size),
        ("Type", stats.creature_type),
        ("Speed", stats.speed.describe() if stats.speed else None),
        ("Challenge", stats.challenge_rating),
        ("Senses", stats.senses),
        ("Languages", stats.languages),
        ("Resistances", stats.damage_resistances),
        ("Immunities", stats.damage_immunities),
        ("Description", combatant.description or ""),
    ]

    text = Text()
    for label, value in fields:
        if value is None:
            continue
        text.append(f" {label}: ", style=LABEL_STYLE)
        text.append(f"{value}\n")

    if stats.special_abilities:
        text.append_text(_entries("Special Abilities", list(stats.special_abilities)))
    if stats.actions:
        text.append_text(_entries("Actions", list(stats.actions)))
    if stats.reactions:
        text.append_text(_entries("Reactions", list(stats.reactions)))
    if stats.legendary_actions:
        text.append_text(_entries("Legendary Actions", list(stats.legendary_actions)))
    return text


def status_text(message: str, searching: bool = False) -> Text:
    """Status line, shown literally so names like ``Bob[/]`` survive."""
    if searching and not message:
        message = "Searching..."
    return Text(message)


def help_text(bindings: KeyBindingSettings) -> str:
    """Footer listing the key bindings."""
    return (
        f"{bindings.new_encounter} new encounter | "
        f"{bindings.search_for_new_creature} search | "
        f"{bindings.insert_new_player} add player | "
        f"{bindings.set_initiative} initiative | "
        f"{bindings.lower_health}/{bindings.increase_health} health | "
        f"{bindings.move_down}/{bindings.move_up} move | "
        f"{bindings.peek_down}/{bindings.peek_up} peek | "
        f"{bindings.duplicate_creature} duplicate | "
        f"{bindings.set_creature_description} describe | "
        f"{bindings.delete_creature} delete | "
        f"{bindings.unselect_all} unselect | "
        f"{bindings.quit_app} quit"
    )


__all__ = [
    "NOTHING_SELECTED",
    "combatant_style",
    "combatant_line",
    "format_delta",
    "roster_text",
    "detail_text",
    "status_text",
    "help_text",
]
