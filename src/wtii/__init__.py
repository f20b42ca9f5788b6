"""WTII - Whose Turn Is It? A terminal initiative tracker for D&D 5E.

The roster keeps combatants in turn order: players entered by hand and
creatures pulled from the Open5e monster database.

Example:
    >>> from wtii import Roster, create_player
    >>> roster = Roster([create_player("Samson"), create_player("Borbur")])
    >>> roster.set_initiative(0, 15)
    1
    >>> [c.name for c in roster]
    ['Borbur', 'Samson']

Modules:
    core: Configuration, logging, and base exceptions.
    engine: Dice mechanics and the roster engine.
    models: Pydantic V2 schemas for combatants and search records.
    search: Monster database client and background dispatcher.
    storage: Default roster persistence.
    ui: Textual terminal interface.
"""

from __future__ import annotations

# Core
from wtii.core.config import Settings, get_settings
from wtii.core.exceptions import WtiiError
from wtii.core.logging import configure_logging, get_logger

# Models
from wtii.models.combatant import (
    Combatant,
    Faction,
    Status,
    create_creature,
    create_player,
)
from wtii.models.search import CreatureSearchResult

# Engine
from wtii.engine.dice import DiceRoller, RandomSource
from wtii.engine.roster import Direction, Roster


__version__ = "0.1.0"
__all__ = [
    "__version__",
    # Core
    "WtiiError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Combatant",
    "Faction",
    "Status",
    "create_player",
    "create_creature",
    "CreatureSearchResult",
    # Engine
    "DiceRoller",
    "RandomSource",
    "Direction",
    "Roster",
]
