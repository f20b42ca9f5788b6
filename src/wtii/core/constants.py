"""Application-wide constants for the WTII encounter tracker.

This module defines the D&D 5E rules constants the roster relies on and
a handful of defaults shared by configuration and persistence.
"""

from __future__ import annotations

# =============================================================================
# D&D 5E Rules Constants
# =============================================================================

INITIATIVE_DIE_SIDES = 20
"""Initiative is rolled on a single d20."""

ABILITY_SCORE_BASELINE = 10
"""Score whose modifier is zero; modifiers move one step per two points."""

MISSING_DEXTERITY = 0
"""Dexterity assumed when a record carries none (modifier -5)."""

PLAYER_DEFAULT_HIT_POINTS = 1
"""Players are tracked for turn order only; one hit point keeps them Alive."""

# =============================================================================
# External Data
# =============================================================================

DEFAULT_API_BASE_URL = "https://api.open5e.com"
"""Open5e monster database."""

MONSTER_SEARCH_PATH = "/monsters/"
"""Search endpoint, queried with ?search=<name>."""

DEFAULT_HOME_DIR_NAME = ".wtii"
"""Directory under the user's home holding the roster file and logs."""


__all__ = [
    "INITIATIVE_DIE_SIDES",
    "ABILITY_SCORE_BASELINE",
    "MISSING_DEXTERITY",
    "PLAYER_DEFAULT_HIT_POINTS",
    "DEFAULT_API_BASE_URL",
    "MONSTER_SEARCH_PATH",
    "DEFAULT_HOME_DIR_NAME",
]
