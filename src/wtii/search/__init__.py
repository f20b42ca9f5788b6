"""Creature search: the monster database client and its background dispatcher."""

from wtii.search.client import MonsterSearchClient
from wtii.search.dispatcher import SearchDispatcher, SearchFunction, SearchOutcome

__all__ = [
    "MonsterSearchClient",
    "SearchDispatcher",
    "SearchFunction",
    "SearchOutcome",
]
