"""Storage module for WTII persistence.

Provides JSON file storage for the default player roster that every new
encounter starts with.
"""

from wtii.storage.seed_store import SeedStore

__all__ = [
    "SeedStore",
]
