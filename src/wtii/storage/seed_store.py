"""JSON persistence for the default player roster.

File format: a JSON array of ``{"name": ..., "description": ...}`` objects.

A missing or broken file never stops the tracker from starting; it simply
yields an empty roster and a logged warning.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from wtii.core.logging import get_logger
from wtii.models.seed import SeedEntry


logger = get_logger(__name__)

_entries_adapter = TypeAdapter(list[SeedEntry])


class SeedStore:
    """Load and save the default player roster.

    Example:
        >>> store = SeedStore(Path("~/.wtii/default_roster.json").expanduser())
        >>> [entry.name for entry in store.load()]
        ['Samson', 'Thaurun', 'Borbur']
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[SeedEntry]:
        """Read the default players.

        Returns:
            The entries, or an empty list when the file is absent or invalid.
        """
        if not self._path.exists():
            logger.info("No default roster file", path=str(self._path))
            return []

        try:
            raw = self._path.read_text(encoding="utf-8")
            entries = _entries_adapter.validate_python(json.loads(raw))
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Default roster unreadable", path=str(self._path), error=str(exc))
            return []
        except json.JSONDecodeError as exc:
            logger.warning("Default roster is not valid JSON", path=str(self._path), error=str(exc))
            return []
        except ValidationError as exc:
            logger.warning(
                "Default roster has invalid entries",
                path=str(self._path),
                errors=exc.error_count(),
            )
            return []

        logger.info("Default roster loaded", path=str(self._path), players=len(entries))
        return entries

    def save(self, entries: Iterable[SeedEntry]) -> None:
        """Write the default players, replacing the file."""
        entries = list(entries)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = _entries_adapter.dump_python(entries, mode="json")
        self._path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        logger.info("Default roster saved", path=str(self._path), players=len(entries))


__all__ = ["SeedStore"]
