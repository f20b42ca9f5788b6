"""Pydantic V2 schemas for monster database search results.

The records mirror the Open5e monster payload, restricted to the fields a
combatant can carry. Unknown keys are ignored so upstream additions do not
break searches.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from wtii.core.exceptions import SearchParseError, SearchResponseError


class SearchModel(BaseModel):
    """Base class for search payload models."""

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
    )


class Speed(SearchModel):
    """Movement speeds in feet."""

    walk: int | None = None
    fly: int | None = None
    swim: int | None = None
    burrow: int | None = None
    climb: int | None = None

    def describe(self) -> str:
        """Render as e.g. ``30 ft., fly 60 ft.``."""
        parts: list[str] = []
        if self.walk is not None:
            parts.append(f"{self.walk} ft.")
        for mode in ("fly", "swim", "burrow", "climb"):
            value = getattr(self, mode)
            if value is not None:
                parts.append(f"{mode} {value} ft.")
        return ", ".join(parts)


class NamedEntry(SearchModel):
    """A named block of stat-block text (reaction, special ability)."""

    name: str
    desc: str = ""


class ActionEntry(NamedEntry):
    """An action or legendary action."""

    attack_bonus: int | None = None
    damage_dice: str | None = None


class CreatureSearchResult(SearchModel):
    """One creature record returned by a monster search."""

    name: str = Field(min_length=1)
    desc: str | None = None
    size: str | None = None
    type: str | None = None
    subtype: str | None = None
    group: str | None = None
    alignment: str | None = None
    armor_class: int | None = None
    armor_desc: str | None = None
    hit_points: int | None = Field(default=None, ge=0)
    hit_dice: str | None = None
    speed: Speed | None = None

    strength: int | None = None
    dexterity: int | None = None
    constitution: int | None = None
    intelligence: int | None = None
    wisdom: int | None = None
    charisma: int | None = None
    strength_save: int | None = None
    dexterity_save: int | None = None
    constitution_save: int | None = None
    intelligence_save: int | None = None
    wisdom_save: int | None = None
    charisma_save: int | None = None

    perception: int | None = None
    skills: dict[str, int] | None = None
    damage_vulnerabilities: str | None = None
    damage_resistances: str | None = None
    damage_immunities: str | None = None
    condition_immunities: str | None = None
    senses: str | None = None
    languages: str | None = None
    challenge_rating: str | None = None

    actions: list[ActionEntry] | None = None
    reactions: list[NamedEntry] | None = None
    legendary_desc: str | None = None
    legendary_actions: list[ActionEntry] | None = None
    special_abilities: list[NamedEntry] | None = None
    spell_list: list[str] | None = None

    document_slug: str | None = Field(
        default=None,
        validation_alias=AliasChoices("document__slug", "document_slug"),
    )
    document_title: str | None = Field(
        default=None,
        validation_alias=AliasChoices("document__title", "document_title"),
    )
    document_license_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("document__license_url", "document_license_url"),
    )

    @field_validator("skills", mode="before")
    @classmethod
    def drop_null_skills(cls, v: Any) -> Any:
        """Filter out null skill bonuses."""
        if isinstance(v, dict):
            return {k: val for k, val in v.items() if val is not None}
        return v

    @field_validator(
        "desc",
        "damage_vulnerabilities",
        "damage_resistances",
        "damage_immunities",
        "condition_immunities",
        "senses",
        "languages",
        "legendary_desc",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        """The database sends empty strings for absent text."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator(
        "actions",
        "reactions",
        "legendary_actions",
        "special_abilities",
        "spell_list",
        mode="before",
    )
    @classmethod
    def blank_list_to_none(cls, v: Any) -> Any:
        """Absent lists also arrive as empty strings."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


def parse_search_response(payload: Any, *, query: str | None = None) -> list[CreatureSearchResult]:
    """Extract and validate the ``results`` array of a search response.

    Args:
        payload: Decoded JSON body.
        query: The query, for error context.

    Returns:
        Validated search results, possibly empty.

    Raises:
        SearchResponseError: If the body has no ``results`` list.
        SearchParseError: If a record fails validation.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("results"), list):
        raise SearchResponseError(
            "Search response has no results list",
            query=query,
        )
    try:
        return [CreatureSearchResult.model_validate(item) for item in payload["results"]]
    except ValidationError as exc:
        raise SearchParseError(
            f"Unable to parse search results: {exc.error_count()} validation error(s)",
            query=query,
            details={"errors": exc.errors(include_url=False)},
        ) from exc


__all__ = [
    "Speed",
    "NamedEntry",
    "ActionEntry",
    "CreatureSearchResult",
    "parse_search_response",
]
