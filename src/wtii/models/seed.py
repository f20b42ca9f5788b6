"""Seed entries for the default player roster."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SeedEntry(BaseModel):
    """A player every new encounter starts with."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(min_length=1)
    description: str | None = None


__all__ = ["SeedEntry"]
