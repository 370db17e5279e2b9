"""Strongly-typed identifiers used across the domain."""

from dataclasses import dataclass

from studyseries.domain.common.entity import EntityId


@dataclass(frozen=True)
class SeriesId(EntityId):
    """Identifier of a study series. Zero until the series is persisted."""

    value: int


@dataclass(frozen=True)
class ItemId(EntityId):
    """Identifier of a catalog item (flashcard, MCQ question or table quiz)."""

    value: int
