"""Protocols for the read-only item catalogs."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True)
class ItemSummary:
    """Display data of one catalog item, returned when a session starts."""

    item_id: int
    title: str
    subject: str | None = None
    chapter: str | None = None
    details: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class FilterOptions:
    """Distinct, non-blank content labels of a catalog, sorted."""

    subjects: list[str]
    chapters: list[str]
    sections: list[str]


class ItemCatalogProtocol(Protocol):
    """Lookup of catalog items of one kind."""

    def exists(self, item_ids: Sequence[int]) -> set[int]:
        """Return the subset of ``item_ids`` present in the catalog."""
        ...

    def fetch_summary(self, item_ids: Sequence[int]) -> list[ItemSummary]:
        """Return summaries in the order of ``item_ids``, skipping unknown ids."""
        ...

    def ids_matching(
        self,
        subject: str | None = None,
        chapter: str | None = None,
        section: str | None = None,
    ) -> set[int]:
        """
        Return ids of items whose labels contain every given fragment.

        Matching is case-insensitive; items without the label never match.
        """
        ...

    def filter_options(self) -> FilterOptions: ...


class AnswerKeyProtocol(Protocol):
    """Answer key of the multiple-choice catalog."""

    def find_correct_answer(self, item_id: int) -> str | None: ...
