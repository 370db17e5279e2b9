"""Protocol for Series repository."""

from dataclasses import dataclass
from typing import Protocol

from studyseries.application.common.pagination import Pagination
from studyseries.domain.common.value_objects.ids import SeriesId
from studyseries.domain.study.entities.series import Series
from studyseries.domain.study.item_kind import ItemKind
from studyseries.domain.study.value_objects.enums import ProgressStatus


@dataclass(frozen=True)
class SeriesFilter:
    """
    Criteria for listing series of one kind.

    ``subject``, ``chapter`` and ``section`` select series by the content of
    their sessions. They are resolved against the item catalog into
    ``item_ids``: a series matches when any of its session items is in that
    set.
    """

    kind: ItemKind
    status: ProgressStatus | None = None
    search: str | None = None
    subject: str | None = None
    chapter: str | None = None
    section: str | None = None
    item_ids: frozenset[int] | None = None

    @property
    def has_content_filter(self) -> bool:
        return bool(self.subject or self.chapter or self.section)

    def without_content(self) -> "SeriesFilter":
        return SeriesFilter(kind=self.kind, status=self.status, search=self.search)


class SeriesRepositoryProtocol(Protocol):
    """
    Persistence of whole Series aggregates.

    ``save`` and ``delete`` are compare-and-swap on ``Series.version`` and
    raise StorageConflictError when the stored row moved on or vanished.
    """

    def find_by_id(self, series_id: SeriesId, kind: ItemKind) -> Series | None: ...

    def find_page(
        self, series_filter: SeriesFilter, pagination: Pagination
    ) -> tuple[list[Series], int]: ...

    def count(self, series_filter: SeriesFilter) -> int: ...

    def add(self, series: Series) -> Series: ...

    def save(self, series: Series) -> Series: ...

    def delete(self, series: Series) -> None: ...

    def delete_by_id(self, series_id: SeriesId, kind: ItemKind) -> bool:
        """Delete without a version check. Return False when nothing matched."""
        ...
