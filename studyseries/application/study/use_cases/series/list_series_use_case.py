"""Use case for listing series of one kind."""

from collections.abc import Mapping
from dataclasses import replace

from studyseries.application.common.pagination import Pagination
from studyseries.application.study.dtos.study_dtos import SeriesListEntry, SeriesPage
from studyseries.application.study.protocols.item_catalog import (
    FilterOptions,
    ItemCatalogProtocol,
)
from studyseries.application.study.protocols.series_repository import (
    SeriesFilter,
    SeriesRepositoryProtocol,
)
from studyseries.domain.study.item_kind import ItemKind
from studyseries.domain.study.value_objects.enums import ProgressStatus


def _clean(value: str | None) -> str | None:
    return (value.strip() or None) if value else None


class ListSeriesUseCase:
    """Use case for listing series with filtering and pagination."""

    def __init__(
        self,
        series_repository: SeriesRepositoryProtocol,
        catalogs: Mapping[ItemKind, ItemCatalogProtocol],
        max_page_size: int,
    ) -> None:
        """Initialize use case with repository, item catalogs and page size cap."""
        self.series_repository = series_repository
        self.catalogs = catalogs
        self.max_page_size = max_page_size

    def list_series(
        self,
        kind: ItemKind,
        status: ProgressStatus | None = None,
        search: str | None = None,
        offset: int = 0,
        limit: int = 20,
        subject: str | None = None,
        chapter: str | None = None,
        section: str | None = None,
    ) -> SeriesPage:
        """
        List series newest first.

        Args:
            kind: Kind of series to list
            status: Optional status filter
            search: Optional case-insensitive title fragment
            offset: Number of series to skip
            limit: Maximum number of series to return
            subject: Keep series with an item whose subject contains this
            chapter: Keep series with an item whose chapter contains this
            section: Keep series with an item whose section contains this

        Returns:
            Page of series with session counters, the total match count and
            the count before content filtering

        Raises:
            ValidationError: If offset or limit are out of range
        """
        pagination = Pagination(offset=offset, limit=limit, max_limit=self.max_page_size)
        series_filter = SeriesFilter(
            kind=kind,
            status=status,
            search=_clean(search),
            subject=_clean(subject),
            chapter=_clean(chapter),
            section=_clean(section),
        )
        if series_filter.has_content_filter:
            # One item must match every given label
            item_ids = self.catalogs[kind].ids_matching(
                subject=series_filter.subject,
                chapter=series_filter.chapter,
                section=series_filter.section,
            )
            series_filter = replace(series_filter, item_ids=frozenset(item_ids))

        series_list, total = self.series_repository.find_page(series_filter, pagination)
        total_before_filtering = (
            self.series_repository.count(series_filter.without_content())
            if series_filter.has_content_filter
            else total
        )
        return SeriesPage(
            items=[SeriesListEntry.from_series(series) for series in series_list],
            total=total,
            pagination=pagination,
            total_before_filtering=total_before_filtering,
            subject=series_filter.subject,
            chapter=series_filter.chapter,
            section=series_filter.section,
        )

    def filter_options(self, kind: ItemKind) -> FilterOptions:
        """Subjects, chapters and sections available in the kind's catalog."""
        return self.catalogs[kind].filter_options()
