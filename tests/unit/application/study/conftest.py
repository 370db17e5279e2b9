"""In-memory fakes for the study application layer."""

import copy
from collections.abc import Sequence

import pytest

from studyseries.application.common.pagination import Pagination
from studyseries.application.study.protocols.item_catalog import ItemSummary
from studyseries.application.study.protocols.series_repository import SeriesFilter
from studyseries.application.study.services.series_mutation_service import SeriesMutationService
from studyseries.domain.common.value_objects.ids import SeriesId
from studyseries.domain.study.entities.series import Series
from studyseries.domain.study.item_kind import ItemKind
from studyseries.exceptions import StorageConflictError


class InMemorySeriesRepository:
    """Stores deep copies so every load hands out an independent aggregate."""

    def __init__(self) -> None:
        self.rows: dict[int, Series] = {}
        self.next_id = 1
        self.save_calls = 0
        # Number of upcoming writes that fail as if another writer won
        self.pending_conflicts = 0

    def find_by_id(self, series_id: SeriesId, kind: ItemKind) -> Series | None:
        stored = self.rows.get(series_id.value)
        if stored is None or stored.kind is not kind:
            return None
        return copy.deepcopy(stored)

    def _matches(self, series_filter: SeriesFilter) -> list[Series]:
        return [
            s
            for s in self.rows.values()
            if s.kind is series_filter.kind
            and (series_filter.status is None or s.status is series_filter.status)
            and (not series_filter.search or series_filter.search.lower() in s.title.lower())
            and (
                series_filter.item_ids is None
                or not s.studied_item_ids().isdisjoint(series_filter.item_ids)
            )
        ]

    def find_page(
        self, series_filter: SeriesFilter, pagination: Pagination
    ) -> tuple[list[Series], int]:
        matches = self._matches(series_filter)
        page = matches[pagination.offset : pagination.offset + pagination.limit]
        return [copy.deepcopy(s) for s in page], len(matches)

    def count(self, series_filter: SeriesFilter) -> int:
        return len(self._matches(series_filter))

    def add(self, series: Series) -> Series:
        stored = copy.deepcopy(series)
        stored.id = SeriesId(self.next_id)
        stored.version = 1
        self.next_id += 1
        self.rows[stored.id.value] = stored
        return copy.deepcopy(stored)

    def _check_version(self, series: Series) -> None:
        if self.pending_conflicts:
            self.pending_conflicts -= 1
            raise StorageConflictError(series.id.value)
        stored = self.rows.get(series.id.value)
        if stored is None or stored.version != series.version:
            raise StorageConflictError(series.id.value)

    def save(self, series: Series) -> Series:
        self.save_calls += 1
        self._check_version(series)
        series.version += 1
        self.rows[series.id.value] = copy.deepcopy(series)
        return series

    def delete(self, series: Series) -> None:
        self._check_version(series)
        del self.rows[series.id.value]

    def delete_by_id(self, series_id: SeriesId, kind: ItemKind) -> bool:
        stored = self.rows.get(series_id.value)
        if stored is None or stored.kind is not kind:
            return False
        del self.rows[series_id.value]
        return True


class InMemoryCatalog:
    def __init__(
        self,
        item_ids: Sequence[int],
        answers: dict[int, str] | None = None,
        labels: dict[int, tuple[str | None, str | None, str | None]] | None = None,
    ) -> None:
        self.item_ids = set(item_ids)
        self.answers = answers or {}
        # item id -> (subject, chapter, section)
        self.labels = labels or {}

    def exists(self, item_ids: Sequence[int]) -> set[int]:
        return self.item_ids & set(item_ids)

    def fetch_summary(self, item_ids: Sequence[int]) -> list[ItemSummary]:
        return [
            ItemSummary(item_id=item_id, title=f"Item {item_id}")
            for item_id in item_ids
            if item_id in self.item_ids
        ]

    def ids_matching(
        self,
        subject: str | None = None,
        chapter: str | None = None,
        section: str | None = None,
    ) -> set[int]:
        wanted = (subject, chapter, section)
        return {
            item_id
            for item_id, labels in self.labels.items()
            if all(
                not fragment or (label is not None and fragment.lower() in label.lower())
                for fragment, label in zip(wanted, labels, strict=True)
            )
        }

    def find_correct_answer(self, item_id: int) -> str | None:
        return self.answers.get(item_id)


@pytest.fixture
def repository() -> InMemorySeriesRepository:
    return InMemorySeriesRepository()


@pytest.fixture
def mutation_service(repository: InMemorySeriesRepository) -> SeriesMutationService:
    return SeriesMutationService(series_repository=repository, max_retries=3)


@pytest.fixture
def catalogs() -> dict[ItemKind, InMemoryCatalog]:
    return {
        ItemKind.FLASHCARD: InMemoryCatalog(
            range(1, 6),
            labels={
                1: ("Biology", "Cells", None),
                2: ("Biology", "Genetics", "Mendel"),
                3: ("Chemistry", "Acids", None),
            },
        ),
        ItemKind.MCQ: InMemoryCatalog(range(1, 4), answers={1: "B", 2: "C"}),
        ItemKind.TABLE: InMemoryCatalog([1, 2]),
    }


@pytest.fixture
def stored_series(repository: InMemorySeriesRepository) -> Series:
    return repository.add(Series.create(ItemKind.FLASHCARD, "Biology Review"))
