"""Read-modify-write of Series aggregates with optimistic concurrency."""

from collections.abc import Callable
from typing import TypeVar

import structlog

from studyseries.application.study.dtos.study_dtos import MutationOutcome
from studyseries.application.study.protocols.series_repository import SeriesRepositoryProtocol
from studyseries.domain.common.value_objects.ids import SeriesId
from studyseries.domain.study.entities.series import Series
from studyseries.domain.study.exceptions import SeriesNotFoundError
from studyseries.domain.study.item_kind import ItemKind
from studyseries.exceptions import StorageConflictError

logger = structlog.get_logger(__name__)

T = TypeVar("T")

DEFAULT_MAX_RETRIES = 3


class SeriesMutationService:
    """
    Apply a domain operation to a stored series as one logical write.

    Each attempt loads a fresh copy of the series, applies the operation and
    writes it back with a version check. When another writer got there first
    the whole attempt is replayed, up to ``max_retries`` extra times. Domain
    errors raised by the operation are never retried.
    """

    def __init__(
        self,
        series_repository: SeriesRepositoryProtocol,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ) -> None:
        """Initialize service with the series repository and retry budget."""
        self.series_repository = series_repository
        self.max_retries = max_retries

    def load(self, series_id: int, kind: ItemKind) -> Series:
        """
        Load a series of the given kind.

        Raises:
            SeriesNotFoundError: If absent or of another kind
        """
        series = self.series_repository.find_by_id(SeriesId(series_id), kind)
        if series is None:
            raise SeriesNotFoundError(series_id)
        return series

    def mutate(
        self,
        series_id: int,
        kind: ItemKind,
        operation: Callable[[Series], T],
        *,
        delete_when_empty: bool = False,
    ) -> MutationOutcome[T]:
        """
        Load, mutate and persist a series.

        Args:
            series_id: ID of the series
            kind: Item kind the series must have
            operation: Domain operation applied to the loaded series
            delete_when_empty: Delete the series instead of saving it when
                the operation left it without sessions

        Returns:
            The persisted series, the operation's return value and whether
            the series was deleted

        Raises:
            SeriesNotFoundError: If the series does not exist
            DomainError: Whatever the operation raises
            StorageConflictError: If every attempt lost a concurrent write
        """
        attempts = self.max_retries + 1
        for attempt in range(1, attempts + 1):
            series = self.load(series_id, kind)
            value = operation(series)
            events = series.collect_events()
            deleted = delete_when_empty and series.session_count == 0
            try:
                if deleted:
                    self.series_repository.delete(series)
                else:
                    series = self.series_repository.save(series)
            except StorageConflictError:
                if attempt == attempts:
                    logger.warning(
                        "series_write_conflict_exhausted", series_id=series_id, attempts=attempts
                    )
                    raise
                logger.info("series_write_conflict_retry", series_id=series_id, attempt=attempt)
                continue

            for event in events:
                logger.info(event.event_type, **event.to_dict())
            if deleted:
                logger.info("deleted_empty_series", series_id=series_id)
            return MutationOutcome(series=series, value=value, series_deleted=deleted)

        # range() above always runs at least once and every path returns or raises
        raise StorageConflictError(series_id)
