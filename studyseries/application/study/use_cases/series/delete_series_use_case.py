"""Use case for deleting a series."""

import structlog

from studyseries.application.study.protocols.series_repository import SeriesRepositoryProtocol
from studyseries.domain.common.value_objects.ids import SeriesId
from studyseries.domain.study.exceptions import SeriesNotFoundError
from studyseries.domain.study.item_kind import ItemKind

logger = structlog.get_logger(__name__)


class DeleteSeriesUseCase:
    """Delete a series with all of its sessions, whatever their state."""

    def __init__(self, series_repository: SeriesRepositoryProtocol) -> None:
        self.series_repository = series_repository

    def delete_series(self, kind: ItemKind, series_id: int) -> None:
        """
        Delete a series unconditionally.

        Raises:
            SeriesNotFoundError: If the series does not exist
        """
        if not self.series_repository.delete_by_id(SeriesId(series_id), kind):
            raise SeriesNotFoundError(series_id)
        logger.info("deleted_series", series_id=series_id, kind=kind.value)
