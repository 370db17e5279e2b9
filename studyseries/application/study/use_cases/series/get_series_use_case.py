"""Use cases for reading a single series."""

from studyseries.application.study.dtos.study_dtos import SeriesStatistics
from studyseries.application.study.protocols.series_repository import SeriesRepositoryProtocol
from studyseries.domain.common.value_objects.ids import SeriesId
from studyseries.domain.study.entities.series import Series
from studyseries.domain.study.exceptions import SeriesNotFoundError
from studyseries.domain.study.item_kind import ItemKind


class GetSeriesUseCase:
    """Use case for fetching a series and its derived statistics."""

    def __init__(self, series_repository: SeriesRepositoryProtocol) -> None:
        """Initialize use case with repository protocol."""
        self.series_repository = series_repository

    def get_series(self, kind: ItemKind, series_id: int) -> Series:
        """
        Get a series of the given kind.

        Raises:
            SeriesNotFoundError: If absent or of another kind
        """
        series = self.series_repository.find_by_id(SeriesId(series_id), kind)
        if series is None:
            raise SeriesNotFoundError(series_id)
        return series

    def get_statistics(self, kind: ItemKind, series_id: int) -> SeriesStatistics:
        return SeriesStatistics.from_series(self.get_series(kind, series_id))
