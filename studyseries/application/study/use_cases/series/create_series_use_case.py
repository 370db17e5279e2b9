"""Use case for creating a study series."""

import structlog

from studyseries.application.study.protocols.series_repository import SeriesRepositoryProtocol
from studyseries.domain.study.entities.series import Series
from studyseries.domain.study.item_kind import ItemKind

logger = structlog.get_logger(__name__)


class CreateSeriesUseCase:
    """Use case for creating a study series."""

    def __init__(self, series_repository: SeriesRepositoryProtocol) -> None:
        """Initialize use case with repository protocol."""
        self.series_repository = series_repository

    def create_series(self, kind: ItemKind, title: str) -> Series:
        """
        Create a new active series without sessions.

        Args:
            kind: Kind of items the series will hold
            title: Series title, trimmed before storing

        Returns:
            Persisted series with its assigned id

        Raises:
            ValidationError: If the title is blank or longer than 200 characters
        """
        series = Series.create(kind=kind, title=title)
        events = series.collect_events()
        saved = self.series_repository.add(series)

        for event in events:
            logger.info(event.event_type, series_id=saved.id.value, **event.to_dict())
        return saved
