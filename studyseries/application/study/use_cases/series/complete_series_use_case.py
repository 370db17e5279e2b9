"""Use case for completing a series."""

from studyseries.application.study.services.series_mutation_service import SeriesMutationService
from studyseries.domain.study.entities.series import Series
from studyseries.domain.study.item_kind import ItemKind


class CompleteSeriesUseCase:
    """Mark a series as completed. Its sessions are left as they are."""

    def __init__(self, mutation_service: SeriesMutationService) -> None:
        self.mutation_service = mutation_service

    def complete_series(self, kind: ItemKind, series_id: int) -> Series:
        """
        Complete a series.

        Raises:
            SeriesNotFoundError: If the series does not exist
            SeriesAlreadyCompletedError: If it is already completed
        """
        outcome = self.mutation_service.mutate(series_id, kind, lambda series: series.complete())
        return outcome.series
