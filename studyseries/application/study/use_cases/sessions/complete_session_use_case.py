"""Use case for completing a study session."""

from studyseries.application.study.services.series_mutation_service import SeriesMutationService
from studyseries.domain.study.entities.study_session import StudySession
from studyseries.domain.study.item_kind import ItemKind


class CompleteSessionUseCase:
    def __init__(self, mutation_service: SeriesMutationService) -> None:
        self.mutation_service = mutation_service

    def complete_session(
        self, kind: ItemKind, series_id: int, session_number: int
    ) -> StudySession:
        """
        Complete a session once every item is answered.

        Raises:
            SeriesNotFoundError: If the series does not exist
            SessionNotFoundError: If the session does not exist
            SessionAlreadyCompletedError: If the session is already completed
            UnansweredItemsError: If some items have no interaction
        """
        outcome = self.mutation_service.mutate(
            series_id, kind, lambda series: series.complete_session(session_number)
        )
        return outcome.value
