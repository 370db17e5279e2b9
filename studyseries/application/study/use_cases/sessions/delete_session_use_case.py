"""Use case for deleting an unfinished study session."""

from studyseries.application.study.dtos.study_dtos import SessionDeletion
from studyseries.application.study.services.series_mutation_service import SeriesMutationService
from studyseries.domain.study.item_kind import ItemKind


class DeleteSessionUseCase:
    """Delete a session; a series left without sessions is deleted with it."""

    def __init__(self, mutation_service: SeriesMutationService) -> None:
        self.mutation_service = mutation_service

    def delete_session(
        self, kind: ItemKind, series_id: int, session_number: int
    ) -> SessionDeletion:
        """
        Delete a session. Remaining sessions keep their numbers.

        Returns:
            Deletion summary with the remaining session count when the
            series survives

        Raises:
            SeriesNotFoundError: If the series does not exist
            SessionNotFoundError: If the session does not exist
            CompletedSessionDeletionError: If the session is completed
        """
        outcome = self.mutation_service.mutate(
            series_id,
            kind,
            lambda series: series.delete_session(session_number),
            delete_when_empty=True,
        )
        if outcome.series_deleted:
            return SessionDeletion(deleted_session_number=session_number, series_deleted=True)
        return SessionDeletion(
            deleted_session_number=session_number,
            series_deleted=False,
            remaining_sessions=outcome.series.session_count,
        )
