"""Use case for recording an interaction on a session item."""

from studyseries.application.study.dtos.study_dtos import InteractionInput, RecordedInteraction
from studyseries.application.study.services.interaction_factory import InteractionFactory
from studyseries.application.study.services.series_mutation_service import SeriesMutationService
from studyseries.domain.study.entities.series import Series
from studyseries.domain.study.entities.study_session import SessionItem
from studyseries.domain.study.item_kind import ItemKind


class RecordInteractionUseCase:
    """Record the learner's answer for one item of an active session."""

    def __init__(
        self,
        mutation_service: SeriesMutationService,
        interaction_factory: InteractionFactory,
    ) -> None:
        """Initialize use case with the mutation service and interaction factory."""
        self.mutation_service = mutation_service
        self.interaction_factory = interaction_factory

    def record_interaction(
        self,
        kind: ItemKind,
        series_id: int,
        session_number: int,
        item_id: int,
        answer: InteractionInput,
    ) -> RecordedInteraction:
        """
        Record an interaction. Recorded interactions are never overwritten.

        Session state is checked before the answer itself, so a conflict is
        reported even when the payload is also invalid.

        Args:
            kind: Kind of the series
            series_id: ID of the series
            session_number: Number of the session within the series
            item_id: Catalog id of the answered item
            answer: Submitted answer of the series' kind

        Returns:
            The updated series and the answered session item

        Raises:
            SeriesNotFoundError: If the series does not exist
            SessionNotFoundError: If the session does not exist
            SessionNotActiveError: If the session is completed
            ItemNotInSessionError: If the item is not in the session
            InteractionAlreadyRecordedError: If the item is already answered
            ValidationError: If the answer is invalid or of another kind
        """

        def record(series: Series) -> SessionItem:
            series.get_session(session_number).open_slot(item_id, kind.item_label)
            interaction = self.interaction_factory.build(kind, item_id, answer)
            return series.record_interaction(session_number, item_id, interaction)

        outcome = self.mutation_service.mutate(series_id, kind, record)
        return RecordedInteraction(
            series=outcome.series, session_number=session_number, item=outcome.value
        )
