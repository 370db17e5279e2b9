"""Use case for starting a study session."""

from collections.abc import Mapping, Sequence

import structlog

from studyseries.application.study.dtos.study_dtos import StartedSession
from studyseries.application.study.protocols.item_catalog import ItemCatalogProtocol
from studyseries.application.study.services.series_mutation_service import SeriesMutationService
from studyseries.domain.common.exceptions import ValidationError
from studyseries.domain.study.entities.series import Series
from studyseries.domain.study.entities.study_session import StudySession
from studyseries.domain.study.exceptions import UnknownCatalogItemsError
from studyseries.domain.study.item_kind import ItemKind

logger = structlog.get_logger(__name__)

REJECT_POLICY = "reject"
AUTO_COMPLETE_POLICY = "auto_complete"


class StartSessionUseCase:
    """
    Start a session over catalog items.

    With the ``reject`` policy a series with an active session refuses new
    sessions. With ``auto_complete`` the active session is closed first,
    even if some of its items are unanswered.
    """

    def __init__(
        self,
        mutation_service: SeriesMutationService,
        catalogs: Mapping[ItemKind, ItemCatalogProtocol],
        session_start_policy: str = REJECT_POLICY,
    ) -> None:
        """Initialize use case with the mutation service, catalogs and start policy."""
        if session_start_policy not in (REJECT_POLICY, AUTO_COMPLETE_POLICY):
            raise ValueError(f"Unknown session start policy: {session_start_policy}")
        self.mutation_service = mutation_service
        self.catalogs = catalogs
        self.auto_complete_active = session_start_policy == AUTO_COMPLETE_POLICY

    def start_session(
        self,
        kind: ItemKind,
        series_id: int,
        item_ids: Sequence[int],
        generated_from: int | None = None,
    ) -> StartedSession:
        """
        Start a new session in a series.

        Args:
            kind: Kind of the series
            series_id: ID of the series
            item_ids: Catalog ids, in the order they will be studied
            generated_from: Optional provenance reference

        Returns:
            The series, the new session and catalog summaries of its items

        Raises:
            ValidationError: If item_ids is empty or an id is negative
            SeriesNotFoundError: If the series does not exist
            UnknownCatalogItemsError: If some ids are not in the catalog
            ActiveSessionExistsError: If a session is active under the reject policy
        """
        ids = list(item_ids)
        if not ids:
            raise ValidationError("At least one item is required", field="itemIds")
        if any(item_id < 0 for item_id in ids):
            raise ValidationError("Item ids must be non-negative integers", field="itemIds")

        catalog = self.catalogs[kind]

        def start(series: Series) -> StudySession:
            missing = set(ids) - catalog.exists(ids)
            if missing:
                raise UnknownCatalogItemsError(kind.item_label, missing)
            return series.start_session(
                ids, generated_from, auto_complete_active=self.auto_complete_active
            )

        outcome = self.mutation_service.mutate(series_id, kind, start)
        session = outcome.value

        logger.info(
            "started_study_session",
            series_id=series_id,
            session_number=session.session_number,
            item_count=len(session.items),
        )
        return StartedSession(
            series=outcome.series,
            session=session,
            items=catalog.fetch_summary(ids),
        )
