"""
API routes for study series and their sessions.

The lifecycle is the same for every item kind, so one router is built per
kind from the same endpoints. Only the interaction request body differs.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from studyseries.application.study.dtos.study_dtos import InteractionInput
from studyseries.application.study.use_cases.series import (
    CompleteSeriesUseCase,
    CreateSeriesUseCase,
    DeleteSeriesUseCase,
    GetSeriesUseCase,
    ListSeriesUseCase,
)
from studyseries.application.study.use_cases.sessions import (
    CompleteSessionUseCase,
    DeleteSessionUseCase,
    RecordInteractionUseCase,
    StartSessionUseCase,
)
from studyseries.config import Settings, get_settings
from studyseries.constants import (
    INTERACTION_RECORDED_MESSAGE,
    SERIES_COMPLETED_MESSAGE,
    SERIES_CREATED_MESSAGE,
    SERIES_DELETED_MESSAGE,
    SESSION_COMPLETED_MESSAGE,
    SESSION_DELETED_MESSAGE,
    SESSION_DELETED_WITH_SERIES_MESSAGE,
    SESSION_STARTED_MESSAGE,
    UNEXPECTED_ERROR_MESSAGE,
)
from studyseries.core import container
from studyseries.domain.common.exceptions import DomainError
from studyseries.domain.study.item_kind import ItemKind
from studyseries.domain.study.value_objects.enums import ProgressStatus
from studyseries.exceptions import StudySeriesError
from studyseries.infrastructure.common.di import inject_use_case
from studyseries.infrastructure.common.schemas.response_wrappers import SuccessResponse
from studyseries.infrastructure.study.schemas import (
    FilterOptionsResponse,
    FilterOptionsView,
    FlashcardInteractionRequest,
    InteractionRecordedResponse,
    ItemSummaryView,
    McqInteractionRequest,
    SeriesCreateRequest,
    SeriesCreateResponse,
    SeriesListResponse,
    SeriesResponse,
    SeriesStatisticsResponse,
    SeriesStatisticsView,
    SeriesView,
    SessionDeleteResponse,
    SessionStartRequest,
    SessionStartResponse,
    TableInteractionRequest,
)

logger = logging.getLogger(__name__)


def _unexpected_error(action: str, error: Exception) -> HTTPException:
    logger.error(f"Failed to {action}: {error!s}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=UNEXPECTED_ERROR_MESSAGE,
    )


def build_series_router(
    kind: ItemKind,
    prefix: str,
    interaction_request: type[
        FlashcardInteractionRequest | McqInteractionRequest | TableInteractionRequest
    ],
) -> APIRouter:
    """
    Build the series router for one item kind.

    Args:
        kind: Item kind served by the router
        prefix: URL prefix, e.g. ``/flashcard-series``
        interaction_request: Request schema of the kind's interaction payload

    Returns:
        Router with the series and session endpoints
    """
    router = APIRouter(prefix=prefix, tags=[f"{kind.value}-series"])

    @router.get("/", response_model=SeriesListResponse, status_code=status.HTTP_200_OK)
    def list_series(
        settings: Annotated[Settings, Depends(get_settings)],
        status_filter: Annotated[ProgressStatus | None, Query(alias="status")] = None,
        search: Annotated[str | None, Query(max_length=200)] = None,
        subject: Annotated[str | None, Query(max_length=200)] = None,
        chapter: Annotated[str | None, Query(max_length=200)] = None,
        section: Annotated[str | None, Query(max_length=200)] = None,
        offset: Annotated[int, Query(ge=0)] = 0,
        limit: Annotated[int | None, Query(ge=1)] = None,
        use_case: ListSeriesUseCase = Depends(inject_use_case(container.list_series_use_case)),
    ) -> SeriesListResponse:
        """
        List series of this kind, newest first.

        Args:
            status_filter: Only series with this status
            search: Case-insensitive fragment of the title
            subject: Only series that studied an item of this subject
            chapter: Only series that studied an item of this chapter
            section: Only series that studied an item of this section
            offset: Number of series to skip
            limit: Page size, defaults to DEFAULT_PAGE_SIZE
        """
        try:
            page = use_case.list_series(
                kind=kind,
                status=status_filter,
                search=search,
                offset=offset,
                limit=limit or settings.DEFAULT_PAGE_SIZE,
                subject=subject,
                chapter=chapter,
                section=section,
            )
            return SeriesListResponse.from_page(page)
        except (StudySeriesError, DomainError):
            raise
        except Exception as e:
            raise _unexpected_error(f"list {kind.value} series", e) from e

    @router.post("/", response_model=SeriesCreateResponse, status_code=status.HTTP_201_CREATED)
    def create_series(
        request: SeriesCreateRequest,
        use_case: CreateSeriesUseCase = Depends(inject_use_case(container.create_series_use_case)),
    ) -> SeriesCreateResponse:
        """Create a new active series without sessions."""
        try:
            series = use_case.create_series(kind=kind, title=request.title)
            return SeriesCreateResponse(
                success=True,
                message=SERIES_CREATED_MESSAGE,
                series_id=series.id.value,
                title=series.title,
                status=series.status,
                started_at=series.started_at,
            )
        except (StudySeriesError, DomainError):
            raise
        except Exception as e:
            raise _unexpected_error(f"create {kind.value} series", e) from e

    @router.get(
        "/filter-options", response_model=FilterOptionsResponse, status_code=status.HTTP_200_OK
    )
    def get_filter_options(
        use_case: ListSeriesUseCase = Depends(inject_use_case(container.list_series_use_case)),
    ) -> FilterOptionsResponse:
        """Distinct subjects, chapters and sections usable as list filters."""
        try:
            options = use_case.filter_options(kind)
            return FilterOptionsResponse(
                success=True,
                message="Filter options retrieved successfully",
                options=FilterOptionsView(
                    subjects=options.subjects,
                    chapters=options.chapters,
                    sections=options.sections,
                ),
            )
        except (StudySeriesError, DomainError):
            raise
        except Exception as e:
            raise _unexpected_error(f"get {kind.value} filter options", e) from e

    @router.get("/{series_id}", response_model=SeriesResponse
, status_code=status.HTTP_200_OK)
    def get_series(
        series_id: int,
        use_case: GetSeriesUseCase = Depends(inject_use_case(container.get_series_use_case)),
    ) -> SeriesResponse:
        """Get a series with all of its sessions and interactions."""
        try:
            series = use_case.get_series(kind, series_id)
            return SeriesResponse(
                success=True,
                message="Series retrieved successfully",
                series=SeriesView.from_domain(series),
            )
        except (StudySeriesError, DomainError):
            raise
        except Exception as e:
            raise _unexpected_error(f"get series {series_id}", e) from e

    @router.get(
        "/{series_id}/stats",
        response_model=SeriesStatisticsResponse,
        status_code=status.HTTP_200_OK,
    )
    def get_series_statistics(
        series_id: int,
        use_case: GetSeriesUseCase = Depends(inject_use_case(container.get_series_use_case)),
    ) -> SeriesStatisticsResponse:
        """Get session counts, success rate and score rate of a series."""
        try:
            stats = use_case.get_statistics(kind, series_id)
            return SeriesStatisticsResponse(
                success=True,
                message="Statistics retrieved successfully",
                stats=SeriesStatisticsView.from_dto(stats),
            )
        except (StudySeriesError, DomainError):
            raise
        except Exception as e:
            raise _unexpected_error(f"get statistics of series {series_id}", e) from e

    @router.put(
        "/{series_id}/complete", response_model=SuccessResponse, status_code=status.HTTP_200_OK
    )
    def complete_series(
        series_id: int,
        use_case: CompleteSeriesUseCase = Depends(
            inject_use_case(container.complete_series_use_case)
        ),
    ) -> SuccessResponse:
        """Mark a series as completed."""
        try:
            use_case.complete_series(kind, series_id)
            return SuccessResponse(success=True, message=SERIES_COMPLETED_MESSAGE)
        except (StudySeriesError, DomainError):
            raise
        except Exception as e:
            raise _unexpected_error(f"complete series {series_id}", e) from e

    @router.delete("/{series_id}", response_model=SuccessResponse, status_code=status.HTTP_200_OK)
    def delete_series(
        series_id: int,
        use_case: DeleteSeriesUseCase = Depends(inject_use_case(container.delete_series_use_case)),
    ) -> SuccessResponse:
        """Delete a series with all of its sessions."""
        try:
            use_case.delete_series(kind, series_id)
            return SuccessResponse(success=True, message=SERIES_DELETED_MESSAGE)
        except (StudySeriesError, DomainError):
            raise
        except Exception as e:
            raise _unexpected_error(f"delete series {series_id}", e) from e

    @router.post(
        "/{series_id}/sessions",
        response_model=SessionStartResponse,
        status_code=status.HTTP_201_CREATED,
    )
    def start_session(
        series_id: int,
        request: SessionStartRequest,
        use_case: StartSessionUseCase = Depends(inject_use_case(container.start_session_use_case)),
    ) -> SessionStartResponse:
        """
        Start a session over catalog items.

        Raises:
            HTTPException: 404 if a series or item is unknown, 400 if a
                session is already active
        """
        try:
            started = use_case.start_session(
                kind=kind,
                series_id=series_id,
                item_ids=request.item_ids,
                generated_from=request.generated_from,
            )
            return SessionStartResponse(
                success=True,
                message=SESSION_STARTED_MESSAGE,
                session_id=started.session.session_number,
                item_count=len(started.session.items),
                items=[ItemSummaryView.from_dto(summary) for summary in started.items],
            )
        except (StudySeriesError, DomainError):
            raise
        except Exception as e:
            raise _unexpected_error(f"start session in series {series_id}", e) from e

    def record_interaction(
        series_id: int,
        session_number: int,
        request: interaction_request,  # type: ignore[valid-type]
        use_case: RecordInteractionUseCase = Depends(
            inject_use_case(container.record_interaction_use_case)
        ),
    ) -> InteractionRecordedResponse:
        """Record the answer for one item of an active session."""
        try:
            answer: InteractionInput = request.to_answer()
            recorded = use_case.record_interaction(
                kind=kind,
                series_id=series_id,
                session_number=session_number,
                item_id=request.item_id,
                answer=answer,
            )
            interaction = recorded.item.interaction
            if interaction is None:
                raise RuntimeError("Recorded item has no interaction")
            return InteractionRecordedResponse.from_interaction(
                interaction, INTERACTION_RECORDED_MESSAGE
            )
        except (StudySeriesError, DomainError):
            raise
        except Exception as e:
            raise _unexpected_error(
                f"record interaction in session {session_number} of series {series_id}", e
            ) from e

    router.add_api_route(
        "/{series_id}/sessions/{session_number}/interactions",
        record_interaction,
        methods=["POST"],
        response_model=InteractionRecordedResponse,
        response_model_exclude_none=True,
        status_code=status.HTTP_200_OK,
    )

    @router.put(
        "/{series_id}/sessions/{session_number}/complete",
        response_model=SuccessResponse,
        status_code=status.HTTP_200_OK,
    )
    def complete_session(
        series_id: int,
        session_number: int,
        use_case: CompleteSessionUseCase = Depends(
            inject_use_case(container.complete_session_use_case)
        ),
    ) -> SuccessResponse:
        """Complete a session whose items are all answered."""
        try:
            use_case.complete_session(kind, series_id, session_number)
            return SuccessResponse(success=True, message=SESSION_COMPLETED_MESSAGE)
        except (StudySeriesError, DomainError):
            raise
        except Exception as e:
            raise _unexpected_error(
                f"complete session {session_number} of series {series_id}", e
            ) from e

    @router.delete(
        "/{series_id}/sessions/{session_number}",
        response_model=SessionDeleteResponse,
        response_model_exclude_none=True,
        status_code=status.HTTP_200_OK,
    )
    def delete_session(
        series_id: int,
        session_number: int,
        use_case: DeleteSessionUseCase = Depends(
            inject_use_case(container.delete_session_use_case)
        ),
    ) -> SessionDeleteResponse:
        """Delete an unfinished session; the series goes with its last session."""
        try:
            deletion = use_case.delete_session(kind, series_id, session_number)
            return SessionDeleteResponse(
                success=True,
                message=(
                    SESSION_DELETED_WITH_SERIES_MESSAGE
                    if deletion.series_deleted
                    else SESSION_DELETED_MESSAGE
                ),
                deleted_session_number=deletion.deleted_session_number,
                series_deleted=deletion.series_deleted,
                remaining_sessions=deletion.remaining_sessions,
            )
        except (StudySeriesError, DomainError):
            raise
        except Exception as e:
            raise _unexpected_error(
                f"delete session {session_number} of series {series_id}", e
            ) from e

    return router


flashcard_series_router = build_series_router(
    ItemKind.FLASHCARD, "/flashcard-series", FlashcardInteractionRequest
)
mcq_series_router = build_series_router(ItemKind.MCQ, "/mcq-series", McqInteractionRequest)
table_series_router = build_series_router(ItemKind.TABLE, "/table-series", TableInteractionRequest)
