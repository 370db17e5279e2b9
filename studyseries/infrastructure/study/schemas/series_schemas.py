"""Pydantic schemas for series and session API request/response validation."""

from datetime import datetime

from pydantic import AliasChoices, Field, NonNegativeInt

from studyseries.application.study.dtos.study_dtos import (
    SeriesListEntry,
    SeriesPage,
    SeriesStatistics,
)
from studyseries.application.study.protocols.item_catalog import ItemSummary
from studyseries.domain.study.entities.series import Series
from studyseries.domain.study.entities.study_session import SessionItem, StudySession
from studyseries.domain.study.value_objects.enums import ProgressStatus
from studyseries.infrastructure.common.schemas.response_wrappers import (
    CamelModel,
    PaginatedResponse,
    SuccessResponse,
)
from studyseries.infrastructure.study.schemas.interaction_schemas import (
    InteractionView,
    interaction_view,
)


class SeriesCreateRequest(CamelModel):
    """Schema for creating a series."""

    title: str = Field(..., min_length=1, max_length=200, description="Series title")


class SessionStartRequest(CamelModel):
    """Schema for starting a session."""

    item_ids: list[NonNegativeInt] = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("itemIds", "item_ids", "cardIds", "questionIds", "tableIds"),
        description="Catalog ids to study, in order",
    )
    generated_from: NonNegativeInt | None = Field(
        None, description="Optional reference to what produced this selection"
    )


class SessionItemView(CamelModel):
    item_id: int
    interaction: InteractionView | None = None

    @classmethod
    def from_domain(cls, item: SessionItem) -> "SessionItemView":
        return cls(item_id=item.item_id.value, interaction=interaction_view(item.interaction))


class SessionView(CamelModel):
    """A session as embedded in a series document."""

    session_id: int = Field(..., description="Session number within the series")
    status: ProgressStatus
    generated_from: int | None = None
    started_at: datetime
    completed_at: datetime | None = None
    items: list[SessionItemView]

    @classmethod
    def from_domain(cls, session: StudySession) -> "SessionView":
        return cls(
            session_id=session.session_number,
            status=session.status,
            generated_from=session.generated_from,
            started_at=session.started_at,
            completed_at=session.completed_at,
            items=[SessionItemView.from_domain(item) for item in session.items],
        )


class SeriesSummary(CamelModel):
    series_id: int
    title: str
    status: ProgressStatus
    started_at: datetime
    completed_at: datetime | None = None


class SeriesView(SeriesSummary):
    """Full series document."""

    kind: str
    sessions: list[SessionView]

    @classmethod
    def from_domain(cls, series: Series) -> "SeriesView":
        return cls(
            series_id=series.id.value,
            kind=series.kind.value,
            title=series.title,
            status=series.status,
            started_at=series.started_at,
            completed_at=series.completed_at,
            sessions=[SessionView.from_domain(session) for session in series.sessions],
        )


class SeriesListItem(SeriesSummary):
    session_count: int
    completed_sessions: int

    @classmethod
    def from_entry(cls, entry: SeriesListEntry) -> "SeriesListItem":
        series = entry.series
        return cls(
            series_id=series.id.value,
            title=series.title,
            status=series.status,
            started_at=series.started_at,
            completed_at=series.completed_at,
            session_count=entry.session_count,
            completed_sessions=entry.completed_sessions,
        )


class AppliedContentFilters(CamelModel):
    subject: str | None = None
    chapter: str | None = None
    section: str | None = None


class SeriesListFilters(CamelModel):
    applied: AppliedContentFilters
    total_before_filtering: int = Field(
        ..., description="Matches before the subject, chapter and section filters"
    )


class SeriesListResponse(PaginatedResponse[SeriesListItem]):
    success: bool = True
    filters: SeriesListFilters

    @classmethod
    def from_page(cls, page: SeriesPage) -> "SeriesListResponse":
        return cls(
            items=[SeriesListItem.from_entry(entry) for entry in page.items],
            total=page.total,
            offset=page.pagination.offset,
            limit=page.pagination.limit,
            filters=SeriesListFilters(
                applied=AppliedContentFilters(
                    subject=page.subject, chapter=page.chapter, section=page.section
                ),
                total_before_filtering=page.total_before_filtering,
            ),
        )


class FilterOptionsView(CamelModel):
    subjects: list[str]
    chapters: list[str]
    sections: list[str]


class FilterOptionsResponse(SuccessResponse):
    options: FilterOptionsView


class SeriesCreateResponse(SuccessResponse):
    series_id: int
    title: str
    status: ProgressStatus
    started_at: datetime


class SeriesResponse(SuccessResponse):
    series: SeriesView


class SeriesStatisticsView(CamelModel):
    series_id: int
    total_sessions: int
    completed_sessions: int
    active_session_id: int | None
    next_session_id: int
    total_items: int
    answered_items: int
    total_correct: int
    success_rate: int = Field(..., description="Correct items per item, in percent")
    score_earned: int
    score_possible: int
    score_rate: int = Field(
        ..., description="Earned points per possible point over answered items, in percent"
    )

    @classmethod
    def from_dto(cls, stats: SeriesStatistics) -> "SeriesStatisticsView":
        return cls(
            series_id=stats.series_id,
            total_sessions=stats.total_sessions,
            completed_sessions=stats.completed_sessions,
            active_session_id=stats.active_session_number,
            next_session_id=stats.next_session_number,
            total_items=stats.total_items,
            answered_items=stats.answered_items,
            total_correct=stats.total_correct,
            success_rate=stats.success_rate,
            score_earned=stats.score_earned,
            score_possible=stats.score_possible,
            score_rate=stats.score_rate,
        )


class SeriesStatisticsResponse(SuccessResponse):
    stats: SeriesStatisticsView


class ItemSummaryView(CamelModel):
    item_id: int
    title: str
    subject: str | None = None
    chapter: str | None = None
    details: dict[str, object] = Field(default_factory=dict)

    @classmethod
    def from_dto(cls, summary: ItemSummary) -> "ItemSummaryView":
        return cls(
            item_id=summary.item_id,
            title=summary.title,
            subject=summary.subject,
            chapter=summary.chapter,
            details=dict(summary.details),
        )


class SessionStartResponse(SuccessResponse):
    session_id: int
    item_count: int
    items: list[ItemSummaryView]


class SessionDeleteResponse(SuccessResponse):
    deleted_session_number: int
    series_deleted: bool
    remaining_sessions: int | None = None
