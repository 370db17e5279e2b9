"""Data transfer objects returned by the study use cases."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from studyseries.application.common.pagination import PaginatedResult
from studyseries.application.study.protocols.item_catalog import ItemSummary
from studyseries.domain.study.entities.series import Series
from studyseries.domain.study.entities.study_session import SessionItem, StudySession

T = TypeVar("T")


@dataclass(frozen=True)
class MutationOutcome(Generic[T]):
    """Result of a read-modify-write cycle on a series."""

    series: Series
    value: T
    series_deleted: bool = False


@dataclass(frozen=True)
class StartedSession:
    series: Series
    session: StudySession
    items: list[ItemSummary] = field(default_factory=list)


@dataclass(frozen=True)
class RecordedInteraction:
    series: Series
    session_number: int
    item: SessionItem


@dataclass(frozen=True)
class SessionDeletion:
    deleted_session_number: int
    series_deleted: bool
    remaining_sessions: int | None = None


@dataclass(frozen=True)
class SeriesListEntry:
    """A series with the counters shown in list views."""

    series: Series
    session_count: int
    completed_sessions: int

    @classmethod
    def from_series(cls, series: Series) -> "SeriesListEntry":
        return cls(
            series=series,
            session_count=series.session_count,
            completed_sessions=len(series.completed_sessions()),
        )


@dataclass(frozen=True)
class SeriesPage(PaginatedResult[SeriesListEntry]):
    """
    One page of listed series.

    ``total_before_filtering`` counts the series matching kind, status and
    search, before the subject, chapter and section filters are applied.
    """

    total_before_filtering: int = 0
    subject: str | None = None
    chapter: str | None = None
    section: str | None = None


@dataclass(frozen=True)
class SeriesStatistics:
    """Read-only figures derived from a series."""

    series_id: int
    total_sessions: int
    completed_sessions: int
    active_session_number: int | None
    next_session_number: int
    total_items: int
    answered_items: int
    total_correct: int
    success_rate: int
    score_earned: int
    score_possible: int
    score_rate: int

    @classmethod
    def from_series(cls, series: Series) -> "SeriesStatistics":
        active = series.active_session()
        earned, possible = series.score_totals()
        return cls(
            series_id=series.id.value,
            total_sessions=series.session_count,
            completed_sessions=len(series.completed_sessions()),
            active_session_number=active.session_number if active else None,
            next_session_number=series.next_session_number(),
            total_items=series.total_items(),
            answered_items=len(series.answered_items()),
            total_correct=series.total_correct(),
            success_rate=series.success_rate(),
            score_earned=earned,
            score_possible=possible,
            score_rate=series.score_rate(),
        )


@dataclass(frozen=True)
class FlashcardAnswer:
    """Flashcard interaction as submitted by the learner."""

    result: str
    difficulty: str
    confidence_while_solving: str
    time_spent: int


@dataclass(frozen=True)
class McqAnswer:
    """
    MCQ interaction as submitted by the learner.

    ``correct_answer`` is optional; the catalog answer key is used when omitted.
    """

    selected_answer: str
    difficulty: str
    confidence_while_solving: str
    time_spent: int
    correct_answer: str | None = None


@dataclass(frozen=True)
class TablePlacementData:
    cell_text: str
    placed_at_row: int
    placed_at_column: int
    correct_row: int
    correct_column: int
    correct_cell_text: str | None = None


@dataclass(frozen=True)
class TableAnswer:
    """Table quiz interaction as submitted by the learner."""

    user_grid: Sequence[Sequence[str]]
    correct_placements: int
    total_cells: int
    accuracy: int
    difficulty: str
    confidence_while_solving: str
    time_spent: int
    wrong_placements: Sequence[TablePlacementData] = ()


InteractionInput = FlashcardAnswer | McqAnswer | TableAnswer
