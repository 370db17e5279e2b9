"""Series aggregate root: the study series and session lifecycle."""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime

from studyseries.domain.common.aggregate_root import AggregateRoot
from studyseries.domain.common.exceptions import ValidationError
from studyseries.domain.common.value_objects.ids import ItemId, SeriesId
from studyseries.domain.study.entities.study_session import SessionItem, StudySession
from studyseries.domain.study.events import (
    InteractionRecorded,
    SeriesCompleted,
    SeriesCreated,
    SessionCompleted,
    SessionDeleted,
    SessionStarted,
)
from studyseries.domain.study.exceptions import (
    ActiveSessionExistsError,
    CompletedSessionDeletionError,
    InteractionKindMismatchError,
    SeriesAlreadyCompletedError,
    SessionNotFoundError,
)
from studyseries.domain.study.item_kind import ItemKind
from studyseries.domain.study.value_objects.enums import ProgressStatus
from studyseries.domain.study.value_objects.interactions import Interaction

MAX_TITLE_LENGTH = 200


def _utcnow() -> datetime:
    return datetime.now(UTC)


def half_up_percentage(part: int, whole: int) -> int:
    """Percentage of ``part`` in ``whole`` rounded half up; 0 when ``whole`` is 0."""
    if whole == 0:
        return 0
    return math.floor(100 * part / whole + 0.5)


def _normalize_title(title: str) -> str:
    if not isinstance(title, str):
        raise ValidationError("Title is required", field="title")
    normalized = title.strip()
    if not normalized:
        raise ValidationError("Title is required", field="title")
    if len(normalized) > MAX_TITLE_LENGTH:
        raise ValidationError(
            f"Title must be between 1 and {MAX_TITLE_LENGTH} characters", field="title"
        )
    return normalized


@dataclass(eq=False)
class Series(AggregateRoot[SeriesId]):
    """
    A named, long-lived container of study sessions over one kind of item.

    Business rules:
    - Title is trimmed, non-empty and at most 200 characters
    - At most one session is active at a time
    - Session numbers are max + 1 and are never reused after a deletion,
      so the highest number ever handed out is remembered
    - Completed sessions are permanent history and cannot be deleted
    - Series completion is caller-driven and independent of session state
    - Status only moves from Active to Completed
    """

    id: SeriesId
    kind: ItemKind
    title: str
    status: ProgressStatus = ProgressStatus.ACTIVE
    sessions: list[StudySession] = field(default_factory=list)
    started_at: datetime = field(default_factory=_utcnow)
    completed_at: datetime | None = None
    # Highest session number ever assigned, deleted sessions included
    last_session_number: int = 0
    # Concurrency token owned by the repository
    version: int = 0

    def __post_init__(self) -> None:
        self.title = _normalize_title(self.title)
        self.sessions.sort(key=lambda s: s.session_number)
        numbers = [s.session_number for s in self.sessions]
        if len(numbers) != len(set(numbers)):
            raise ValidationError("Session numbers must be unique within a series")
        self.last_session_number = max([self.last_session_number, *numbers])

    @classmethod
    def create(cls, kind: ItemKind, title: str) -> "Series":
        """Factory for a new, not yet persisted series."""
        series = cls(id=SeriesId.generate(), kind=kind, title=title)
        series._record_event(SeriesCreated(kind=kind.value, title=series.title))
        return series

    # Queries

    @property
    def is_completed(self) -> bool:
        return self.status is ProgressStatus.COMPLETED

    @property
    def session_count(self) -> int:
        return len(self.sessions)

    def find_session(self, session_number: int) -> StudySession | None:
        return next((s for s in self.sessions if s.session_number == session_number), None)

    def get_session(self, session_number: int) -> StudySession:
        session = self.find_session(session_number)
        if session is None:
            raise SessionNotFoundError(session_number)
        return session

    def active_session(self) -> StudySession | None:
        return next((s for s in self.sessions if s.is_active), None)

    def next_session_number(self) -> int:
        """Greater than every existing number and never a number used before."""
        return self.last_session_number + 1

    def completed_sessions(self) -> list[StudySession]:
        return [s for s in self.sessions if s.is_completed]

    def answered_items(self) -> list[SessionItem]:
        return [item for s in self.sessions for item in s.answered_items]

    def studied_item_ids(self) -> set[int]:
        """Catalog ids used by any session."""
        return {item.item_id.value for s in self.sessions for item in s.items}

    def total_items(self) -> int:
        return sum(len(s.items) for s in self.sessions)

    def total_correct(self) -> int:
        return sum(
            1
            for item in self.answered_items()
            if item.interaction is not None and item.interaction.score().is_full
        )

    def success_rate(self) -> int:
        return half_up_percentage(self.total_correct(), self.total_items())

    def score_totals(self) -> tuple[int, int]:
        """Earned and possible points over answered items (cells for tables)."""
        earned = possible = 0
        for item in self.answered_items():
            if item.interaction is None:
                continue
            score = item.interaction.score()
            earned += score.earned
            possible += score.possible
        return earned, possible

    def score_rate(self) -> int:
        earned, possible = self.score_totals()
        return half_up_percentage(earned, possible)

    # Commands

    def start_session(
        self,
        item_ids: Sequence[int],
        generated_from: int | None = None,
        *,
        auto_complete_active: bool = False,
    ) -> StudySession:
        """
        Start a new session over ``item_ids`` in the supplied order.

        Args:
            item_ids: Catalog ids, already checked against the catalog
            generated_from: Optional provenance reference
            auto_complete_active: Force-complete an existing active session
                instead of rejecting the start

        Raises:
            ValidationError: If item_ids is empty or contains negative ids
            ActiveSessionExistsError: If a session is active and
                auto_complete_active is False
        """
        if not item_ids:
            raise ValidationError("At least one item is required", field="itemIds")
        try:
            items = [SessionItem(item_id=ItemId(item_id)) for item_id in item_ids]
        except (TypeError, ValueError) as e:
            raise ValidationError(
                "Item ids must be non-negative integers", field="itemIds"
            ) from e
        if generated_from is not None and generated_from < 0:
            raise ValidationError(
                "generatedFrom must be a non-negative integer",
                field="generatedFrom",
                value=generated_from,
            )

        now = _utcnow()
        active = self.active_session()
        if active is not None:
            if not auto_complete_active:
                raise ActiveSessionExistsError(active.session_number)
            active.complete(now, force=True)
            self._record_event(
                SessionCompleted(
                    series_id=self.id.value, session_number=active.session_number, forced=True
                )
            )

        session = StudySession(
            session_number=self.next_session_number(),
            items=items,
            generated_from=generated_from,
            started_at=now,
        )
        self.sessions.append(session)
        self.last_session_number = session.session_number
        self._record_event(
            SessionStarted(
                series_id=self.id.value,
                session_number=session.session_number,
                item_count=len(items),
            )
        )
        return session

    def record_interaction(
        self, session_number: int, item_id: int, interaction: Interaction
    ) -> SessionItem:
        """
        Record a write-once interaction for an item of a session.

        Raises:
            SessionNotFoundError: If the session does not exist
            SessionNotActiveError: If the session is completed
            ItemNotInSessionError: If the item is not in the session
            InteractionAlreadyRecordedError: If the item is already answered
            InteractionKindMismatchError: If the payload is of another kind
        """
        session = self.get_session(session_number)
        slot = session.open_slot(item_id, self.kind.item_label)
        if not self.kind.accepts(interaction):
            raise InteractionKindMismatchError(self.kind.value, type(interaction).__name__)
        slot.interaction = interaction
        self._record_event(
            InteractionRecorded(
                series_id=self.id.value,
                session_number=session_number,
                item_id=item_id,
                is_correct=interaction.score().is_full,
            )
        )
        return slot

    def complete_session(self, session_number: int) -> StudySession:
        session = self.get_session(session_number)
        session.complete(_utcnow())
        self._record_event(
            SessionCompleted(series_id=self.id.value, session_number=session_number)
        )
        return session

    def complete(self) -> None:
        if self.is_completed:
            raise SeriesAlreadyCompletedError()
        self.status = ProgressStatus.COMPLETED
        self.completed_at = _utcnow()
        self._record_event(SeriesCompleted(series_id=self.id.value))

    def delete_session(self, session_number: int) -> StudySession:
        """
        Remove an unfinished session. Numbers of other sessions are kept.

        The caller deletes the whole series when this leaves it empty.
        """
        session = self.get_session(session_number)
        if session.is_completed:
            raise CompletedSessionDeletionError()
        self.sessions.remove(session)
        self._record_event(
            SessionDeleted(
                series_id=self.id.value,
                session_number=session_number,
                remaining_sessions=len(self.sessions),
            )
        )
        return session
