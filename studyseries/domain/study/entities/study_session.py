"""StudySession entity, owned by the Series aggregate."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from studyseries.domain.common.exceptions import ValidationError
from studyseries.domain.common.value_objects.ids import ItemId
from studyseries.domain.study.exceptions import (
    InteractionAlreadyRecordedError,
    ItemNotInSessionError,
    SessionAlreadyCompletedError,
    SessionNotActiveError,
    UnansweredItemsError,
)
from studyseries.domain.study.value_objects.enums import ProgressStatus
from studyseries.domain.study.value_objects.interactions import Interaction


@dataclass
class SessionItem:
    """One slot of a session. Duplicated item ids get independent slots."""

    item_id: ItemId
    interaction: Interaction | None = None

    @property
    def is_answered(self) -> bool:
        return self.interaction is not None


@dataclass
class StudySession:
    """
    A single timed attempt at a fixed list of items.

    Business rules:
    - Items are fixed when the session starts
    - Each item slot takes exactly one interaction, which is never replaced
    - Interactions are only accepted while the session is active
    - A session completes only once every slot is answered, unless forced
    """

    session_number: int
    items: list[SessionItem]
    status: ProgressStatus = ProgressStatus.ACTIVE
    generated_from: int | None = None
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    completed_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.session_number < 1:
            raise ValidationError(
                "Session number must be positive", field="sessionNumber", value=self.session_number
            )
        if self.generated_from is not None and self.generated_from < 0:
            raise ValidationError(
                "generatedFrom must be a non-negative integer",
                field="generatedFrom",
                value=self.generated_from,
            )

    @property
    def is_active(self) -> bool:
        return self.status is ProgressStatus.ACTIVE

    @property
    def is_completed(self) -> bool:
        return self.status is ProgressStatus.COMPLETED

    @property
    def item_ids(self) -> list[ItemId]:
        return [item.item_id for item in self.items]

    @property
    def answered_items(self) -> list[SessionItem]:
        return [item for item in self.items if item.is_answered]

    @property
    def unanswered_count(self) -> int:
        return sum(1 for item in self.items if not item.is_answered)

    def open_slot(self, item_id: int, item_label: str) -> SessionItem:
        """
        Return the first unanswered slot for ``item_id``.

        Raises:
            SessionNotActiveError: If the session is completed
            ItemNotInSessionError: If the item is not part of the session
            InteractionAlreadyRecordedError: If every slot for the item is answered
        """
        if not self.is_active:
            raise SessionNotActiveError()

        slots = [item for item in self.items if item.item_id.value == item_id]
        if not slots:
            raise ItemNotInSessionError(item_label, item_id)

        slot = next((item for item in slots if not item.is_answered), None)
        if slot is None:
            raise InteractionAlreadyRecordedError()
        return slot

    def complete(self, now: datetime, *, force: bool = False) -> None:
        if self.is_completed:
            raise SessionAlreadyCompletedError()
        if not force and self.unanswered_count:
            raise UnansweredItemsError(self.unanswered_count)
        self.status = ProgressStatus.COMPLETED
        self.completed_at = now
