"""Exceptions raised by the study series lifecycle."""

from collections.abc import Iterable

from studyseries.domain.common.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ValidationError,
)


class SeriesNotFoundError(EntityNotFoundError):
    def __init__(self, series_id: int) -> None:
        super().__init__("Series", series_id, message="Series not found")


class SessionNotFoundError(EntityNotFoundError):
    def __init__(self, session_number: int) -> None:
        super().__init__("Session", session_number, message="Session not found")


class ItemNotInSessionError(EntityNotFoundError):
    def __init__(self, item_label: str, item_id: int) -> None:
        super().__init__(item_label, item_id, message=f"{item_label} not found in session")


class UnknownCatalogItemsError(EntityNotFoundError):
    """Raised when some requested item ids are not in the catalog."""

    def __init__(self, item_label: str, missing_ids: Iterable[int]) -> None:
        missing = sorted(set(missing_ids))
        super().__init__(
            item_label,
            missing,
            message=f"Some {item_label.lower()}s were not found",
        )
        self.missing_ids = missing
        self.details["missingItemIds"] = missing


class ActiveSessionExistsError(ConflictError):
    def __init__(self, session_number: int) -> None:
        super().__init__(
            "An active session already exists for this series",
            {"activeSessionId": session_number},
        )
        self.session_number = session_number


class SessionNotActiveError(ConflictError):
    def __init__(self) -> None:
        super().__init__("Cannot record interaction on completed session")


class InteractionAlreadyRecordedError(ConflictError):
    def __init__(self) -> None:
        super().__init__("Interaction already recorded for this item")


class SessionAlreadyCompletedError(ConflictError):
    def __init__(self) -> None:
        super().__init__("Session already completed")


class CompletedSessionDeletionError(ConflictError):
    def __init__(self) -> None:
        super().__init__("Cannot delete completed session")


class SeriesAlreadyCompletedError(ConflictError):
    def __init__(self) -> None:
        super().__init__("Series already completed")


class UnansweredItemsError(ValidationError):
    def __init__(self, unanswered_count: int) -> None:
        super().__init__("Cannot complete session with unanswered items")
        self.unanswered_count = unanswered_count
        self.details["unansweredCount"] = unanswered_count


class InteractionKindMismatchError(ValidationError):
    def __init__(self, expected: str, received: str) -> None:
        super().__init__(
            f"Interaction payload does not match {expected} series",
            field="interaction",
            value=received,
        )
