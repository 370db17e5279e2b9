from .study_dtos import (
    FlashcardAnswer,
    InteractionInput,
    McqAnswer,
    MutationOutcome,
    RecordedInteraction,
    SeriesListEntry,
    SeriesPage,
    SeriesStatistics,
    SessionDeletion,
    StartedSession,
    TableAnswer,
    TablePlacementData,
)

__all__ = [
    "FlashcardAnswer",
    "InteractionInput",
    "McqAnswer",
    "MutationOutcome",
    "RecordedInteraction",
    "SeriesListEntry",
    "SeriesPage",
    "SeriesStatistics",
    "SessionDeletion",
    "StartedSession",
    "TableAnswer",
    "TablePlacementData",
]
