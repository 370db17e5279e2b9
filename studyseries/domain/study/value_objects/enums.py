"""Enumerations shared by the study context."""

from enum import StrEnum


class ProgressStatus(StrEnum):
    """Lifecycle status of a series or session. Only moves from Active to Completed."""

    ACTIVE = "active"
    COMPLETED = "completed"


class Difficulty(StrEnum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class Confidence(StrEnum):
    HIGH = "High"
    LOW = "Low"


class FlashcardResult(StrEnum):
    RIGHT = "Right"
    WRONG = "Wrong"


class AnswerOption(StrEnum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
