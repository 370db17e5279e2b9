from .enums import AnswerOption, Confidence, Difficulty, FlashcardResult, ProgressStatus
from .interactions import (
    FlashcardInteraction,
    Interaction,
    McqInteraction,
    Score,
    TableInteraction,
    TablePlacement,
    TableResults,
)

__all__ = [
    "AnswerOption",
    "Confidence",
    "Difficulty",
    "FlashcardInteraction",
    "FlashcardResult",
    "Interaction",
    "McqInteraction",
    "ProgressStatus",
    "Score",
    "TableInteraction",
    "TablePlacement",
    "TableResults",
]
