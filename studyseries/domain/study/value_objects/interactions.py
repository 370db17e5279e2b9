"""
Interaction value objects.

An interaction is the learner's recorded response to one item of a study
session. It is written once and never changed. Each item kind has its own
variant carrying strictly-typed fields; all of them share the difficulty,
confidence and time-spent self-assessment.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import TypeVar

from studyseries.domain.common.exceptions import ValidationError
from studyseries.domain.common.value_object import ValueObject
from studyseries.domain.study.value_objects.enums import (
    AnswerOption,
    Confidence,
    Difficulty,
    FlashcardResult,
)

MAX_ACCURACY = 100

E = TypeVar("E", bound=StrEnum)


def _coerce_enum(enum_type: type[E], value: object, field_name: str) -> E:
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except ValueError as e:
        allowed = ", ".join(member.value for member in enum_type)
        raise ValidationError(
            f"{field_name} must be one of: {allowed}", field=field_name, value=value
        ) from e


def _require_non_negative_int(value: object, field_name: str) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ValidationError(
            f"{field_name} must be a non-negative integer", field=field_name, value=value
        )


@dataclass(frozen=True)
class Score(ValueObject):
    """Points earned out of points possible for one answered item."""

    earned: int
    possible: int

    @property
    def is_full(self) -> bool:
        return self.earned == self.possible


@dataclass(frozen=True)
class Interaction(ValueObject):
    """
    Base class for recorded interactions.

    Subclasses supply ``score()``; an interaction counts as correct when
    its score is full.
    """

    difficulty: Difficulty
    confidence_while_solving: Confidence
    time_spent: int

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "difficulty", _coerce_enum(Difficulty, self.difficulty, "difficulty")
        )
        object.__setattr__(
            self,
            "confidence_while_solving",
            _coerce_enum(Confidence, self.confidence_while_solving, "confidenceWhileSolving"),
        )
        _require_non_negative_int(self.time_spent, "timeSpent")

    def score(self) -> Score:
        raise NotImplementedError


@dataclass(frozen=True)
class FlashcardInteraction(Interaction):
    """Self-graded flashcard answer."""

    result: FlashcardResult

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "result", _coerce_enum(FlashcardResult, self.result, "result"))

    @property
    def is_correct(self) -> bool:
        return self.result is FlashcardResult.RIGHT

    def score(self) -> Score:
        return Score(earned=1 if self.is_correct else 0, possible=1)


@dataclass(frozen=True)
class McqInteraction(Interaction):
    """
    Multiple-choice answer.

    Correctness is decided when the interaction is recorded; the correct
    option itself is not kept.
    """

    selected_answer: AnswerOption
    is_correct: bool

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(
            self,
            "selected_answer",
            _coerce_enum(AnswerOption, self.selected_answer, "selectedAnswer"),
        )
        if not isinstance(self.is_correct, bool):
            raise ValidationError("isCorrect must be a boolean", field="isCorrect")

    @classmethod
    def answer(
        cls,
        selected_answer: str,
        correct_answer: str | None,
        difficulty: str,
        confidence_while_solving: str,
        time_spent: int,
    ) -> "McqInteraction":
        """
        Grade a selected option against the correct one.

        An unknown correct answer (None or anything outside A-E) never
        matches, so the interaction is recorded as incorrect.
        """
        selected = _coerce_enum(AnswerOption, selected_answer, "selectedAnswer")
        return cls(
            difficulty=difficulty,  # type: ignore[arg-type]
            confidence_while_solving=confidence_while_solving,  # type: ignore[arg-type]
            time_spent=time_spent,
            selected_answer=selected,
            is_correct=correct_answer is not None and selected.value == correct_answer,
        )

    def score(self) -> Score:
        return Score(earned=1 if self.is_correct else 0, possible=1)


@dataclass(frozen=True)
class TablePlacement(ValueObject):
    """A cell the learner dropped in the wrong place."""

    cell_text: str
    placed_at_row: int
    placed_at_column: int
    correct_row: int
    correct_column: int
    correct_cell_text: str | None = None

    def __post_init__(self) -> None:
        for name in ("placed_at_row", "placed_at_column", "correct_row", "correct_column"):
            _require_non_negative_int(getattr(self, name), name)


@dataclass(frozen=True)
class TableResults(ValueObject):
    """Grading of a table quiz attempt."""

    correct_placements: int
    total_cells: int
    accuracy: int
    wrong_placements: tuple[TablePlacement, ...] = ()

    def __post_init__(self) -> None:
        _require_non_negative_int(self.correct_placements, "correctPlacements")
        _require_non_negative_int(self.total_cells, "totalCells")
        if self.total_cells < 1:
            raise ValidationError(
                "totalCells must be at least 1", field="totalCells", value=self.total_cells
            )
        if self.correct_placements > self.total_cells:
            raise ValidationError(
                "correctPlacements cannot exceed totalCells",
                field="correctPlacements",
                value=self.correct_placements,
            )
        _require_non_negative_int(self.accuracy, "accuracy")
        if self.accuracy > MAX_ACCURACY:
            raise ValidationError(
                "accuracy must be between 0 and 100", field="accuracy", value=self.accuracy
            )
        object.__setattr__(self, "wrong_placements", tuple(self.wrong_placements))


@dataclass(frozen=True)
class TableInteraction(Interaction):
    """Table quiz attempt: the grid as the learner left it plus its grading."""

    user_grid: tuple[tuple[str, ...], ...]
    results: TableResults

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "user_grid", tuple(tuple(row) for row in self.user_grid))
        if not isinstance(self.results, TableResults):
            raise ValidationError("results are required", field="results")

    @property
    def is_correct(self) -> bool:
        return self.results.correct_placements == self.results.total_cells

    def score(self) -> Score:
        return Score(earned=self.results.correct_placements, possible=self.results.total_cells)
