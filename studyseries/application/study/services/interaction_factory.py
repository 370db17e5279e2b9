"""Build interaction value objects from submitted answers."""

from studyseries.application.study.dtos.study_dtos import (
    FlashcardAnswer,
    InteractionInput,
    McqAnswer,
    TableAnswer,
)
from studyseries.application.study.protocols.item_catalog import AnswerKeyProtocol
from studyseries.domain.study.exceptions import InteractionKindMismatchError
from studyseries.domain.study.item_kind import ItemKind
from studyseries.domain.study.value_objects.interactions import (
    FlashcardInteraction,
    Interaction,
    McqInteraction,
    TableInteraction,
    TablePlacement,
    TableResults,
)


class InteractionFactory:
    """Turns a submitted answer into the interaction variant of its item kind."""

    def __init__(self, answer_key: AnswerKeyProtocol) -> None:
        self.answer_key = answer_key

    def build(self, kind: ItemKind, item_id: int, answer: InteractionInput) -> Interaction:
        """
        Build and validate the interaction for ``answer``.

        Raises:
            InteractionKindMismatchError: If the answer belongs to another kind
            ValidationError: If a field is out of range
        """
        if kind is ItemKind.FLASHCARD and isinstance(answer, FlashcardAnswer):
            return FlashcardInteraction(
                difficulty=answer.difficulty,  # type: ignore[arg-type]
                confidence_while_solving=answer.confidence_while_solving,  # type: ignore[arg-type]
                time_spent=answer.time_spent,
                result=answer.result,  # type: ignore[arg-type]
            )
        if kind is ItemKind.MCQ and isinstance(answer, McqAnswer):
            correct_answer = answer.correct_answer
            if correct_answer is None:
                correct_answer = self.answer_key.find_correct_answer(item_id)
            return McqInteraction.answer(
                selected_answer=answer.selected_answer,
                correct_answer=correct_answer,
                difficulty=answer.difficulty,
                confidence_while_solving=answer.confidence_while_solving,
                time_spent=answer.time_spent,
            )
        if kind is ItemKind.TABLE and isinstance(answer, TableAnswer):
            results = TableResults(
                correct_placements=answer.correct_placements,
                total_cells=answer.total_cells,
                accuracy=answer.accuracy,
                wrong_placements=tuple(
                    TablePlacement(
                        cell_text=p.cell_text,
                        placed_at_row=p.placed_at_row,
                        placed_at_column=p.placed_at_column,
                        correct_row=p.correct_row,
                        correct_column=p.correct_column,
                        correct_cell_text=p.correct_cell_text,
                    )
                    for p in answer.wrong_placements
                ),
            )
            return TableInteraction(
                difficulty=answer.difficulty,  # type: ignore[arg-type]
                confidence_while_solving=answer.confidence_while_solving,  # type: ignore[arg-type]
                time_spent=answer.time_spent,
                user_grid=tuple(tuple(row) for row in answer.user_grid),
                results=results,
            )
        raise InteractionKindMismatchError(kind.value, type(answer).__name__)
