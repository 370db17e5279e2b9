"""Pydantic schemas for interaction payloads, one request schema per item kind."""

from pydantic import AliasChoices, Field, NonNegativeInt

from studyseries.application.study.dtos.study_dtos import (
    FlashcardAnswer,
    McqAnswer,
    TableAnswer,
    TablePlacementData,
)
from studyseries.domain.study.value_objects.enums import (
    AnswerOption,
    Confidence,
    Difficulty,
    FlashcardResult,
)
from studyseries.domain.study.value_objects.interactions import (
    FlashcardInteraction,
    Interaction,
    McqInteraction,
    TableInteraction,
)
from studyseries.infrastructure.common.schemas.response_wrappers import (
    CamelModel,
    SuccessResponse,
)


class SelfAssessment(CamelModel):
    """Fields shared by every interaction request."""

    difficulty: Difficulty = Field(..., description="How hard the item felt")
    confidence_while_solving: Confidence = Field(..., description="Confidence while answering")
    time_spent: NonNegativeInt = Field(..., description="Seconds spent on the item")


class FlashcardInteractionRequest(SelfAssessment):
    item_id: NonNegativeInt = Field(
        ..., validation_alias=AliasChoices("itemId", "item_id", "cardId")
    )
    result: FlashcardResult

    def to_answer(self) -> FlashcardAnswer:
        return FlashcardAnswer(
            result=self.result.value,
            difficulty=self.difficulty.value,
            confidence_while_solving=self.confidence_while_solving.value,
            time_spent=self.time_spent,
        )


class McqInteractionRequest(SelfAssessment):
    item_id: NonNegativeInt = Field(
        ..., validation_alias=AliasChoices("itemId", "item_id", "questionId")
    )
    selected_answer: AnswerOption
    correct_answer: AnswerOption | None = Field(
        None, description="Correct option; looked up in the catalog when omitted"
    )

    def to_answer(self) -> McqAnswer:
        return McqAnswer(
            selected_answer=self.selected_answer.value,
            correct_answer=self.correct_answer.value if self.correct_answer else None,
            difficulty=self.difficulty.value,
            confidence_while_solving=self.confidence_while_solving.value,
            time_spent=self.time_spent,
        )


class GridPosition(CamelModel):
    row: NonNegativeInt
    column: NonNegativeInt


class TablePlacementSchema(CamelModel):
    cell_text: str
    placed_at: GridPosition
    correct_position: GridPosition
    correct_cell_text: str | None = None


class TableResultsSchema(CamelModel):
    correct_placements: NonNegativeInt
    total_cells: int = Field(..., ge=1)
    accuracy: int = Field(..., ge=0, le=100)
    wrong_placements: list[TablePlacementSchema] = Field(default_factory=list)


class TableInteractionRequest(SelfAssessment):
    item_id: NonNegativeInt = Field(
        ..., validation_alias=AliasChoices("itemId", "item_id", "tableId")
    )
    user_grid: list[list[str]] = Field(..., description="Cell texts as placed, row by row")
    results: TableResultsSchema

    def to_answer(self) -> TableAnswer:
        return TableAnswer(
            user_grid=self.user_grid,
            correct_placements=self.results.correct_placements,
            total_cells=self.results.total_cells,
            accuracy=self.results.accuracy,
            wrong_placements=[
                TablePlacementData(
                    cell_text=p.cell_text,
                    placed_at_row=p.placed_at.row,
                    placed_at_column=p.placed_at.column,
                    correct_row=p.correct_position.row,
                    correct_column=p.correct_position.column,
                    correct_cell_text=p.correct_cell_text,
                )
                for p in self.results.wrong_placements
            ],
            difficulty=self.difficulty.value,
            confidence_while_solving=self.confidence_while_solving.value,
            time_spent=self.time_spent,
        )


InteractionRequest = FlashcardInteractionRequest | McqInteractionRequest | TableInteractionRequest


class InteractionView(CamelModel):
    """A recorded interaction as returned inside a series document."""

    difficulty: Difficulty
    confidence_while_solving: Confidence
    time_spent: int
    is_correct: bool
    result: FlashcardResult | None = None
    selected_answer: AnswerOption | None = None
    user_grid: list[list[str]] | None = None
    results: TableResultsSchema | None = None


def interaction_view(interaction: Interaction | None) -> InteractionView | None:
    if interaction is None:
        return None
    view = InteractionView(
        difficulty=interaction.difficulty,
        confidence_while_solving=interaction.confidence_while_solving,
        time_spent=interaction.time_spent,
        is_correct=interaction.score().is_full,
    )
    if isinstance(interaction, FlashcardInteraction):
        view.result = interaction.result
    elif isinstance(interaction, McqInteraction):
        view.selected_answer = interaction.selected_answer
    elif isinstance(interaction, TableInteraction):
        results = interaction.results
        view.user_grid = [list(row) for row in interaction.user_grid]
        view.results = TableResultsSchema(
            correct_placements=results.correct_placements,
            total_cells=results.total_cells,
            accuracy=results.accuracy,
            wrong_placements=[
                TablePlacementSchema(
                    cell_text=p.cell_text,
                    placed_at=GridPosition(row=p.placed_at_row, column=p.placed_at_column),
                    correct_position=GridPosition(row=p.correct_row, column=p.correct_column),
                    correct_cell_text=p.correct_cell_text,
                )
                for p in results.wrong_placements
            ],
        )
    return view


class InteractionRecordedResponse(SuccessResponse):
    """Correctness summary of a recorded interaction; fields depend on the item kind."""

    is_correct: bool
    result: FlashcardResult | None = None
    selected_answer: AnswerOption | None = None
    accuracy: int | None = None
    correct_placements: int | None = None
    total_cells: int | None = None

    @classmethod
    def from_interaction(
        cls, interaction: Interaction, message: str
    ) -> "InteractionRecordedResponse":
        response = cls(success=True, message=message, is_correct=interaction.score().is_full)
        if isinstance(interaction, FlashcardInteraction):
            response.result = interaction.result
        elif isinstance(interaction, McqInteraction):
            response.selected_answer = interaction.selected_answer
        elif isinstance(interaction, TableInteraction):
            response.accuracy = interaction.results.accuracy
            response.correct_placements = interaction.results.correct_placements
            response.total_cells = interaction.results.total_cells
        return response
