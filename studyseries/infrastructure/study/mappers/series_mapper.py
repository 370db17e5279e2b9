"""Mapper between the Series aggregate and its study_series row."""

from datetime import UTC, datetime
from typing import Any

from studyseries.domain.common.value_objects.ids import ItemId, SeriesId
from studyseries.domain.study.entities.series import Series
from studyseries.domain.study.entities.study_session import SessionItem, StudySession
from studyseries.domain.study.item_kind import ItemKind
from studyseries.domain.study.value_objects.enums import ProgressStatus
from studyseries.domain.study.value_objects.interactions import (
    FlashcardInteraction,
    Interaction,
    McqInteraction,
    TableInteraction,
    TablePlacement,
    TableResults,
)
from studyseries.models import StudySeries as StudySeriesORM


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _parse_datetime(value: str | None) -> datetime | None:
    if value is None:
        return None
    return _as_utc(datetime.fromisoformat(value))


def _format_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


class SeriesMapper:
    """
    Convert between the Series aggregate and the ORM row.

    Sessions are stored as a JSON document in the ``sessions`` column.
    Document keys use camelCase so the stored data matches the API.
    """

    def to_domain(self, orm_model: StudySeriesORM) -> Series:
        return Series(
            id=SeriesId(orm_model.id),
            kind=ItemKind(orm_model.kind),
            title=orm_model.title,
            status=ProgressStatus(orm_model.status),
            sessions=[self._session_to_domain(doc) for doc in orm_model.sessions or []],
            started_at=_as_utc(orm_model.started_at),
            completed_at=_as_utc(orm_model.completed_at) if orm_model.completed_at else None,
            last_session_number=orm_model.last_session_number,
            version=orm_model.version,
        )

    def to_orm(self, series: Series) -> StudySeriesORM:
        """Build a new ORM row. The database assigns the id."""
        return StudySeriesORM(
            kind=series.kind.value,
            title=series.title,
            status=series.status.value,
            sessions=self.sessions_to_document(series),
            started_at=series.started_at,
            completed_at=series.completed_at,
            last_session_number=series.last_session_number,
            version=1,
        )

    def sessions_to_document(self, series: Series) -> list[dict[str, Any]]:
        return [self._session_to_document(session) for session in series.sessions]

    def _session_to_document(self, session: StudySession) -> dict[str, Any]:
        return {
            "sessionNumber": session.session_number,
            "status": session.status.value,
            "generatedFrom": session.generated_from,
            "startedAt": _format_datetime(session.started_at),
            "completedAt": _format_datetime(session.completed_at),
            "items": [
                {
                    "itemId": item.item_id.value,
                    "interaction": self._interaction_to_document(item.interaction),
                }
                for item in session.items
            ],
        }

    def _session_to_domain(self, doc: dict[str, Any]) -> StudySession:
        started_at = _parse_datetime(doc.get("startedAt"))
        return StudySession(
            session_number=doc["sessionNumber"],
            status=ProgressStatus(doc["status"]),
            generated_from=doc.get("generatedFrom"),
            started_at=started_at or datetime.now(UTC),
            completed_at=_parse_datetime(doc.get("completedAt")),
            items=[
                SessionItem(
                    item_id=ItemId(item["itemId"]),
                    interaction=self._interaction_to_domain(item.get("interaction")),
                )
                for item in doc.get("items", [])
            ],
        )

    def _interaction_to_document(self, interaction: Interaction | None) -> dict[str, Any] | None:
        if interaction is None:
            return None
        doc: dict[str, Any] = {
            "difficulty": interaction.difficulty.value,
            "confidenceWhileSolving": interaction.confidence_while_solving.value,
            "timeSpent": interaction.time_spent,
        }
        if isinstance(interaction, FlashcardInteraction):
            doc["type"] = "flashcard"
            doc["result"] = interaction.result.value
        elif isinstance(interaction, McqInteraction):
            doc["type"] = "mcq"
            doc["selectedAnswer"] = interaction.selected_answer.value
            doc["isCorrect"] = interaction.is_correct
        elif isinstance(interaction, TableInteraction):
            results = interaction.results
            doc["type"] = "table"
            doc["userGrid"] = [list(row) for row in interaction.user_grid]
            doc["results"] = {
                "correctPlacements": results.correct_placements,
                "totalCells": results.total_cells,
                "accuracy": results.accuracy,
                "wrongPlacements": [
                    {
                        "cellText": p.cell_text,
                        "placedAt": {"row": p.placed_at_row, "column": p.placed_at_column},
                        "correctPosition": {"row": p.correct_row, "column": p.correct_column},
                        "correctCellText": p.correct_cell_text,
                    }
                    for p in results.wrong_placements
                ],
            }
        else:
            raise TypeError(f"Unsupported interaction type: {type(interaction).__name__}")
        return doc

    def _interaction_to_domain(self, doc: dict[str, Any] | None) -> Interaction | None:
        if doc is None:
            return None
        common = {
            "difficulty": doc["difficulty"],
            "confidence_while_solving": doc["confidenceWhileSolving"],
            "time_spent": doc["timeSpent"],
        }
        interaction_type = doc["type"]
        if interaction_type == "flashcard":
            return FlashcardInteraction(**common, result=doc["result"])
        if interaction_type == "mcq":
            return McqInteraction(
                **common, selected_answer=doc["selectedAnswer"], is_correct=doc["isCorrect"]
            )
        if interaction_type == "table":
            results = doc["results"]
            return TableInteraction(
                **common,
                user_grid=tuple(tuple(row) for row in doc["userGrid"]),
                results=TableResults(
                    correct_placements=results["correctPlacements"],
                    total_cells=results["totalCells"],
                    accuracy=results["accuracy"],
                    wrong_placements=tuple(
                        TablePlacement(
                            cell_text=p["cellText"],
                            placed_at_row=p["placedAt"]["row"],
                            placed_at_column=p["placedAt"]["column"],
                            correct_row=p["correctPosition"]["row"],
                            correct_column=p["correctPosition"]["column"],
                            correct_cell_text=p.get("correctCellText"),
                        )
                        for p in results.get("wrongPlacements", [])
                    ),
                ),
            )
        raise ValueError(f"Unknown interaction type in stored session: {interaction_type}")
