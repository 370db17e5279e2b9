"""Read-only multiple-choice question catalog, including its answer key."""

from collections.abc import Sequence

from sqlalchemy import select

from studyseries.application.study.protocols.item_catalog import ItemSummary
from studyseries.domain.study.value_objects.enums import AnswerOption
from studyseries.infrastructure.study.catalogs.base_catalog import BaseCatalog
from studyseries.models import McqQuestion as McqQuestionORM


class McqCatalog(BaseCatalog):
    model = McqQuestionORM

    def fetch_summary(self, item_ids: Sequence[int]) -> list[ItemSummary]:
        stmt = select(McqQuestionORM).where(McqQuestionORM.id.in_(set(item_ids)))
        by_id = {q.id: q for q in self.db.execute(stmt).scalars().all()}
        return [
            ItemSummary(
                item_id=question.id,
                title=question.question,
                subject=question.subject,
                chapter=question.chapter,
                details={"options": dict(question.options or {})},
            )
            for question in (by_id.get(item_id) for item_id in item_ids)
            if question is not None
        ]

    def find_correct_answer(self, item_id: int) -> str | None:
        """Return the answer letter, or None when the question has no known answer."""
        stmt = select(McqQuestionORM.correct_answer).where(McqQuestionORM.id == item_id)
        answer = self.db.execute(stmt).scalar_one_or_none()
        if answer not in {option.value for option in AnswerOption}:
            return None
        return answer
