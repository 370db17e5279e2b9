"""Queries shared by the item catalogs."""

from collections.abc import Sequence
from typing import ClassVar

from sqlalchemy import select
from sqlalchemy.orm import InstrumentedAttribute, Session

from studyseries.application.study.protocols.item_catalog import FilterOptions
from studyseries.models import Flashcard, McqQuestion, TableQuiz


def _distinct_labels(db: Session, column: InstrumentedAttribute[str | None]) -> list[str]:
    values = db.execute(select(column).where(column.is_not(None)).distinct()).scalars()
    return sorted({value for value in values if value and value.strip()})


class BaseCatalog:
    """Lookups by id and by subject, chapter and section over one catalog table."""

    model: ClassVar[type[Flashcard | McqQuestion | TableQuiz]]

    def __init__(self, db: Session) -> None:
        self.db = db

    def exists(self, item_ids: Sequence[int]) -> set[int]:
        stmt = select(self.model.id).where(self.model.id.in_(set(item_ids)))
        return set(self.db.execute(stmt).scalars().all())

    def ids_matching(
        self,
        subject: str | None = None,
        chapter: str | None = None,
        section: str | None = None,
    ) -> set[int]:
        stmt = select(self.model.id)
        for column, fragment in (
            (self.model.subject, subject),
            (self.model.chapter, chapter),
            (self.model.section, section),
        ):
            if fragment:
                stmt = stmt.where(column.icontains(fragment, autoescape=True))
        return set(self.db.execute(stmt).scalars().all())

    def filter_options(self) -> FilterOptions:
        return FilterOptions(
            subjects=_distinct_labels(self.db, self.model.subject),
            chapters=_distinct_labels(self.db, self.model.chapter),
            sections=_distinct_labels(self.db, self.model.section),
        )
