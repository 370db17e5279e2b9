"""Read-only table quiz catalog."""

from collections.abc import Sequence

from sqlalchemy import select

from studyseries.application.study.protocols.item_catalog import ItemSummary
from studyseries.infrastructure.study.catalogs.base_catalog import BaseCatalog
from studyseries.models import TableQuiz as TableQuizORM


class TableCatalog(BaseCatalog):
    model = TableQuizORM

    def fetch_summary(self, item_ids: Sequence[int]) -> list[ItemSummary]:
        stmt = select(TableQuizORM).where(TableQuizORM.id.in_(set(item_ids)))
        by_id = {table.id: table for table in self.db.execute(stmt).scalars().all()}
        return [
            ItemSummary(
                item_id=table.id,
                title=table.name,
                subject=table.subject,
                chapter=table.chapter,
                details={"rows": table.rows, "columns": table.columns},
            )
            for table in (by_id.get(item_id) for item_id in item_ids)
            if table is not None
        ]
