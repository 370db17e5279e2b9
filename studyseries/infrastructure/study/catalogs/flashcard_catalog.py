"""Read-only flashcard catalog."""

from collections.abc import Sequence

from sqlalchemy import select

from studyseries.application.study.protocols.item_catalog import ItemSummary
from studyseries.infrastructure.study.catalogs.base_catalog import BaseCatalog
from studyseries.models import Flashcard as FlashcardORM


class FlashcardCatalog(BaseCatalog):
    model = FlashcardORM

    def fetch_summary(self, item_ids: Sequence[int]) -> list[ItemSummary]:
        stmt = select(FlashcardORM).where(FlashcardORM.id.in_(set(item_ids)))
        by_id = {card.id: card for card in self.db.execute(stmt).scalars().all()}
        return [
            ItemSummary(
                item_id=card.id,
                title=card.front_text,
                subject=card.subject,
                chapter=card.chapter,
                details={"backText": card.back_text},
            )
            for card in (by_id.get(item_id) for item_id in item_ids)
            if card is not None
        ]
