"""
Item kinds and their capabilities.

The series lifecycle is the same for every kind of study material. A kind
only decides which interaction variant it accepts; scoring lives on the
interaction itself.
"""

from enum import StrEnum

from studyseries.domain.study.value_objects.interactions import (
    FlashcardInteraction,
    Interaction,
    McqInteraction,
    TableInteraction,
)


class ItemKind(StrEnum):
    FLASHCARD = "flashcard"
    MCQ = "mcq"
    TABLE = "table"

    @property
    def interaction_type(self) -> type[Interaction]:
        return _INTERACTION_TYPES[self]

    @property
    def item_label(self) -> str:
        """Human-readable name of one catalog item, used in messages."""
        return _ITEM_LABELS[self]

    def accepts(self, interaction: Interaction) -> bool:
        return isinstance(interaction, self.interaction_type)


_INTERACTION_TYPES: dict[ItemKind, type[Interaction]] = {
    ItemKind.FLASHCARD: FlashcardInteraction,
    ItemKind.MCQ: McqInteraction,
    ItemKind.TABLE: TableInteraction,
}

_ITEM_LABELS: dict[ItemKind, str] = {
    ItemKind.FLASHCARD: "Card",
    ItemKind.MCQ: "Question",
    ItemKind.TABLE: "Table",
}
