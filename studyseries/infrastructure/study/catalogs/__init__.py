from .flashcard_catalog import FlashcardCatalog
from .mcq_catalog import McqCatalog
from .table_catalog import TableCatalog

__all__ = ["FlashcardCatalog", "McqCatalog", "TableCatalog"]
