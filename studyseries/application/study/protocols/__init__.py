from .item_catalog import AnswerKeyProtocol, FilterOptions, ItemCatalogProtocol, ItemSummary
from .series_repository import SeriesFilter, SeriesRepositoryProtocol

__all__ = [
    "AnswerKeyProtocol",
    "FilterOptions",
    "ItemCatalogProtocol",
    "ItemSummary",
    "SeriesFilter",
    "SeriesRepositoryProtocol",
]
