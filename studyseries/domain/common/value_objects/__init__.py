from .ids import ItemId, SeriesId

__all__ = ["ItemId", "SeriesId"]
