from .series_repository import SeriesRepository

__all__ = ["SeriesRepository"]
