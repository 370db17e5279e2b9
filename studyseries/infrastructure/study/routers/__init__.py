from .series import flashcard_series_router, mcq_series_router, table_series_router

__all__ = ["flashcard_series_router", "mcq_series_router", "table_series_router"]
