from .interaction_schemas import (
    FlashcardInteractionRequest,
    InteractionRecordedResponse,
    InteractionRequest,
    InteractionView,
    McqInteractionRequest,
    TableInteractionRequest,
)
from .series_schemas import (
    FilterOptionsResponse,
    FilterOptionsView,
    ItemSummaryView,
    SeriesCreateRequest,
    SeriesCreateResponse,
    SeriesListItem,
    SeriesListResponse,
    SeriesResponse,
    SeriesStatisticsResponse,
    SeriesStatisticsView,
    SeriesView,
    SessionDeleteResponse,
    SessionStartRequest,
    SessionStartResponse,
    SessionView,
)

__all__ = [
    "FilterOptionsResponse",
    "FilterOptionsView",
    "FlashcardInteractionRequest",
    "InteractionRecordedResponse",
    "InteractionRequest",
    "InteractionView",
    "ItemSummaryView",
    "McqInteractionRequest",
    "SeriesCreateRequest",
    "SeriesCreateResponse",
    "SeriesListItem",
    "SeriesListResponse",
    "SeriesResponse",
    "SeriesStatisticsResponse",
    "SeriesStatisticsView",
    "SeriesView",
    "SessionDeleteResponse",
    "SessionStartRequest",
    "SessionStartResponse",
    "SessionView",
    "TableInteractionRequest",
]
