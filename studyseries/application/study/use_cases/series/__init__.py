from .complete_series_use_case import CompleteSeriesUseCase
from .create_series_use_case import CreateSeriesUseCase
from .delete_series_use_case import DeleteSeriesUseCase
from .get_series_use_case import GetSeriesUseCase
from .list_series_use_case import ListSeriesUseCase

__all__ = [
    "CompleteSeriesUseCase",
    "CreateSeriesUseCase",
    "DeleteSeriesUseCase",
    "GetSeriesUseCase",
    "ListSeriesUseCase",
]
