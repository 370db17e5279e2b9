from .complete_session_use_case import CompleteSessionUseCase
from .delete_session_use_case import DeleteSessionUseCase
from .record_interaction_use_case import RecordInteractionUseCase
from .start_session_use_case import StartSessionUseCase

__all__ = [
    "CompleteSessionUseCase",
    "DeleteSessionUseCase",
    "RecordInteractionUseCase",
    "StartSessionUseCase",
]
