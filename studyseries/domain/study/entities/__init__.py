from .series import Series
from .study_session import SessionItem, StudySession

__all__ = ["Series", "SessionItem", "StudySession"]
