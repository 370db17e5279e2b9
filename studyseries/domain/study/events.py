"""Domain events recorded by the Series aggregate."""

from dataclasses import dataclass

from studyseries.domain.common.domain_event import DomainEvent


@dataclass(frozen=True)
class SeriesCreated(DomainEvent):
    kind: str
    title: str


@dataclass(frozen=True)
class SessionStarted(DomainEvent):
    series_id: int
    session_number: int
    item_count: int


@dataclass(frozen=True)
class InteractionRecorded(DomainEvent):
    series_id: int
    session_number: int
    item_id: int
    is_correct: bool


@dataclass(frozen=True)
class SessionCompleted(DomainEvent):
    series_id: int
    session_number: int
    forced: bool = False


@dataclass(frozen=True)
class SessionDeleted(DomainEvent):
    series_id: int
    session_number: int
    remaining_sessions: int


@dataclass(frozen=True)
class SeriesCompleted(DomainEvent):
    series_id: int
