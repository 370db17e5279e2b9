"""
Base class for Aggregate Roots.

An aggregate root is loaded, changed and written back as one unit, and it is
the only object of its cluster that the outside world holds on to.

Example:
    @dataclass(eq=False)
    class Series(AggregateRoot[SeriesId]):
        id: SeriesId
        title: str

        def complete(self) -> None:
            self.status = ProgressStatus.COMPLETED
            self._record_event(SeriesCompleted(series_id=self.id.value))
"""

from dataclasses import dataclass, field
from typing import Generic

from .domain_event import DomainEvent
from .entity import Entity, IdType


@dataclass(eq=False)
class AggregateRoot(Entity[IdType], Generic[IdType]):
    """
    Entity that owns a consistency boundary and the events raised inside it.

    Commands append events with ``_record_event``. Whoever persists the
    aggregate drains them with ``collect_events`` and publishes them only
    after the write went through.
    """

    _events: list[DomainEvent] = field(
        default_factory=list, repr=False, compare=False, kw_only=True
    )

    def _record_event(self, event: DomainEvent) -> None:
        self._events.append(event)

    def collect_events(self) -> list[DomainEvent]:
        """Hand over the recorded events and start a fresh list."""
        events, self._events = self._events, []
        return events

    @property
    def pending_events(self) -> list[DomainEvent]:
        """Recorded events not collected yet, as a copy."""
        return list(self._events)
