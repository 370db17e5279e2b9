from .aggregate_root import AggregateRoot
from .domain_event import DomainEvent
from .entity import Entity, EntityId
from .exceptions import ConflictError, DomainError, EntityNotFoundError, ValidationError
from .value_object import ValueObject

__all__ = [
    "AggregateRoot",
    "ConflictError",
    "DomainError",
    "DomainEvent",
    "Entity",
    "EntityId",
    "EntityNotFoundError",
    "ValidationError",
    "ValueObject",
]
