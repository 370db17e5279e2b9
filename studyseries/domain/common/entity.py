"""
Base class for Entities.

Entities have a distinct identity that runs through time and different
states. Two entities are equal if they have the same identity, regardless
of their attributes.
"""

from abc import ABC
from dataclasses import dataclass
from typing import Generic, Self, TypeVar

from .value_object import ValueObject


@dataclass(frozen=True)
class EntityId(ValueObject):
    """
    Base class for strongly-typed integer identifiers.

    Ids of zero are placeholders for entities that have not been persisted
    yet; the database assigns the real value.
    """

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise TypeError(f"{self.__class__.__name__} must be an integer")
        if self.value < 0:
            raise ValueError(f"{self.__class__.__name__} must be non-negative")

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def generate(cls) -> Self:
        """Set placeholder id. Usually these are set by the database"""
        return cls(0)

    def to_primitive(self) -> int:
        return self.value


IdType = TypeVar("IdType", bound=EntityId)


class Entity(ABC, Generic[IdType]):
    """
    Base class for Entities in the domain model.

    Subclasses must have an 'id' attribute of type IdType and should be
    declared with @dataclass(eq=False) to keep identity-based equality.
    """

    id: IdType

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
