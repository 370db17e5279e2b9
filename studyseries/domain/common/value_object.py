"""
Base class for Value Objects.

A value object has no identity: two instances with the same attributes are
interchangeable. Interactions, scores and typed ids are value objects.

Example:
    @dataclass(frozen=True)
    class Score(ValueObject):
        earned: int
        possible: int
"""

from typing import Any


class ValueObject:
    """
    Immutable, attribute-compared domain value.

    Declare subclasses with ``@dataclass(frozen=True)`` and check their
    arguments in ``__post_init__``. Sequences are kept as tuples so every
    value object can be hashed and used as a dict key.
    """

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and vars(self) == vars(other)

    def __hash__(self) -> int:
        return hash((type(self), *vars(self).values()))

    def to_primitive(self) -> Any:
        """
        Plain Python form used when events and documents are serialized.

        A value object with a single attribute collapses to that attribute.
        """
        attributes = vars(self)
        if len(attributes) == 1:
            (only,) = attributes.values()
            return only
        return dict(attributes)
