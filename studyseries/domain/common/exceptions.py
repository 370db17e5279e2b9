"""
Domain layer exceptions.

Raised when a business rule is broken. The web layer maps the three
families to status codes: ValidationError to 400, EntityNotFoundError to
404 and ConflictError to 409.
"""


class DomainError(Exception):
    """
    Root of every domain error.

    ``details`` is merged into the JSON error body next to ``message``, so
    its keys are camelCase and its values must be JSON-serializable.
    """

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, object] = dict(details or {})

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value!r}" for key, value in self.details.items())
        return f"{self.message} ({context})"


class ValidationError(DomainError):
    """
    Input rejected by a domain rule, e.g. a blank title.

    The offending field is reported to the client; the rejected value is only
    kept on the exception.
    """

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        super().__init__(message, {"field": field} if field else None)
        self.field = field
        self.value = value


class EntityNotFoundError(DomainError):
    def __init__(
        self, entity_type: str, entity_id: object, *, message: str | None = None
    ) -> None:
        super().__init__(message or f"{entity_type} {entity_id} not found")
        self.entity_type = entity_type
        self.entity_id = entity_id


class ConflictError(DomainError):
    """The aggregate's current state does not allow the operation."""
