"""Bridge between FastAPI dependencies and the dependency-injector container."""

from collections.abc import Callable
from typing import TypeVar

from dependency_injector.providers import Provider

from studyseries.core import container
from studyseries.database import DatabaseSession

UseCase = TypeVar("UseCase")


def inject_use_case(provider: Provider[UseCase]) -> Callable[[DatabaseSession], UseCase]:
    """
    Wrap a use case provider as a FastAPI dependency.

    Repositories and catalogs built for the use case share the request's
    database session; the override is undone once the use case exists.
    """

    def build(db: DatabaseSession) -> UseCase:
        with container.db.override(db):
            return provider()

    return build
