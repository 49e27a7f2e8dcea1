from collections.abc import Callable
from typing import TypeVar

from dependency_injector.providers import Provider

from studytext.core import container
from studytext.database import DatabaseSession

UseCaseT = TypeVar("UseCaseT")


def inject_use_case(provider: Provider[UseCaseT]) -> Callable[[DatabaseSession], UseCaseT]:
    """Turn a container provider into a FastAPI dependency bound to the request session."""

    def build(db: DatabaseSession) -> UseCaseT:
        with container.db.override(db):
            return provider()

    return build
