"""Identifiers used by the reading domain.

Row ids are assigned by the database; a freshly built entity carries
``unsaved()`` (0) until its repository persists it. Student and summary
ids come from other services and are opaque strings.
"""

from dataclasses import dataclass
from typing import Self


@dataclass(frozen=True)
class _RowId:
    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(f"{type(self).__name__} must be non-negative")

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def unsaved(cls) -> Self:
        return cls(0)


@dataclass(frozen=True)
class _ExternalId:
    value: str

    def __post_init__(self) -> None:
        if not self.value.strip():
            raise ValueError(f"{type(self).__name__} must not be empty")

    def __str__(self) -> str:
        return self.value


class AnnotationId(_RowId):
    """Persisted annotation row id."""


class StudyDocumentId(_RowId):
    """Study document row id."""


class StudentId(_ExternalId):
    """Student id assigned by the identity provider."""


class SummaryId(_ExternalId):
    """Summary id assigned by the content service."""
