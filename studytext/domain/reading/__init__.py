"""Reading module: keyword spans, annotations and study documents."""

from studytext.domain.reading.entities import (
    CompositeStudyDocument,
    KeywordTerm,
    PersistedAnnotation,
    StudyDocument,
    TextAnnotation,
)

__all__ = [
    "CompositeStudyDocument",
    "KeywordTerm",
    "PersistedAnnotation",
    "StudyDocument",
    "TextAnnotation",
]
