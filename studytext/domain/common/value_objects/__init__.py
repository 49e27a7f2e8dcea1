"""Common value objects shared across all domain modules."""

from .annotation_style import AnnotationColor, AnnotationKind, MasteryLevel
from .ids import AnnotationId, StudentId, StudyDocumentId, SummaryId
from .text_span import SpanKind, TextSpan

__all__ = [
    # IDs
    "AnnotationId",
    "StudentId",
    "StudyDocumentId",
    "SummaryId",
    # Styles
    "AnnotationColor",
    "AnnotationKind",
    "MasteryLevel",
    # Spans
    "SpanKind",
    "TextSpan",
]
