from studytext.infrastructure.reading.schemas.annotation_schemas import (
    Annotation,
    AnnotationCreateRequest,
    AnnotationsResponse,
    AnnotationUpdateRequest,
)
from studytext.infrastructure.reading.schemas.study_document_schemas import (
    StudyAnnotation,
    StudyDocumentPayload,
    StudyDocumentResponse,
)

__all__ = [
    "Annotation",
    "AnnotationCreateRequest",
    "AnnotationUpdateRequest",
    "AnnotationsResponse",
    "StudyAnnotation",
    "StudyDocumentPayload",
    "StudyDocumentResponse",
]
