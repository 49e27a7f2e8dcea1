from studytext.infrastructure.reading.repositories.annotation_repository import (
    AnnotationRepository,
)
from studytext.infrastructure.reading.repositories.study_document_repository import (
    StudyDocumentRepository,
)

__all__ = ["AnnotationRepository", "StudyDocumentRepository"]
