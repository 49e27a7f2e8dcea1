from studytext.application.reading.use_cases.annotations.create_annotation_use_case import (
    CreateAnnotationUseCase,
)
from studytext.application.reading.use_cases.annotations.get_active_annotations_use_case import (
    GetActiveAnnotationsUseCase,
)
from studytext.application.reading.use_cases.annotations.restore_annotation_use_case import (
    RestoreAnnotationUseCase,
)
from studytext.application.reading.use_cases.annotations.soft_delete_annotation_use_case import (
    SoftDeleteAnnotationUseCase,
)
from studytext.application.reading.use_cases.annotations.update_annotation_use_case import (
    AnnotationPatch,
    UpdateAnnotationUseCase,
)

__all__ = [
    "AnnotationPatch",
    "CreateAnnotationUseCase",
    "GetActiveAnnotationsUseCase",
    "RestoreAnnotationUseCase",
    "SoftDeleteAnnotationUseCase",
    "UpdateAnnotationUseCase",
]
