"""Use case for listing active annotations."""

from studytext.application.reading.protocols.annotation_repository import (
    AnnotationRepositoryProtocol,
)
from studytext.domain.common.value_objects import StudentId, SummaryId
from studytext.domain.reading.entities.persisted_annotation import PersistedAnnotation


class GetActiveAnnotationsUseCase:
    def __init__(self, annotation_repository: AnnotationRepositoryProtocol) -> None:
        self.annotation_repository = annotation_repository

    def list_active(self, student_id: str, summary_id: str) -> list[PersistedAnnotation]:
        """
        Get the student's non-deleted annotations on a summary.

        Tombstoned records are excluded but remain in storage.
        """
        return self.annotation_repository.find_active(StudentId(student_id), SummaryId(summary_id))
