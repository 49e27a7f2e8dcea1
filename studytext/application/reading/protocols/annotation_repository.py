from typing import Protocol

from studytext.domain.common.value_objects import AnnotationId, StudentId, SummaryId
from studytext.domain.reading.entities.persisted_annotation import PersistedAnnotation


class AnnotationRepositoryProtocol(Protocol):
    """Tombstone-only store: there is deliberately no delete method."""

    def find_by_id(self, annotation_id: AnnotationId) -> PersistedAnnotation | None: ...

    def find_active(
        self, student_id: StudentId, summary_id: SummaryId
    ) -> list[PersistedAnnotation]: ...

    def save(self, annotation: PersistedAnnotation) -> PersistedAnnotation: ...
