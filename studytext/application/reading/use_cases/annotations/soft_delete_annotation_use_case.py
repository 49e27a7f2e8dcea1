"""Use case for soft-deleting annotation records."""

import structlog

from studytext.application.reading.protocols.annotation_repository import (
    AnnotationRepositoryProtocol,
)
from studytext.domain.common.value_objects import AnnotationId
from studytext.domain.reading.entities.persisted_annotation import PersistedAnnotation
from studytext.exceptions import AnnotationNotFoundError

logger = structlog.get_logger(__name__)


class SoftDeleteAnnotationUseCase:
    def __init__(self, annotation_repository: AnnotationRepositoryProtocol) -> None:
        self.annotation_repository = annotation_repository

    def soft_delete(self, annotation_id: int) -> PersistedAnnotation:
        """
        Tombstone an annotation. The record stays in storage.

        Raises:
            AnnotationNotFoundError: If the annotation does not exist
            AnnotationAlreadyDeletedError: If it is already soft-deleted
        """
        annotation = self.annotation_repository.find_by_id(AnnotationId(annotation_id))
        if not annotation:
            raise AnnotationNotFoundError(annotation_id)

        annotation.soft_delete()
        annotation = self.annotation_repository.save(annotation)

        logger.info("soft_deleted_annotation", annotation_id=annotation_id)
        return annotation
