"""Use case for restoring soft-deleted annotation records."""

import structlog

from studytext.application.reading.protocols.annotation_repository import (
    AnnotationRepositoryProtocol,
)
from studytext.domain.common.value_objects import AnnotationId
from studytext.domain.reading.entities.persisted_annotation import PersistedAnnotation
from studytext.exceptions import AnnotationNotFoundError

logger = structlog.get_logger(__name__)


class RestoreAnnotationUseCase:
    def __init__(self, annotation_repository: AnnotationRepositoryProtocol) -> None:
        self.annotation_repository = annotation_repository

    def restore(self, annotation_id: int) -> PersistedAnnotation:
        """
        Clear an annotation's tombstone so it is active again.

        Raises:
            AnnotationNotFoundError: If the annotation does not exist
            AnnotationNotDeletedError: If it is not currently deleted
        """
        annotation = self.annotation_repository.find_by_id(AnnotationId(annotation_id))
        if not annotation:
            raise AnnotationNotFoundError(annotation_id)

        annotation.restore()
        annotation = self.annotation_repository.save(annotation)

        logger.info("restored_annotation", annotation_id=annotation_id)
        return annotation
