"""Use case for partially updating an annotation record."""

from dataclasses import dataclass

import structlog

from studytext.application.reading.protocols.annotation_repository import (
    AnnotationRepositoryProtocol,
)
from studytext.domain.common.value_objects import AnnotationColor, AnnotationId, AnnotationKind
from studytext.domain.reading.entities.persisted_annotation import PersistedAnnotation
from studytext.exceptions import AnnotationNotFoundError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class AnnotationPatch:
    """Fields to change; None means unchanged."""

    note: str | None = None
    color: AnnotationColor | None = None
    kind: AnnotationKind | None = None
    bot_reply: str | None = None
    display_text: str | None = None


class UpdateAnnotationUseCase:
    def __init__(self, annotation_repository: AnnotationRepositoryProtocol) -> None:
        self.annotation_repository = annotation_repository

    def update_annotation(self, annotation_id: int, patch: AnnotationPatch) -> PersistedAnnotation:
        """
        Apply a partial update to an annotation.

        Raises:
            AnnotationNotFoundError: If the annotation does not exist
            AnnotationDeletedError: If the annotation is soft-deleted
        """
        annotation = self.annotation_repository.find_by_id(AnnotationId(annotation_id))
        if not annotation:
            raise AnnotationNotFoundError(annotation_id)

        annotation.update(
            note=patch.note,
            color=patch.color,
            kind=patch.kind,
            bot_reply=patch.bot_reply,
            display_text=patch.display_text,
        )
        annotation = self.annotation_repository.save(annotation)

        logger.info("updated_annotation", annotation_id=annotation_id)
        return annotation
