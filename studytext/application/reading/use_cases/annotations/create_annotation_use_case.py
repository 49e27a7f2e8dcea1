"""Use case for creating annotation records."""

import structlog

from studytext.application.reading.protocols.annotation_repository import (
    AnnotationRepositoryProtocol,
)
from studytext.domain.common.value_objects import (
    AnnotationColor,
    AnnotationKind,
    StudentId,
    SummaryId,
)
from studytext.domain.reading.entities.persisted_annotation import PersistedAnnotation

logger = structlog.get_logger(__name__)


class CreateAnnotationUseCase:
    def __init__(self, annotation_repository: AnnotationRepositoryProtocol) -> None:
        self.annotation_repository = annotation_repository

    def create_annotation(
        self,
        student_id: str,
        summary_id: str,
        original_text: str,
        display_text: str | None = None,
        color: AnnotationColor | None = None,
        note: str | None = None,
        kind: AnnotationKind | None = None,
        bot_reply: str | None = None,
    ) -> PersistedAnnotation:
        """
        Create a new annotation record. Always succeeds for valid input.

        Args:
            student_id: Owner of the annotation
            summary_id: Summary the text belongs to
            original_text: Exact annotated text
            display_text: Optional display text (derived when missing)
            color: Optional highlighter color (yellow when missing)
            note: Optional note or question body
            kind: Optional annotation kind (highlight when missing)
            bot_reply: Optional assistant reply

        Returns:
            Created annotation with deleted_at unset

        Raises:
            ValidationError: If original_text is empty
            ValueError: If student_id or summary_id is empty
        """
        annotation = PersistedAnnotation.create(
            student_id=StudentId(student_id),
            summary_id=SummaryId(summary_id),
            original_text=original_text,
            display_text=display_text,
            color=color,
            note=note,
            kind=kind,
            bot_reply=bot_reply,
        )
        annotation = self.annotation_repository.save(annotation)

        logger.info(
            "created_annotation",
            annotation_id=annotation.id.value,
            summary_id=summary_id,
            color=annotation.color.value,
            kind=annotation.kind.value,
        )
        return annotation
