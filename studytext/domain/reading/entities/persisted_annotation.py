"""
PersistedAnnotation aggregate root.

Server-side record of a text annotation. Encapsulates the tombstone
rules: records are soft-deleted and restored, never removed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from studytext.domain.common.value_objects import (
    AnnotationColor,
    AnnotationId,
    AnnotationKind,
    StudentId,
    SummaryId,
)
from studytext.domain.reading.entities.text_annotation import truncate_display_text
from studytext.domain.reading.exceptions import (
    AnnotationAlreadyDeletedError,
    AnnotationDeletedError,
    AnnotationNotDeletedError,
    ValidationError,
)


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass
class PersistedAnnotation:
    """
    Persisted annotation aggregate root.

    Business Rules:
    - Cannot have empty original text
    - Soft deletion only: deleted_at is a tombstone, the record stays stored
    - A tombstoned record cannot be edited until it is restored
    - Every state change bumps updated_at
    """

    # Identity
    id: AnnotationId
    student_id: StudentId
    summary_id: SummaryId

    # Content
    original_text: str
    display_text: str
    color: AnnotationColor = AnnotationColor.YELLOW
    note: str = ""
    kind: AnnotationKind = AnnotationKind.HIGHLIGHT
    bot_reply: str | None = None

    # Metadata
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)
    deleted_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants after initialization."""
        if not self.original_text:
            raise ValidationError("original_text cannot be empty", field="original_text")

    # Query methods

    def is_deleted(self) -> bool:
        """Check if this annotation has been soft-deleted."""
        return self.deleted_at is not None

    # Command methods (state changes)

    def update(
        self,
        *,
        note: str | None = None,
        color: AnnotationColor | None = None,
        kind: AnnotationKind | None = None,
        bot_reply: str | None = None,
        display_text: str | None = None,
    ) -> None:
        """
        Apply a partial update. Fields left as None are unchanged.

        Raises:
            AnnotationDeletedError: If the annotation is soft-deleted
        """
        if self.is_deleted():
            raise AnnotationDeletedError(self.id.value)

        if note is not None:
            self.note = note
        if color is not None:
            self.color = AnnotationColor(color)
        if kind is not None:
            self.kind = AnnotationKind(kind)
        if bot_reply is not None:
            self.bot_reply = bot_reply
        if display_text is not None:
            self.display_text = display_text

        self.updated_at = _now()

    def soft_delete(self) -> None:
        """
        Soft delete this annotation.

        Raises:
            AnnotationAlreadyDeletedError: If annotation is already deleted
        """
        if self.is_deleted():
            raise AnnotationAlreadyDeletedError(self.id.value)

        now = _now()
        self.deleted_at = now
        self.updated_at = now

    def restore(self) -> None:
        """
        Restore a soft-deleted annotation.

        Raises:
            AnnotationNotDeletedError: If annotation is not deleted
        """
        if not self.is_deleted():
            raise AnnotationNotDeletedError(self.id.value)

        self.deleted_at = None
        self.updated_at = _now()

    # Factory methods

    @classmethod
    def create(
        cls,
        student_id: StudentId,
        summary_id: SummaryId,
        original_text: str,
        display_text: str | None = None,
        color: AnnotationColor | None = None,
        note: str | None = None,
        kind: AnnotationKind | None = None,
        bot_reply: str | None = None,
    ) -> PersistedAnnotation:
        """
        Factory method for creating a new annotation record.

        Missing display text is derived from the original text; missing
        color and kind fall back to yellow highlight.
        """
        now = _now()
        return cls(
            id=AnnotationId.unsaved(),
            student_id=student_id,
            summary_id=summary_id,
            original_text=original_text,
            display_text=display_text or truncate_display_text(original_text),
            color=AnnotationColor(color) if color else AnnotationColor.default(),
            note=note or "",
            kind=AnnotationKind(kind) if kind else AnnotationKind.default(),
            bot_reply=bot_reply or None,
            created_at=now,
            updated_at=now,
            deleted_at=None,
        )

    @classmethod
    def create_with_id(
        cls,
        id: AnnotationId,
        student_id: StudentId,
        summary_id: SummaryId,
        original_text: str,
        display_text: str,
        color: AnnotationColor,
        note: str,
        kind: AnnotationKind,
        bot_reply: str | None,
        created_at: datetime,
        updated_at: datetime,
        deleted_at: datetime | None = None,
    ) -> PersistedAnnotation:
        """
        Factory method for reconstituting an annotation from persistence.

        Used by repositories when loading from database.
        """
        return cls(
            id=id,
            student_id=student_id,
            summary_id=summary_id,
            original_text=original_text,
            display_text=display_text,
            color=color,
            note=note,
            kind=kind,
            bot_reply=bot_reply,
            created_at=created_at,
            updated_at=updated_at,
            deleted_at=deleted_at,
        )
