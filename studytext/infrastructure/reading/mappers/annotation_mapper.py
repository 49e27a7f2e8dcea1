"""
Mapper for converting between TextAnnotation ORM models and PersistedAnnotation entities.

Handles bidirectional conversion:
- ORM model → Domain entity (when loading from database)
- Domain entity → ORM model (when persisting to database)
"""

from datetime import UTC, datetime

from studytext.domain.common.value_objects import (
    AnnotationColor,
    AnnotationId,
    AnnotationKind,
    StudentId,
    SummaryId,
)
from studytext.domain.reading.entities.persisted_annotation import PersistedAnnotation
from studytext.models import TextAnnotation as TextAnnotationORM


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class AnnotationMapper:
    """Mapper for TextAnnotation ORM ↔ PersistedAnnotation conversion."""

    def to_domain(self, orm_model: TextAnnotationORM) -> PersistedAnnotation:
        """
        Convert ORM model to domain entity.

        Args:
            orm_model: SQLAlchemy TextAnnotation model

        Returns:
            PersistedAnnotation domain entity
        """
        created_at = _as_utc(orm_model.created_at)
        updated_at = _as_utc(orm_model.updated_at)

        return PersistedAnnotation.create_with_id(
            id=AnnotationId(orm_model.id),
            student_id=StudentId(orm_model.student_id),
            summary_id=SummaryId(orm_model.summary_id),
            original_text=orm_model.original_text,
            display_text=orm_model.display_text,
            color=AnnotationColor(orm_model.color),
            note=orm_model.note,
            kind=AnnotationKind(orm_model.type),
            bot_reply=orm_model.bot_reply,
            created_at=created_at,
            updated_at=updated_at,
            deleted_at=_as_utc(orm_model.deleted_at) if orm_model.deleted_at else None,
        )

    def to_orm(
        self, domain_entity: PersistedAnnotation, orm_model: TextAnnotationORM | None = None
    ) -> TextAnnotationORM:
        """
        Convert domain entity to ORM model.

        Args:
            domain_entity: PersistedAnnotation domain entity
            orm_model: Optional existing ORM model to update (for updates)

        Returns:
            SQLAlchemy TextAnnotation model
        """
        if orm_model:
            orm_model.display_text = domain_entity.display_text
            orm_model.color = domain_entity.color.value
            orm_model.note = domain_entity.note
            orm_model.type = domain_entity.kind.value
            orm_model.bot_reply = domain_entity.bot_reply
            orm_model.updated_at = domain_entity.updated_at
            orm_model.deleted_at = domain_entity.deleted_at
            return orm_model

        return TextAnnotationORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            student_id=domain_entity.student_id.value,
            summary_id=domain_entity.summary_id.value,
            original_text=domain_entity.original_text,
            display_text=domain_entity.display_text,
            color=domain_entity.color.value,
            note=domain_entity.note,
            type=domain_entity.kind.value,
            bot_reply=domain_entity.bot_reply,
            created_at=domain_entity.created_at,
            updated_at=domain_entity.updated_at,
            deleted_at=domain_entity.deleted_at,
        )
