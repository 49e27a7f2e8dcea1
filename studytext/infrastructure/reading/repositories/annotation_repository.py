"""
Domain-centric repository for the PersistedAnnotation aggregate.

Returns domain entities instead of ORM models. Records are only ever
inserted or updated; tombstoning happens through `save` after the
aggregate's soft_delete().
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from studytext.domain.common.value_objects import AnnotationId, StudentId, SummaryId
from studytext.domain.reading.entities.persisted_annotation import PersistedAnnotation
from studytext.infrastructure.reading.mappers.annotation_mapper import AnnotationMapper
from studytext.models import TextAnnotation as TextAnnotationORM

logger = logging.getLogger(__name__)


class AnnotationRepository:
    """Repository for PersistedAnnotation persistence (domain-centric)."""

    def __init__(self, db: Session) -> None:
        """
        Initialize repository.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db
        self.mapper = AnnotationMapper()

    def find_by_id(self, annotation_id: AnnotationId) -> PersistedAnnotation | None:
        """
        Load an annotation by ID, including tombstoned ones.

        Args:
            annotation_id: Annotation ID to find

        Returns:
            PersistedAnnotation if found, None otherwise
        """
        stmt = select(TextAnnotationORM).where(TextAnnotationORM.id == annotation_id.value)
        orm_model = self.db.execute(stmt).scalar_one_or_none()

        if not orm_model:
            return None

        return self.mapper.to_domain(orm_model)

    def find_active(
        self, student_id: StudentId, summary_id: SummaryId
    ) -> list[PersistedAnnotation]:
        """
        Get all non-deleted annotations of a student on a summary.

        Args:
            student_id: Student owning the annotations
            summary_id: Summary the annotations are anchored in

        Returns:
            Annotations ordered by creation (oldest first)
        """
        stmt = (
            select(TextAnnotationORM)
            .where(
                TextAnnotationORM.student_id == student_id.value,
                TextAnnotationORM.summary_id == summary_id.value,
                TextAnnotationORM.deleted_at.is_(None),
            )
            .order_by(TextAnnotationORM.created_at.asc(), TextAnnotationORM.id.asc())
        )
        orms = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orms]

    def save(self, annotation: PersistedAnnotation) -> PersistedAnnotation:
        """
        Persist annotation to database.

        If the annotation has a placeholder ID (0), creates a new record and
        returns it with the real ID. Otherwise updates the existing record.

        Args:
            annotation: PersistedAnnotation domain entity to save

        Returns:
            PersistedAnnotation as stored
        """
        if annotation.id.value == 0:
            orm_model = self.mapper.to_orm(annotation)
            self.db.add(orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
            logger.debug(f"Inserted annotation id={orm_model.id}")
            return self.mapper.to_domain(orm_model)

        stmt = select(TextAnnotationORM).where(TextAnnotationORM.id == annotation.id.value)
        existing_orm = self.db.execute(stmt).scalar_one()

        self.mapper.to_orm(annotation, existing_orm)
        self.db.commit()
        self.db.refresh(existing_orm)

        return self.mapper.to_domain(existing_orm)
