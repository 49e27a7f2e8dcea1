"""Mapper for StudyDocument ORM ↔ domain conversion."""

from datetime import UTC

from studytext.domain.common.value_objects import StudentId, StudyDocumentId, SummaryId
from studytext.domain.reading.entities.study_document import CompositeStudyDocument, StudyDocument
from studytext.models import StudyDocument as StudyDocumentORM


class StudyDocumentMapper:
    """Mapper for StudyDocument ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: StudyDocumentORM) -> StudyDocument:
        content = CompositeStudyDocument.from_json(
            {
                "annotations": orm_model.annotations,
                "keyword_mastery": orm_model.keyword_mastery,
                "personal_notes": orm_model.personal_notes,
                "elapsed_seconds": orm_model.elapsed_seconds,
            }
        )
        created_at = orm_model.created_at
        updated_at = orm_model.updated_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=UTC)
        if updated_at.tzinfo is None:
            updated_at = updated_at.replace(tzinfo=UTC)

        return StudyDocument(
            id=StudyDocumentId(orm_model.id),
            student_id=StudentId(orm_model.student_id),
            summary_id=SummaryId(orm_model.summary_id),
            content=content,
            created_at=created_at,
            updated_at=updated_at,
        )

    def to_orm(
        self, domain_entity: StudyDocument, orm_model: StudyDocumentORM | None = None
    ) -> StudyDocumentORM:
        data = domain_entity.content.to_json()

        if orm_model is None:
            orm_model = StudyDocumentORM(
                student_id=domain_entity.student_id.value,
                summary_id=domain_entity.summary_id.value,
                created_at=domain_entity.created_at,
            )

        orm_model.annotations = data["annotations"]
        orm_model.keyword_mastery = data["keyword_mastery"]
        orm_model.personal_notes = data["personal_notes"]
        orm_model.elapsed_seconds = data["elapsed_seconds"]
        orm_model.updated_at = domain_entity.updated_at
        return orm_model
