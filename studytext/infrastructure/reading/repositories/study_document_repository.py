"""Repository for composite study documents keyed by (student, summary)."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from studytext.domain.common.value_objects import StudentId, SummaryId
from studytext.domain.reading.entities.study_document import StudyDocument
from studytext.infrastructure.reading.mappers.study_document_mapper import StudyDocumentMapper
from studytext.models import StudyDocument as StudyDocumentORM


class StudyDocumentRepository:
    """Repository for StudyDocument persistence (domain-centric)."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = StudyDocumentMapper()

    def _find_orm(self, student_id: StudentId, summary_id: SummaryId) -> StudyDocumentORM | None:
        stmt = select(StudyDocumentORM).where(
            StudyDocumentORM.student_id == student_id.value,
            StudyDocumentORM.summary_id == summary_id.value,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def find_by_key(self, student_id: StudentId, summary_id: SummaryId) -> StudyDocument | None:
        orm_model = self._find_orm(student_id, summary_id)
        if not orm_model:
            return None
        return self.mapper.to_domain(orm_model)

    def save(self, document: StudyDocument) -> StudyDocument:
        """Insert or overwrite the document for its (student, summary) key."""
        existing_orm = self._find_orm(document.student_id, document.summary_id)
        orm_model = self.mapper.to_orm(document, existing_orm)
        if existing_orm is None:
            self.db.add(orm_model)

        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)
