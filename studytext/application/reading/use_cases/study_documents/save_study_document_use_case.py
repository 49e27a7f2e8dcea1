"""Use case for saving a composite study document."""

import structlog

from studytext.application.reading.protocols.study_document_repository import (
    StudyDocumentRepositoryProtocol,
)
from studytext.domain.common.value_objects import StudentId, SummaryId
from studytext.domain.reading.entities.study_document import CompositeStudyDocument, StudyDocument

logger = structlog.get_logger(__name__)


class SaveStudyDocumentUseCase:
    def __init__(self, study_document_repository: StudyDocumentRepositoryProtocol) -> None:
        self.study_document_repository = study_document_repository

    def save_document(
        self, student_id: str, summary_id: str, content: CompositeStudyDocument
    ) -> StudyDocument:
        """
        Store the full document for a student and summary.

        Replaces any previous content wholesale (last write wins).
        """
        student_id_vo = StudentId(student_id)
        summary_id_vo = SummaryId(summary_id)

        document = self.study_document_repository.find_by_key(student_id_vo, summary_id_vo)
        if document is None:
            document = StudyDocument.create(student_id_vo, summary_id_vo, content)
        else:
            document.replace_content(content)

        document = self.study_document_repository.save(document)

        logger.info(
            "saved_study_document",
            student_id=student_id,
            summary_id=summary_id,
            annotations=len(content.annotations),
            elapsed_seconds=content.elapsed_seconds,
        )
        return document
