"""Use case for loading a composite study document."""

from studytext.application.reading.protocols.study_document_repository import (
    StudyDocumentRepositoryProtocol,
)
from studytext.domain.common.value_objects import StudentId, SummaryId
from studytext.domain.reading.entities.study_document import StudyDocument
from studytext.exceptions import StudyDocumentNotFoundError


class GetStudyDocumentUseCase:
    def __init__(self, study_document_repository: StudyDocumentRepositoryProtocol) -> None:
        self.study_document_repository = study_document_repository

    def get_document(self, student_id: str, summary_id: str) -> StudyDocument:
        """
        Load the document saved for a student and summary.

        Raises:
            StudyDocumentNotFoundError: If nothing has been saved yet
        """
        document = self.study_document_repository.find_by_key(
            StudentId(student_id), SummaryId(summary_id)
        )
        if document is None:
            raise StudyDocumentNotFoundError(student_id, summary_id)
        return document
