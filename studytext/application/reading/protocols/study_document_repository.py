from typing import Protocol

from studytext.domain.common.value_objects import StudentId, SummaryId
from studytext.domain.reading.entities.study_document import StudyDocument


class StudyDocumentRepositoryProtocol(Protocol):
    def find_by_key(self, student_id: StudentId, summary_id: SummaryId) -> StudyDocument | None: ...

    def save(self, document: StudyDocument) -> StudyDocument: ...
