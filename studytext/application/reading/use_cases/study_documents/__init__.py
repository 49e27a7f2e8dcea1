from studytext.application.reading.use_cases.study_documents.get_study_document_use_case import (
    GetStudyDocumentUseCase,
)
from studytext.application.reading.use_cases.study_documents.save_study_document_use_case import (
    SaveStudyDocumentUseCase,
)

__all__ = ["GetStudyDocumentUseCase", "SaveStudyDocumentUseCase"]
