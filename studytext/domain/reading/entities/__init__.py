from studytext.domain.reading.entities.keyword_term import KeywordTerm
from studytext.domain.reading.entities.persisted_annotation import PersistedAnnotation
from studytext.domain.reading.entities.study_document import CompositeStudyDocument, StudyDocument
from studytext.domain.reading.entities.text_annotation import TextAnnotation

__all__ = [
    "CompositeStudyDocument",
    "KeywordTerm",
    "PersistedAnnotation",
    "StudyDocument",
    "TextAnnotation",
]
