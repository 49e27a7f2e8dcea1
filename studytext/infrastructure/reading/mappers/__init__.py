from studytext.infrastructure.reading.mappers.annotation_mapper import AnnotationMapper
from studytext.infrastructure.reading.mappers.study_document_mapper import StudyDocumentMapper

__all__ = ["AnnotationMapper", "StudyDocumentMapper"]
