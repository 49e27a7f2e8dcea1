from studytext.domain.reading.services.annotation_anchor import (
    AnchoredSpan,
    AnnotationAnchor,
    find_annotation_for,
)
from studytext.domain.reading.services.keyword_indexer import (
    KeywordIndexer,
    KeywordMatch,
    get_indexer,
    tokenize,
)
from studytext.domain.reading.services.keyword_mastery import (
    AnnotatedKeyword,
    MasteryStats,
    annotated_keywords,
    keyword_mastery_stats,
)

__all__ = [
    "AnchoredSpan",
    "AnnotatedKeyword",
    "AnnotationAnchor",
    "KeywordIndexer",
    "KeywordMatch",
    "MasteryStats",
    "annotated_keywords",
    "find_annotation_for",
    "get_indexer",
    "keyword_mastery_stats",
    "tokenize",
]
