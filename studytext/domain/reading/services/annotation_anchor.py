"""
Annotation anchor domain service.

Binds rendered plain-text spans to annotations by exact content
equality. A phrase that occurs several times in a document is shown as
annotated at every occurrence; anchoring carries no offsets.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from studytext.domain.common.value_objects import TextSpan
from studytext.domain.reading.entities.text_annotation import TextAnnotation


@dataclass(frozen=True)
class AnchoredSpan:
    span: TextSpan
    annotation: TextAnnotation | None


class AnnotationAnchor:
    """Lookup of active annotations keyed by their exact original text."""

    def __init__(self, annotations: Iterable[TextAnnotation]) -> None:
        self._by_text: dict[str, TextAnnotation] = {}
        for annotation in annotations:
            # First annotation in list order wins for a repeated phrase
            self._by_text.setdefault(annotation.original_text, annotation)

    def __len__(self) -> int:
        return len(self._by_text)

    def find_annotation_for(self, span_content: str) -> TextAnnotation | None:
        """Return the annotation anchored to exactly this content, if any."""
        return self._by_text.get(span_content)

    def anchor_spans(self, spans: Iterable[TextSpan]) -> list[AnchoredSpan]:
        """Pair each span with its annotation. Keyword spans are never anchored."""
        return [
            AnchoredSpan(
                span=span,
                annotation=None if span.is_keyword else self.find_annotation_for(span.content),
            )
            for span in spans
        ]


def find_annotation_for(
    span_content: str, active_annotations: Iterable[TextAnnotation]
) -> TextAnnotation | None:
    """One-shot lookup; build an AnnotationAnchor when matching many spans."""
    return AnnotationAnchor(active_annotations).find_annotation_for(span_content)
