"""
Composite study document.

The coarse-grained unit the study view round-trips to storage for one
(student, summary) pair: annotations, keyword mastery, personal keyword
notes and elapsed study time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from studytext.domain.common.value_objects import (
    MasteryLevel,
    StudentId,
    StudyDocumentId,
    SummaryId,
)
from studytext.domain.reading.entities.text_annotation import TextAnnotation


@dataclass
class CompositeStudyDocument:
    """Everything persisted for one study session of one summary."""

    annotations: list[TextAnnotation] = field(default_factory=list)
    keyword_mastery: dict[str, MasteryLevel] = field(default_factory=dict)
    personal_notes: dict[str, list[str]] = field(default_factory=dict)
    elapsed_seconds: int = 0

    def __post_init__(self) -> None:
        if self.elapsed_seconds < 0:
            raise ValueError("elapsed_seconds cannot be negative")

    def is_empty(self) -> bool:
        return (
            not self.annotations
            and not self.keyword_mastery
            and not self.personal_notes
            and self.elapsed_seconds == 0
        )

    def to_json(self) -> dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            "annotations": [a.to_json() for a in self.annotations],
            "keyword_mastery": {term: level.value for term, level in self.keyword_mastery.items()},
            "personal_notes": {term: list(notes) for term, notes in self.personal_notes.items()},
            "elapsed_seconds": self.elapsed_seconds,
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> CompositeStudyDocument:
        """Deserialize from JSON dict, skipping unknown mastery levels."""
        mastery: dict[str, MasteryLevel] = {}
        for term, level in (data.get("keyword_mastery") or {}).items():
            try:
                mastery[term] = MasteryLevel(level)
            except ValueError:
                continue

        return cls(
            annotations=[TextAnnotation.from_json(a) for a in data.get("annotations") or []],
            keyword_mastery=mastery,
            personal_notes={
                term: [str(n) for n in notes]
                for term, notes in (data.get("personal_notes") or {}).items()
            },
            elapsed_seconds=max(int(data.get("elapsed_seconds") or 0), 0),
        )


@dataclass
class StudyDocument:
    """
    Stored composite document for a (student, summary) pair.

    Business Rules:
    - Exactly one document per (student, summary)
    - Saves replace the whole content (last write wins)
    """

    id: StudyDocumentId
    student_id: StudentId
    summary_id: SummaryId
    content: CompositeStudyDocument = field(default_factory=CompositeStudyDocument)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def replace_content(self, content: CompositeStudyDocument) -> None:
        self.content = content
        self.updated_at = datetime.now(UTC)

    @classmethod
    def create(
        cls,
        student_id: StudentId,
        summary_id: SummaryId,
        content: CompositeStudyDocument,
    ) -> StudyDocument:
        now = datetime.now(UTC)
        return cls(
            id=StudyDocumentId.unsaved(),
            student_id=student_id,
            summary_id=summary_id,
            content=content,
            created_at=now,
            updated_at=now,
        )
