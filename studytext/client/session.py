"""
Study session for one summary.

Bundles the per-document client state (annotations, keyword mastery,
personal keyword notes, elapsed study time) with the services that render
and persist it.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from dataclasses import dataclass

from studytext.client.annotation_manager import AnnotationLifecycleManager
from studytext.client.persistence import PersistenceCoordinator, StudyDocumentStore
from studytext.client.timers import Scheduler
from studytext.config import Settings, get_settings
from studytext.domain.common.value_objects import MasteryLevel, TextSpan
from studytext.domain.reading.entities.keyword_term import KeywordTerm
from studytext.domain.reading.entities.study_document import CompositeStudyDocument
from studytext.domain.reading.entities.text_annotation import TextAnnotation
from studytext.domain.reading.services import (
    AnnotatedKeyword,
    AnnotationAnchor,
    MasteryStats,
    annotated_keywords,
    get_indexer,
    keyword_mastery_stats,
)
from studytext.domain.reading.services.keyword_mastery import resolve_mastery


@dataclass(frozen=True)
class RenderedSpan:
    """A text span with whatever it is decorated with when displayed."""

    span: TextSpan
    keyword: KeywordTerm | None = None
    mastery: MasteryLevel | None = None
    annotation: TextAnnotation | None = None


class StudySession:
    """State and services for one student studying one summary."""

    def __init__(
        self,
        student_id: str,
        summary_id: str,
        dictionary: Iterable[str | KeywordTerm],
        store: StudyDocumentStore,
        scheduler: Scheduler,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or get_settings()

        self.student_id = student_id
        self.summary_id = summary_id
        self.indexer = get_indexer(dictionary)

        self.keyword_mastery: dict[str, MasteryLevel] = {}
        self.personal_notes: dict[str, list[str]] = {}
        self.elapsed_seconds = 0

        self.annotations = AnnotationLifecycleManager(
            scheduler,
            reply_delay=settings.ASSISTANT_REPLY_DELAY_SECONDS,
            max_display_length=settings.DISPLAY_TEXT_MAX_LENGTH,
        )
        self.persistence = PersistenceCoordinator(
            store,
            self,
            scheduler,
            student_id,
            summary_id,
            debounce_seconds=settings.AUTOSAVE_DEBOUNCE_SECONDS,
            saved_display_seconds=settings.SAVED_STATUS_DISPLAY_SECONDS,
            error_display_seconds=settings.ERROR_STATUS_DISPLAY_SECONDS,
        )
        self.annotations.add_listener(self.persistence.notify_changed)

    # Lifecycle

    async def open(self) -> None:
        """Load any saved state. Autosave is enabled once this returns."""
        await self.persistence.mount()

    def close(self) -> asyncio.Task[None] | None:
        """Cancel outstanding replies and fire the final save."""
        self.annotations.cancel_pending_replies()
        return self.persistence.unmount()

    # Document state

    def snapshot(self) -> CompositeStudyDocument:
        """Current state as a composite document."""
        return CompositeStudyDocument(
            annotations=self.annotations.annotations,
            keyword_mastery=dict(self.keyword_mastery),
            personal_notes={term: list(notes) for term, notes in self.personal_notes.items()},
            elapsed_seconds=self.elapsed_seconds,
        )

    def merge(self, document: CompositeStudyDocument) -> None:
        """
        Adopt a loaded document over the local placeholders.

        Mastery and personal notes are always taken from the document, even
        when empty. Annotations and elapsed time only replace local state
        when the document has some.
        """
        if document.annotations:
            self.annotations.replace_annotations(document.annotations)
        self.keyword_mastery = dict(document.keyword_mastery)
        self.personal_notes = {
            term: list(notes) for term, notes in document.personal_notes.items()
        }
        if document.elapsed_seconds:
            self.elapsed_seconds = document.elapsed_seconds

    def set_mastery(self, term: str, level: MasteryLevel) -> None:
        self.keyword_mastery[term] = MasteryLevel(level)
        self.persistence.notify_changed()

    def add_personal_note(self, term: str, note: str) -> None:
        self.personal_notes.setdefault(term, []).append(note)
        self.persistence.notify_changed()

    def remove_personal_note(self, term: str, index: int) -> None:
        """Remove one note from a keyword. Out-of-range indexes are ignored."""
        notes = self.personal_notes.get(term)
        if not notes or not 0 <= index < len(notes):
            return
        del notes[index]
        if not notes:
            del self.personal_notes[term]
        self.persistence.notify_changed()

    def tick(self, seconds: int = 1) -> None:
        """Add study time. Saved with the next save, never triggers one."""
        self.elapsed_seconds += max(seconds, 0)

    # Views

    def render(self, text: str) -> list[RenderedSpan]:
        """
        Tokenize text and decorate every span.

        Keyword spans carry their glossary entry and the learner's mastery;
        plain spans carry the annotation anchored to their exact content.
        """
        anchor = AnnotationAnchor(self.annotations.annotations)
        rendered: list[RenderedSpan] = []

        for span in self.indexer.tokenize(text):
            if span.is_keyword:
                keyword = self.indexer.lookup(span.content)
                rendered.append(
                    RenderedSpan(
                        span=span,
                        keyword=keyword,
                        mastery=resolve_mastery(keyword, self.keyword_mastery) if keyword else None,
                    )
                )
            else:
                rendered.append(
                    RenderedSpan(span=span, annotation=anchor.find_annotation_for(span.content))
                )

        return rendered

    def mastery_stats(self) -> MasteryStats:
        return keyword_mastery_stats(self.indexer.keywords, self.keyword_mastery)

    def annotated_keywords(self) -> list[AnnotatedKeyword]:
        return annotated_keywords(self.indexer.keywords, self.keyword_mastery, self.personal_notes)
