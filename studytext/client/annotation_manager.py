"""
In-memory annotation lifecycle for the document being studied.

Keeps the ordered list of active annotations and the transient UI state
around creating one (pending selection, input buffers, selected tab and
color). Question annotations get a simulated assistant reply after a
short delay on a cancellable timer.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

import structlog

from studytext.client.timers import Scheduler, TimerHandle
from studytext.domain.common.value_objects import AnnotationColor, AnnotationKind
from studytext.domain.reading.entities.text_annotation import (
    DEFAULT_DISPLAY_TEXT_MAX_LENGTH,
    TextAnnotation,
)

logger = structlog.get_logger(__name__)

DEFAULT_ASSISTANT_REPLY_DELAY_SECONDS = 1.5

ChangeListener = Callable[[], None]


def build_assistant_reply(text: str) -> str:
    """Canned assistant answer quoting the start of the selected text."""
    return (
        f'Com base no trecho selecionado, posso explicar que: "{text[:60]}..." '
        "Este conceito e fundamental na medicina porque se relaciona com os "
        "mecanismos fisiologicos e anatomicos da regiao estudada. "
        "Deseja que eu aprofunde algum aspecto especifico?"
    )


@dataclass(frozen=True)
class AnchorRect:
    """Screen rectangle of the selection the popup is anchored to."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class PendingAnnotation:
    """Selection awaiting a decision in the annotation popup."""

    text: str
    anchor_rect: AnchorRect | None = None


class AnnotationLifecycleManager:
    """
    Owns the annotations of one study document.

    Mutations are synchronous and never raise. Registered change
    listeners are called after every change to the annotation list.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        reply_delay: float = DEFAULT_ASSISTANT_REPLY_DELAY_SECONDS,
        max_display_length: int = DEFAULT_DISPLAY_TEXT_MAX_LENGTH,
        reply_builder: Callable[[str], str] = build_assistant_reply,
    ) -> None:
        self._scheduler = scheduler
        self._reply_delay = reply_delay
        self._max_display_length = max_display_length
        self._reply_builder = reply_builder

        self._annotations: list[TextAnnotation] = []
        self._reply_timers: dict[str, TimerHandle] = {}
        self._listeners: list[ChangeListener] = []

        self.pending: PendingAnnotation | None = None
        self.note_input = ""
        self.question_input = ""
        self.active_tab = AnnotationKind.HIGHLIGHT
        self.color = AnnotationColor.YELLOW

    @property
    def annotations(self) -> list[TextAnnotation]:
        """Active annotations in insertion order."""
        return list(self._annotations)

    @property
    def assistant_replying(self) -> bool:
        """True while at least one assistant reply is outstanding."""
        return bool(self._reply_timers)

    def get(self, annotation_id: str) -> TextAnnotation | None:
        for annotation in self._annotations:
            if annotation.id == annotation_id:
                return annotation
        return None

    def add_listener(self, listener: ChangeListener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unregisters it."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    # Popup state

    def open_annotation_for(self, text: str, anchor_rect: AnchorRect | None = None) -> None:
        """Start annotating a selection. The popup always opens on the highlight tab."""
        self.pending = PendingAnnotation(text=text, anchor_rect=anchor_rect)
        self.active_tab = AnnotationKind.HIGHLIGHT

    def close_annotation(self) -> None:
        self.pending = None

    # Annotation list

    def create_annotation(
        self,
        text: str,
        kind: AnnotationKind = AnnotationKind.HIGHLIGHT,
        note: str = "",
        color: AnnotationColor = AnnotationColor.YELLOW,
    ) -> TextAnnotation:
        """
        Append a new annotation for the selected text.

        Clears the pending selection and both input buffers. A question
        gets its assistant reply once the reply delay has elapsed, provided
        the annotation still exists by then.

        Returns:
            The created annotation
        """
        annotation = TextAnnotation.create(
            text,
            kind=kind,
            note=note,
            color=color,
            max_display_length=self._max_display_length,
        )
        self._annotations.append(annotation)

        if annotation.is_question():
            self._schedule_reply(annotation.id, text)

        self.pending = None
        self.note_input = ""
        self.question_input = ""

        logger.debug(
            "created_text_annotation", annotation_id=annotation.id, kind=annotation.kind.value
        )
        self._notify()
        return annotation

    def delete_annotation(self, annotation_id: str) -> bool:
        """
        Remove an annotation by id. Unknown ids are ignored.

        Any reply still pending for the annotation is cancelled.

        Returns:
            True if an annotation was removed
        """
        self._cancel_reply(annotation_id)

        remaining = [a for a in self._annotations if a.id != annotation_id]
        if len(remaining) == len(self._annotations):
            return False

        self._annotations = remaining
        logger.debug("deleted_text_annotation", annotation_id=annotation_id)
        self._notify()
        return True

    def replace_annotations(self, annotations: Iterable[TextAnnotation]) -> None:
        """Replace the whole list, e.g. with annotations loaded from storage."""
        self._annotations = list(annotations)
        kept_ids = {a.id for a in self._annotations}
        for annotation_id in list(self._reply_timers):
            if annotation_id not in kept_ids:
                self._cancel_reply(annotation_id)
        self._notify()

    def cancel_pending_replies(self) -> None:
        """Cancel every outstanding assistant reply."""
        for annotation_id in list(self._reply_timers):
            self._cancel_reply(annotation_id)

    def _schedule_reply(self, annotation_id: str, text: str) -> None:
        def deliver() -> None:
            self._reply_timers.pop(annotation_id, None)
            annotation = self.get(annotation_id)
            if annotation is None:
                return
            annotation.attach_bot_reply(self._reply_builder(text))
            self._notify()

        self._reply_timers[annotation_id] = self._scheduler.call_later(self._reply_delay, deliver)

    def _cancel_reply(self, annotation_id: str) -> None:
        handle = self._reply_timers.pop(annotation_id, None)
        if handle is not None:
            handle.cancel()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
