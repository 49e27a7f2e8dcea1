"""
TextAnnotation entity.

A learner's highlight, note or question anchored to a substring of the
study text. Held client-side in insertion order and round-tripped inside
the composite study document.
"""

from __future__ import annotations

import random
import string
import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from studytext.domain.common.value_objects import AnnotationColor, AnnotationKind

ELLIPSIS = "…"
DEFAULT_DISPLAY_TEXT_MAX_LENGTH = 200

_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_annotation_id() -> str:
    """Return a fresh client-side id of the form ``ann-<millis>-<6 base36 chars>``."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=6))  # noqa: S311
    return f"ann-{int(time.time() * 1000)}-{suffix}"


def truncate_display_text(text: str, max_length: int = DEFAULT_DISPLAY_TEXT_MAX_LENGTH) -> str:
    """Shorten long selections for display, marking the cut with an ellipsis."""
    if len(text) > max_length:
        return text[:max_length] + ELLIPSIS
    return text


@dataclass
class TextAnnotation:
    """
    Annotation anchored to text content.

    Business Rules:
    - Anchored by exact `original_text` equality, not by offsets
    - `display_text` is the (possibly truncated) text shown in side panels
    - Only question annotations ever receive a `bot_reply`
    """

    id: str
    original_text: str
    display_text: str
    color: AnnotationColor = AnnotationColor.YELLOW
    note: str = ""
    kind: AnnotationKind = AnnotationKind.HIGHLIGHT
    bot_reply: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def is_question(self) -> bool:
        return self.kind is AnnotationKind.QUESTION

    def has_note(self) -> bool:
        return len(self.note.strip()) > 0

    def attach_bot_reply(self, reply: str) -> None:
        self.bot_reply = reply

    @classmethod
    def create(
        cls,
        text: str,
        kind: AnnotationKind = AnnotationKind.HIGHLIGHT,
        note: str = "",
        color: AnnotationColor = AnnotationColor.YELLOW,
        max_display_length: int = DEFAULT_DISPLAY_TEXT_MAX_LENGTH,
    ) -> TextAnnotation:
        """
        Factory method for a new annotation on the selected text.

        Args:
            text: Exact selected text (the anchor)
            kind: Highlight, note or question
            note: Note or question body
            color: Highlighter color
            max_display_length: Truncation length for display_text

        Returns:
            New TextAnnotation with a fresh id and the current timestamp
        """
        return cls(
            id=generate_annotation_id(),
            original_text=text,
            display_text=truncate_display_text(text, max_display_length),
            color=AnnotationColor(color),
            note=note,
            kind=AnnotationKind(kind),
            bot_reply=None,
            created_at=datetime.now(UTC),
        )

    def to_json(self) -> dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        data: dict[str, Any] = {
            "id": self.id,
            "original_text": self.original_text,
            "display_text": self.display_text,
            "color": self.color.value,
            "note": self.note,
            "type": self.kind.value,
            "created_at": self.created_at.isoformat(),
        }
        if self.bot_reply is not None:
            data["bot_reply"] = self.bot_reply
        return data

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> TextAnnotation:
        """
        Deserialize from a stored document entry.

        Tolerates entries written by older clients: a missing id is
        regenerated, `selected_text` stands in for `original_text`, and
        unknown colors or kinds fall back to the defaults.
        """
        original_text = data.get("original_text") or data.get("selected_text") or ""
        display_text = data.get("display_text") or original_text

        try:
            color = AnnotationColor(data.get("color") or AnnotationColor.default())
        except ValueError:
            color = AnnotationColor.default()
        try:
            kind = AnnotationKind(data.get("type") or AnnotationKind.default())
        except ValueError:
            kind = AnnotationKind.default()

        created_at = _parse_timestamp(data.get("created_at"))

        return cls(
            id=data.get("id") or generate_annotation_id(),
            original_text=original_text,
            display_text=display_text,
            color=color,
            note=data.get("note") or "",
            kind=kind,
            bot_reply=data.get("bot_reply"),
            created_at=created_at,
        )


def _parse_timestamp(value: object) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, int | float):
        return datetime.fromtimestamp(value / 1000, tz=UTC)
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            pass
    return datetime.now(UTC)
