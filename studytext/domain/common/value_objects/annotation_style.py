"""Enumerations describing how an annotation or keyword is presented.

Each member's value is its wire representation, so members can be
passed straight into JSON payloads and ORM string columns.
"""

from enum import StrEnum


class AnnotationColor(StrEnum):
    """Highlighter color picked by the learner."""

    YELLOW = "yellow"
    BLUE = "blue"
    GREEN = "green"
    PINK = "pink"

    @classmethod
    def default(cls) -> "AnnotationColor":
        return cls.YELLOW


class AnnotationKind(StrEnum):
    """What the learner attached to the selected text."""

    HIGHLIGHT = "highlight"
    NOTE = "note"
    QUESTION = "question"

    @classmethod
    def default(cls) -> "AnnotationKind":
        return cls.HIGHLIGHT


class MasteryLevel(StrEnum):
    """Self-assessed mastery of a glossary keyword."""

    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"

    @property
    def rank(self) -> int:
        """Sort rank, weakest first."""
        return _MASTERY_RANK[self]


_MASTERY_RANK = {MasteryLevel.RED: 0, MasteryLevel.YELLOW: 1, MasteryLevel.GREEN: 2}
