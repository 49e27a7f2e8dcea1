"""TextSpan value object: one classified slice of source text."""

from dataclasses import dataclass
from enum import StrEnum


class SpanKind(StrEnum):
    TEXT = "text"
    KEYWORD = "keyword"


@dataclass(frozen=True)
class TextSpan:
    """
    Contiguous slice of source text classified as keyword or plain text.

    A span list produced for a text partitions it: concatenating the
    contents in order reproduces the text exactly.
    """

    kind: SpanKind
    content: str
    start_index: int

    def __post_init__(self) -> None:
        if self.start_index < 0:
            raise ValueError("start_index must be non-negative")

    @property
    def end_index(self) -> int:
        return self.start_index + len(self.content)

    @property
    def is_keyword(self) -> bool:
        return self.kind is SpanKind.KEYWORD
