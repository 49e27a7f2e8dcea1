"""
Keyword indexer domain service.

Partitions study text into keyword and plain-text spans. Matching is
case-insensitive and only accepts occurrences bounded by non-letters on
both sides, so "nervo" is found in "o nervo ulnar" but not in "inervado".

Overlap policy: among candidates the earliest start wins; candidates
starting at the same index are resolved by dictionary order (the first
term listed wins, not the longest). Any candidate overlapping an
accepted one is dropped.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache

from studytext.domain.common.value_objects import SpanKind, TextSpan
from studytext.domain.reading.entities.keyword_term import KeywordTerm


@dataclass(frozen=True)
class KeywordMatch:
    """An accepted keyword occurrence in a text."""

    start: int
    end: int
    keyword: KeywordTerm


class _TrieNode:
    __slots__ = ("children", "term_index")

    def __init__(self) -> None:
        self.children: dict[str, _TrieNode] = {}
        # Lowest dictionary index of a term ending at this node
        self.term_index: int | None = None


def _fold(char: str) -> str:
    return char.lower()


def _is_letter_at(text: str, index: int) -> bool:
    return 0 <= index < len(text) and text[index].isalpha()


class KeywordIndexer:
    """
    Multi-term matcher built once per dictionary version.

    Terms are stored in a character trie keyed by per-character case
    folding, so a scan costs O(len(text) x longest term) regardless of
    dictionary size.
    """

    def __init__(self, dictionary: Iterable[str | KeywordTerm]) -> None:
        self._keywords: list[KeywordTerm] = []
        self._by_folded_term: dict[str, KeywordTerm] = {}
        self._root = _TrieNode()

        for entry in dictionary:
            keyword = KeywordTerm.of(entry)
            if not keyword.term.strip():
                continue
            folded = "".join(_fold(c) for c in keyword.term)
            if folded in self._by_folded_term:
                continue
            self._by_folded_term[folded] = keyword
            self._insert(keyword.term, len(self._keywords))
            self._keywords.append(keyword)

    @property
    def keywords(self) -> list[KeywordTerm]:
        """Dictionary entries in matching priority order."""
        return list(self._keywords)

    def lookup(self, content: str) -> KeywordTerm | None:
        """Return the glossary entry for a keyword span's content."""
        return self._by_folded_term.get("".join(_fold(c) for c in content))

    def find_matches(self, text: str) -> list[KeywordMatch]:
        """Return accepted, non-overlapping keyword occurrences in text order."""
        matches: list[KeywordMatch] = []
        length = len(text)
        index = 0

        while index < length:
            hit = None
            if not _is_letter_at(text, index - 1):
                hit = self._best_match_at(text, index)
            if hit is None:
                index += 1
                continue
            end, term_index = hit
            matches.append(KeywordMatch(start=index, end=end, keyword=self._keywords[term_index]))
            index = end

        return matches

    def tokenize(self, text: str) -> list[TextSpan]:
        """
        Partition text into keyword and plain-text spans.

        The returned spans cover the text exactly, with no gaps or
        overlaps, and are ordered by start index. Keyword span content is
        taken from the source text, so original casing is kept.
        """
        spans: list[TextSpan] = []
        cursor = 0

        for match in self.find_matches(text):
            if match.start > cursor:
                spans.append(TextSpan(SpanKind.TEXT, text[cursor : match.start], cursor))
            spans.append(TextSpan(SpanKind.KEYWORD, text[match.start : match.end], match.start))
            cursor = match.end

        if cursor < len(text):
            spans.append(TextSpan(SpanKind.TEXT, text[cursor:], cursor))

        if not spans:
            return [TextSpan(SpanKind.TEXT, text, 0)]
        return spans

    def _insert(self, term: str, term_index: int) -> None:
        node = self._root
        for char in term:
            node = node.children.setdefault(_fold(char), _TrieNode())
        if node.term_index is None:
            node.term_index = term_index

    def _best_match_at(self, text: str, start: int) -> tuple[int, int] | None:
        """Return (end, term_index) of the highest-priority term matching at start."""
        best: tuple[int, int] | None = None
        node = self._root
        position = start

        while position < len(text):
            next_node = node.children.get(_fold(text[position]))
            if next_node is None:
                break
            node = next_node
            position += 1
            if node.term_index is None or _is_letter_at(text, position):
                continue
            if best is None or node.term_index < best[1]:
                best = (position, node.term_index)

        return best


@lru_cache(maxsize=32)
def _indexer_for(dictionary: tuple[KeywordTerm, ...]) -> KeywordIndexer:
    return KeywordIndexer(dictionary)


def get_indexer(dictionary: Iterable[str | KeywordTerm]) -> KeywordIndexer:
    """Return the shared indexer for this dictionary version, building it once."""
    return _indexer_for(tuple(KeywordTerm.of(entry) for entry in dictionary))


def tokenize(text: str, dictionary: Iterable[str | KeywordTerm]) -> list[TextSpan]:
    """Partition text into keyword/plain spans for the given dictionary."""
    return get_indexer(dictionary).tokenize(text)
