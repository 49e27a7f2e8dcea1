"""Glossary mastery summaries for the study sidebar."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from studytext.domain.common.value_objects import MasteryLevel
from studytext.domain.reading.entities.keyword_term import KeywordTerm


@dataclass(frozen=True)
class MasteryStats:
    red: int
    yellow: int
    green: int
    total: int


@dataclass(frozen=True)
class AnnotatedKeyword:
    keyword: KeywordTerm
    mastery: MasteryLevel
    notes: list[str] = field(default_factory=list)


def resolve_mastery(
    keyword: KeywordTerm, keyword_mastery: Mapping[str, MasteryLevel]
) -> MasteryLevel:
    """Learner's level if set, else the glossary default, else green."""
    return keyword_mastery.get(keyword.term) or keyword.mastery or MasteryLevel.GREEN


def keyword_mastery_stats(
    dictionary: Iterable[str | KeywordTerm],
    keyword_mastery: Mapping[str, MasteryLevel],
) -> MasteryStats:
    """Count glossary terms per mastery level."""
    counts = {level: 0 for level in MasteryLevel}
    total = 0
    for entry in dictionary:
        counts[resolve_mastery(KeywordTerm.of(entry), keyword_mastery)] += 1
        total += 1

    return MasteryStats(
        red=counts[MasteryLevel.RED],
        yellow=counts[MasteryLevel.YELLOW],
        green=counts[MasteryLevel.GREEN],
        total=total,
    )


def annotated_keywords(
    dictionary: Iterable[str | KeywordTerm],
    keyword_mastery: Mapping[str, MasteryLevel],
    personal_notes: Mapping[str, list[str]],
) -> list[AnnotatedKeyword]:
    """Glossary entries with mastery and notes, weakest mastery first."""
    entries = [
        AnnotatedKeyword(
            keyword=keyword,
            mastery=resolve_mastery(keyword, keyword_mastery),
            notes=list(personal_notes.get(keyword.term, [])),
        )
        for keyword in map(KeywordTerm.of, dictionary)
    ]
    # Stable sort keeps dictionary order within a level
    return sorted(entries, key=lambda entry: entry.mastery.rank)
