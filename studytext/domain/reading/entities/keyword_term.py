"""Glossary keyword entry."""

from dataclasses import dataclass

from studytext.domain.common.value_objects import MasteryLevel


@dataclass(frozen=True)
class KeywordTerm:
    """
    Immutable glossary entry supplied by the content service.

    Only `term` takes part in text matching; the remaining fields are
    glossary metadata shown next to a detected keyword.
    """

    term: str
    definition: str | None = None
    mastery: MasteryLevel | None = None

    @classmethod
    def of(cls, term: "str | KeywordTerm") -> "KeywordTerm":
        """Accept either a bare term string or an existing entry."""
        if isinstance(term, KeywordTerm):
            return term
        return cls(term=term)
