"""
Keyword-frequency analytics and reading time for generated notes.

Counting uses the same whole-word pattern as the highlighter, so a term is
counted exactly where it would be highlighted.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional

from config import WORDS_PER_MINUTE
from modules.keywords import Keyword, Provenance, keyword_pattern
from modules.models import NoteResult


@dataclass(frozen=True)
class KeywordFrequency:
    keyword: str
    count: int
    provenance: Optional[Provenance] = None


def count_occurrences(corpus: str, keyword: str) -> int:
    """Non-overlapping, case-insensitive, whole-word occurrences of *keyword*."""
    pattern = keyword_pattern([keyword])
    if pattern is None:
        return 0
    return sum(1 for _ in pattern.finditer(corpus))


def frequencies(corpus: str, keywords: Iterable[str]) -> list[KeywordFrequency]:
    """
    Count each distinct keyword in *corpus* and rank by count, descending.

    Keywords are de-duplicated case-insensitively (first spelling wins),
    zero counts are dropped and ties keep the input order.
    """
    distinct: dict[str, str] = {}
    for raw in keywords:
        text = (raw or "").strip()
        if text and text.lower() not in distinct:
            distinct[text.lower()] = text
    return _ranked(corpus, [(text, None) for text in distinct.values()])


def build_corpus(note: NoteResult) -> str:
    """Heading and content of every section, space-joined."""
    return " ".join(f"{s.heading} {s.content}" for s in note.sections)


def keyword_stats(note: NoteResult, user_keywords: Iterable[str]) -> list[KeywordFrequency]:
    """
    Frequencies of the AI keywords plus the user's keywords over *note*.

    A term from both sources yields one entry that carries the user's
    spelling and ``Provenance.USER``; it is never counted twice. Among
    case variants the first spelling wins, as in ``merge_keywords``.
    """
    merged: dict[str, Keyword] = {}
    for raw in note.keywords_found:
        text = (raw or "").strip()
        if text and text.lower() not in merged:
            merged[text.lower()] = Keyword(text, Provenance.AI)
    seen_user: set[str] = set()
    for raw in user_keywords:
        text = (raw or "").strip()
        if text and text.lower() not in seen_user:
            seen_user.add(text.lower())
            # dict keeps the AI entry's position
            merged[text.lower()] = Keyword(text, Provenance.USER)
    return _ranked(build_corpus(note), [(k.text, k.provenance) for k in merged.values()])


def reading_time_minutes(note: NoteResult, words_per_minute: int = WORDS_PER_MINUTE) -> int:
    words = sum(len(s.content.split()) for s in note.sections)
    return math.ceil(words / words_per_minute)


def _ranked(
    corpus: str,
    keywords: list[tuple[str, Optional[Provenance]]],
) -> list[KeywordFrequency]:
    counted = [
        KeywordFrequency(text, count_occurrences(corpus, text), provenance)
        for text, provenance in keywords
    ]
    counted = [f for f in counted if f.count > 0]
    counted.sort(key=lambda f: f.count, reverse=True)
    return counted
