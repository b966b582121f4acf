"""
Keyword matching and text annotation.

Splits a body of text into an ordered run of plain and matched segments for
highlighting. Matching is case-insensitive, literal, whole-word and
longest-first, and matches never overlap.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Union


class Provenance(str, Enum):
    USER = "user"
    AI = "ai"


@dataclass(frozen=True)
class Keyword:
    text: str
    provenance: Provenance


@dataclass(frozen=True)
class PlainText:
    text: str


@dataclass(frozen=True)
class Match:
    """A keyword occurrence; ``text`` keeps the document's original casing."""

    text: str
    keyword: str
    provenance: Provenance
    is_acronym: bool
    start: int
    end: int


Segment = Union[PlainText, Match]

# A word character is a letter or a digit; underscore does not count.
_BEFORE = r"(?<![^\W_])"
_AFTER = r"(?![^\W_])"
_ACRONYM_RE = re.compile(r"[A-Z0-9]{2,}")


def parse_custom_keywords(raw: str) -> list[str]:
    """Split a comma-separated keyword field into trimmed, non-empty terms."""
    return [part.strip() for part in (raw or "").split(",") if part.strip()]


def merge_keywords(
    user_keywords: Iterable[str],
    ai_keywords: Iterable[str],
) -> list[Keyword]:
    """
    Union both keyword sources, de-duplicated case-insensitively.

    User keywords come first, so a term supplied by both sources keeps the
    user's spelling and ``Provenance.USER``.
    """
    merged: dict[str, Keyword] = {}
    for source, provenance in ((user_keywords, Provenance.USER), (ai_keywords, Provenance.AI)):
        for raw in source:
            text = (raw or "").strip()
            if text and text.lower() not in merged:
                merged[text.lower()] = Keyword(text, provenance)
    return list(merged.values())


def longest_first(keywords: Iterable[str]) -> list[str]:
    """Distinct (case-insensitive) non-empty keywords, longest first, stable."""
    seen: dict[str, str] = {}
    for raw in keywords:
        text = (raw or "").strip()
        if text and text.lower() not in seen:
            seen[text.lower()] = text
    return sorted(seen.values(), key=len, reverse=True)


def keyword_pattern(keywords: Iterable[str]) -> re.Pattern[str] | None:
    """
    Compile one whole-word, case-insensitive pattern for *keywords*.

    Each alternative is captured in a named group ``k<i>`` where ``i`` indexes
    ``longest_first(keywords)``. Returns ``None`` for an empty keyword set.
    """
    ordered = longest_first(keywords)
    if not ordered:
        return None
    alternatives = "|".join(
        f"(?P<k{i}>{re.escape(text)})" for i, text in enumerate(ordered)
    )
    return re.compile(f"{_BEFORE}(?:{alternatives}){_AFTER}", re.IGNORECASE)


def is_probable_acronym(span: str) -> bool:
    return _ACRONYM_RE.fullmatch(span) is not None


def annotate(
    text: str,
    user_keywords: Iterable[str],
    ai_keywords: Iterable[str],
) -> list[Segment]:
    """
    Split *text* into plain and matched segments, left to right.

    Segments cover the whole input without gaps or overlaps. Empty plain
    segments are never emitted.
    """
    keywords = merge_keywords(user_keywords, ai_keywords)
    pattern = keyword_pattern(k.text for k in keywords)
    if pattern is None:
        return [PlainText(text)]

    by_text = {k.text.lower(): k for k in keywords}
    ordered = longest_first(k.text for k in keywords)

    segments: list[Segment] = []
    cursor = 0
    for found in pattern.finditer(text):
        if found.start() > cursor:
            segments.append(PlainText(text[cursor:found.start()]))
        keyword = by_text[ordered[int(found.lastgroup[1:])].lower()]
        span = found.group(0)
        segments.append(
            Match(
                text=span,
                keyword=keyword.text,
                provenance=keyword.provenance,
                is_acronym=is_probable_acronym(span),
                start=found.start(),
                end=found.end(),
            )
        )
        cursor = found.end()

    if cursor < len(text):
        segments.append(PlainText(text[cursor:]))
    return segments


def matches(segments: Iterable[Segment]) -> list[Match]:
    return [seg for seg in segments if isinstance(seg, Match)]
