"""
Text normalization for raw PDF extractions.

Repairs the usual extraction artifacts (ligatures, words split across a line
wrap, page-number footers, citation markers, ragged whitespace) so the text
sent to the summarizer is clean prose.
"""

from __future__ import annotations

import re

# ── 1. typographic ligatures ─────────────────────────────────────────────────
_LIGATURES: dict[str, str] = {
    "ﬁ": "fi",
    "ﬂ": "fl",
    "ﬃ": "ffi",
    "ﬄ": "ffl",
    "ﬅ": "ft",
    "ﬆ": "st",
}

# ── 2. hyphenation across a line wrap ────────────────────────────────────────
# Continuation must start lowercase so "end- Of" stays two words. The
# lookahead leaves it unconsumed so "state- of- art" collapses in one pass.
_HYPHENATED_RE = re.compile(r"([a-zA-Z]+)-\s+(?=[a-z])")

# ── 3. footer / header noise, most specific first ────────────────────────────
_PAGE_OF_RE = re.compile(r"\bPage\s+\d+\s+(?:of|/)\s+\d+\b", re.IGNORECASE)
_PAGE_RE = re.compile(r"\bPage\s+\d+\b", re.IGNORECASE)
_N_OF_M_RE = re.compile(r"\b\d+\s+(?:of|/)\s+\d+\b", re.IGNORECASE)

# ── 4. citation markers: [1]  [12]  [3-5]  [3,5] ────────────────────────────
_CITATION_RE = re.compile(r"\[\d+(?:[-–,]\d+)*\]")

# ── 5. no whitespace before closing punctuation ──────────────────────────────
_SPACE_BEFORE_PUNCT_RE = re.compile(r"\s+([.,;:)])")

# ── 6. whitespace ────────────────────────────────────────────────────────────
_HORIZONTAL_WS_RE = re.compile(r"[ \t]+")
_BLANK_LINES_RE = re.compile(r"\n{3,}")


def normalize(raw: str) -> str:
    """
    Clean raw extracted PDF text.

    The rules run in a fixed order: the footer and citation patterns assume
    ligatures and hyphenation are already repaired, and whitespace is only
    collapsed once punctuation and citation spacing are settled. Rules 2-4
    repeat until nothing changes, since removing one marker can expose
    another (``2 of [1] 3``). Every change shortens the text, so the loop ends.

    Parameters
    ----------
    raw : str
        Concatenated page text as returned by the extractor.

    Returns
    -------
    str
        Normalized text with no page-number footers, split words, bracketed
        numeric citations, non-breaking spaces, runs of 3+ newlines or
        whitespace before ``.,;:)``.
    """
    text = expand_ligatures(raw)
    previous = None
    while text != previous:
        previous = text
        text = _HYPHENATED_RE.sub(r"\1", text)
        text = strip_page_numbers(text)
        text = _CITATION_RE.sub("", text)
    text = _SPACE_BEFORE_PUNCT_RE.sub(r"\1", text)
    text = normalize_whitespace(text)
    return text.strip()


def expand_ligatures(text: str) -> str:
    for ligature, letters in _LIGATURES.items():
        text = text.replace(ligature, letters)
    return text


def strip_page_numbers(text: str) -> str:
    """Remove "Page N of M", "Page N" and bare "N of M" / "N / M" markers."""
    text = _PAGE_OF_RE.sub(" ", text)
    text = _PAGE_RE.sub(" ", text)
    return _N_OF_M_RE.sub(" ", text)


def normalize_whitespace(text: str) -> str:
    text = text.replace("\u00a0", " ")
    text = _HORIZONTAL_WS_RE.sub(" ", text)
    return _BLANK_LINES_RE.sub("\n\n", text)
