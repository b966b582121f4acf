"""
HTML rendering of annotated text for the Streamlit results view.
"""

from __future__ import annotations

import html
from typing import Iterable

from modules.keywords import Match, Provenance, Segment

_TITLES = {
    Provenance.USER: "User Keyword",
    Provenance.AI: "AI Identified Topic",
}

HIGHLIGHT_CSS = """
<style>
  .kw { font-weight: 500; padding: 0 2px; border-radius: 3px; border-bottom: 1px solid; }
  .kw-user { background: #fef08a; color: #713f12; border-color: #fde047; }
  .kw-ai { background: #dbeafe; color: #1e3a8a; border-color: #bfdbfe; }
  .kw-acronym { border-bottom: 2px dashed #6b7280; cursor: help; }
  .note-body { white-space: pre-wrap; line-height: 1.6; }
</style>
"""


def _escape(text: str) -> str:
    # A raw blank line would end the HTML block inside st.markdown.
    return html.escape(text).replace("\n", "<br>")


def pronunciation_hint(span: str) -> str:
    """``NASA`` -> ``Pronounce: N-A-S-A``."""
    return "Pronounce: " + "-".join(span)


def segments_to_html(segments: Iterable[Segment], show_guides: bool = False) -> str:
    """
    Render segments as escaped HTML on a single line, newlines as ``<br>``.

    Matches become ``<span class="kw kw-user|kw-ai">``. With *show_guides*,
    acronym matches get a dashed underline and a pronunciation tooltip.
    """
    out: list[str] = []
    for seg in segments:
        if not isinstance(seg, Match):
            if seg.text:
                out.append(_escape(seg.text))
            continue

        classes = ["kw", f"kw-{seg.provenance.value}"]
        title = _TITLES[seg.provenance]
        if show_guides and seg.is_acronym:
            classes.append("kw-acronym")
            title = f"{title} | {pronunciation_hint(seg.text)}"
        out.append(
            f'<span class="{" ".join(classes)}" title="{html.escape(title)}">'
            f"{_escape(seg.text)}</span>"
        )
    return "".join(out)
