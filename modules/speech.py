"""
Read-aloud support.

Builds the text to speak and the small HTML/JS snippets that drive the
browser's Web Speech API from a Streamlit component.
"""

from __future__ import annotations

import json
import re

from config import SPEECH_RATE_MAX, SPEECH_RATE_MIN
from modules.models import NoteResult

# 2-6 capitals, optional plural "s"; longer runs are shouted headings.
_ACRONYM_RE = re.compile(r"\b([A-Z]{2,6})(s?)\b")


def spell_acronyms(text: str) -> str:
    """Spell acronyms letter by letter: ``OSI`` -> ``O S I``, ``APIs`` -> ``A P I s``."""

    def _spell(match: re.Match) -> str:
        letters = " ".join(match.group(1))
        suffix = match.group(2)
        return f"{letters} {suffix}" if suffix else letters

    return _ACRONYM_RE.sub(_spell, text)


def speech_text(note: NoteResult, spell: bool = False) -> str:
    text = ".\n\n".join(f"{s.heading}. {s.content}" for s in note.sections)
    return spell_acronyms(text) if spell else text


def clamp_rate(rate: float) -> float:
    return max(SPEECH_RATE_MIN, min(SPEECH_RATE_MAX, float(rate)))


def speech_html(text: str, rate: float = 1.0) -> str:
    """Snippet that cancels any current utterance and speaks *text*."""
    literal = json.dumps(text).replace("</", "<\\/")
    return f"""<script>
  const synth = window.parent.speechSynthesis || window.speechSynthesis;
  synth.cancel();
  const utterance = new SpeechSynthesisUtterance({literal});
  utterance.rate = {clamp_rate(rate)};
  synth.speak(utterance);
</script>"""


def cancel_speech_html() -> str:
    return """<script>
  (window.parent.speechSynthesis || window.speechSynthesis).cancel();
</script>"""
