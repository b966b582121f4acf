"""
Document export: NoteResult -> downloadable bytes.

Four fixed formats (PDF, Word, plain text, JSON). Only the JSON export is
meant to be imported back.
"""

from __future__ import annotations

import html
import io
import json
import re
from dataclasses import dataclass
from typing import Callable

from docx import Document
from pydantic import ValidationError
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from modules.errors import InputRejected
from modules.models import NoteResult


_WHITESPACE_RE = re.compile(r"\s+")


def export_filename(note: NoteResult, ext: str) -> str:
    return f"{_WHITESPACE_RE.sub('_', note.title)}_Notes.{ext}"


def _keywords_line(note: NoteResult) -> str:
    return f"Keywords: {', '.join(note.keywords_found)}"


# ── PDF ──────────────────────────────────────────────────────────────────────

_TITLE = ParagraphStyle("NoteTitle", fontName="Helvetica-Bold", fontSize=22, leading=26)
_KEYWORDS = ParagraphStyle("NoteKeywords", fontName="Helvetica", fontSize=12, leading=15)
_HEADING = ParagraphStyle("NoteHeading", fontName="Helvetica-Bold", fontSize=16, leading=20)
_BODY = ParagraphStyle("NoteBody", fontName="Helvetica", fontSize=11, leading=15)


def _pdf_text(text: str) -> str:
    return html.escape(text).replace("\n", "<br/>")


def export_pdf(note: NoteResult) -> bytes:
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
        title=note.title,
    )
    story = [Paragraph(_pdf_text(note.title), _TITLE), Spacer(1, 10)]
    if note.keywords_found:
        story.append(Paragraph(_pdf_text(_keywords_line(note)), _KEYWORDS))
        story.append(Spacer(1, 10))
    for section in note.sections:
        story.append(Paragraph(_pdf_text(section.heading), _HEADING))
        story.append(Spacer(1, 4))
        story.append(Paragraph(_pdf_text(section.content), _BODY))
        story.append(Spacer(1, 10))
    doc.build(story)
    return buf.getvalue()


# ── Word ─────────────────────────────────────────────────────────────────────

def export_docx(note: NoteResult) -> bytes:
    doc = Document()
    doc.add_heading(note.title, level=0)
    keywords = doc.add_paragraph()
    keywords.add_run(_keywords_line(note)).italic = True
    for section in note.sections:
        doc.add_heading(section.heading, level=1)
        doc.add_paragraph(section.content)
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


# ── Plain text ───────────────────────────────────────────────────────────────

def export_text(note: NoteResult) -> bytes:
    lines: list[str] = [note.title, "=" * len(note.title), ""]
    if note.keywords_found:
        lines += [_keywords_line(note), ""]
    for section in note.sections:
        lines += [
            section.heading.upper(),
            "-" * len(section.heading),
            section.content,
            "",
        ]
    return "\n".join(lines).encode("utf-8")


# ── JSON ─────────────────────────────────────────────────────────────────────

def export_json(note: NoteResult) -> bytes:
    return json.dumps(note.to_wire(), indent=2, ensure_ascii=False).encode("utf-8")


def note_from_json(data: bytes | str) -> NoteResult:
    """Re-import a JSON export."""
    try:
        return NoteResult.model_validate_json(data)
    except ValidationError as exc:
        raise InputRejected("This file is not a valid notes JSON export.") from exc


@dataclass(frozen=True)
class ExportFormat:
    label: str
    ext: str
    mime: str
    render: Callable[[NoteResult], bytes]


EXPORT_FORMATS: dict[str, ExportFormat] = {
    "pdf": ExportFormat("PDF", "pdf", "application/pdf", export_pdf),
    "docx": ExportFormat(
        "Word",
        "docx",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        export_docx,
    ),
    "txt": ExportFormat("Text", "txt", "text/plain;charset=utf-8", export_text),
    "json": ExportFormat("JSON", "json", "application/json;charset=utf-8", export_json),
}
