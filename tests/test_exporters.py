"""
Document Export Tests
"""
import io
import json

import pdfplumber
import pytest
from docx import Document

from modules.errors import InputRejected
from modules.exporters import (
    EXPORT_FORMATS,
    export_docx,
    export_filename,
    export_json,
    export_pdf,
    export_text,
    note_from_json,
)
from modules.models import NoteResult


class TestFilename:

    def test_spaces_replaced(self, note):
        assert export_filename(note, "pdf") == "Computer_Networks_Basics_Notes.pdf"


class TestFormats:
    """Each format is a pure function of the note"""

    def test_pdf(self, note):
        data = export_pdf(note)
        assert data.startswith(b"%PDF-")
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            text = "\n".join(page.extract_text() or "" for page in pdf.pages)
        assert "Computer Networks Basics" in text
        assert "Keywords: TCP, OSI Model, Routing" in text

    def test_docx(self, note):
        doc = Document(io.BytesIO(export_docx(note)))
        paragraphs = [p.text for p in doc.paragraphs]
        assert paragraphs[0] == "Computer Networks Basics"
        assert paragraphs[1] == "Keywords: TCP, OSI Model, Routing"
        assert "Introduction" in paragraphs
        assert doc.paragraphs[1].runs[0].italic

    def test_text_layout(self, note):
        lines = export_text(note).decode("utf-8").split("\n")
        assert lines[:5] == [
            "Computer Networks Basics",
            "=" * len("Computer Networks Basics"),
            "",
            "Keywords: TCP, OSI Model, Routing",
            "",
        ]
        assert lines[5:8] == [
            "INTRODUCTION",
            "-" * len("Introduction"),
            "The OSI Model describes seven layers. TCP runs above IP.",
        ]

    def test_text_without_keywords(self):
        bare = NoteResult(title="T", sections=[], keywords_found=[])
        assert export_text(bare) == b"T\n=\n"

    def test_json_uses_wire_names(self, note):
        data = json.loads(export_json(note))
        assert set(data) == {"title", "sections", "keywordsFound"}

    def test_registry(self, note):
        assert set(EXPORT_FORMATS) == {"pdf", "docx", "txt", "json"}
        for spec in EXPORT_FORMATS.values():
            assert isinstance(spec.render(note), bytes)


class TestJsonImport:

    def test_round_trip(self, note):
        assert note_from_json(export_json(note)) == note

    def test_unicode_kept(self):
        note = NoteResult(title="Résumé", sections=[], keywords_found=["naïve"])
        assert "Résumé".encode("utf-8") in export_json(note)

    def test_invalid(self):
        with pytest.raises(InputRejected):
            note_from_json(b'{"title": "only"}')
