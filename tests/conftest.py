"""
Test Configuration and Fixtures
"""
import io
import json

import pytest
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from backend.database import make_session_factory
from backend.storage import BlobStore, NoteLibrary
from modules.models import NoteResult, NoteSection


def make_pdf(pages):
    """Build a small PDF with one line of text per entry in each page's lines."""
    buf = io.BytesIO()
    pdf = canvas.Canvas(buf, pagesize=A4)
    for page in pages:
        y = 780
        for line in page.splitlines():
            pdf.drawString(72, y, line)
            y -= 18
        pdf.showPage()
    pdf.save()
    return buf.getvalue()


class FakeResponse:
    """Stand-in for requests.Response."""

    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else json.dumps(body)

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


def gemini_body(note_dict):
    """Wrap a note dict the way generateContent returns JSON-mode output."""
    return {
        "candidates": [
            {"content": {"parts": [{"text": json.dumps(note_dict)}], "role": "model"}}
        ]
    }


@pytest.fixture
def store():
    """Blob store on a private in-memory SQLite database"""
    return BlobStore(make_session_factory("sqlite:///:memory:"))


@pytest.fixture
def library(store):
    return NoteLibrary(store)


@pytest.fixture
def note():
    """A small generated note"""
    return NoteResult(
        title="Computer Networks Basics",
        sections=[
            NoteSection(
                heading="Introduction",
                content="The OSI Model describes seven layers. TCP runs above IP.",
            ),
            NoteSection(
                heading="OSI Model",
                content="Each layer of the OSI Model serves the layer above. NASA uses TCP too.",
            ),
        ],
        keywords_found=["TCP", "OSI Model", "Routing"],
    )


@pytest.fixture
def note_dict():
    return {
        "title": "Computer Networks Basics",
        "sections": [
            {"heading": "Introduction", "content": "Networks connect computers."},
            {"heading": "OSI Model", "content": "The OSI Model has seven layers."},
        ],
        "keywordsFound": ["OSI Model", "layers"],
    }


@pytest.fixture
def sample_pdf():
    """Two-page PDF that mentions "OSI Model" three times"""
    return make_pdf([
        "Introduction\nThe OSI Model is a reference model.\nPage 1 of 2",
        "Layers\nEvery OSI Model layer has a role.\nWe conclude the OSI Model is useful.\nPage 2 of 2",
    ])


@pytest.fixture
def blank_pdf():
    return make_pdf([""])
