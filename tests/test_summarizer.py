"""
Summarizer Tests
"""
import json

import pytest

from conftest import FakeResponse, gemini_body
from modules import gemini_client
from modules.errors import SummarizationError
from modules.models import NoteResult, ProcessingOptions
from modules.summarizer import GeminiSummarizer, parse_note


class TestParseNote:
    """The model reply must match the NoteResult shape exactly"""

    def test_valid(self, note_dict):
        result = parse_note(json.dumps(note_dict))
        assert isinstance(result, NoteResult)
        assert result.keywords_found == ["OSI Model", "layers"]
        assert result.sections[1].heading == "OSI Model"

    @pytest.mark.parametrize("raw", [
        "",
        "not json",
        '{"title": "t", "sections": []}',
        '{"title": "t", "sections": [{"heading": "h"}], "keywordsFound": []}',
    ])
    def test_invalid(self, raw):
        with pytest.raises(SummarizationError):
            parse_note(raw)


class TestGeminiSummarizer:

    def test_call(self, monkeypatch, note_dict):
        seen = {}

        def fake_post(url, params=None, json=None, timeout=None):
            seen["prompt"] = json["contents"][0]["parts"][0]["text"]
            return FakeResponse(200, gemini_body(note_dict))

        monkeypatch.setattr(gemini_client.requests, "post", fake_post)
        summarizer = GeminiSummarizer(api_key="key", model="gemini-2.0-flash", max_chars=20)
        result = summarizer("0123456789" * 5, ProcessingOptions(custom_keywords="OSI Model"))

        assert result.title == "Computer Networks Basics"
        assert "0123456789" * 2 in seen["prompt"]
        assert "0123456789" * 3 not in seen["prompt"]
        assert '"OSI Model"' in seen["prompt"]

    def test_malformed_reply(self, monkeypatch):
        body = {"candidates": [{"content": {"parts": [{"text": "{not json"}]}}]}
        monkeypatch.setattr(
            gemini_client.requests, "post", lambda *a, **kw: FakeResponse(200, body)
        )
        with pytest.raises(SummarizationError):
            GeminiSummarizer(api_key="key")("text", ProcessingOptions())
