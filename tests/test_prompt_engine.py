"""
Prompt Construction Tests
"""
from modules.models import ProcessingOptions
from modules.prompt_engine import NOTE_SCHEMA, build_notes_prompt, truncate


class TestTruncate:

    def test_short_text_unchanged(self):
        assert truncate("abc", 10) == "abc"

    def test_max_chars_applied(self):
        assert truncate("x" * 50, 30) == "x" * 30


class TestNotesPrompt:
    """The instruction assembled from ProcessingOptions"""

    def test_defaults_request_all_sections(self):
        prompt = build_notes_prompt("Some document.", ProcessingOptions())
        assert "Some document." in prompt
        assert "**Introduction**" in prompt
        assert "**Abstract**" in prompt
        assert "**Conclusion**" in prompt
        assert '"detailed" summary' in prompt
        assert "comprehensive explanations" in prompt
        assert "HIGHEST PRIORITY" not in prompt

    def test_options_select_sections(self):
        options = ProcessingOptions(
            extract_introduction=True,
            extract_summary=False,
            extract_conclusion=True,
            custom_keywords="OSI Model",
            summarization_level="brief",
        )
        prompt = build_notes_prompt("doc", options)
        assert "**Abstract**" not in prompt
        assert "**Introduction**" in prompt
        assert "**Conclusion**" in prompt
        assert "Keep descriptions short and bulleted." in prompt

    def test_custom_keywords_come_first(self):
        options = ProcessingOptions(custom_keywords=" OSI Model, TCP ")
        prompt = build_notes_prompt("doc", options)
        assert '"OSI Model, TCP"' in prompt
        assert prompt.index("HIGHEST PRIORITY") < prompt.index("**Introduction**")

    def test_text_truncated_to_max_chars(self):
        prompt = build_notes_prompt("A" * 100 + "TAIL", ProcessingOptions(), max_chars=100)
        assert "A" * 100 in prompt
        assert "TAIL" not in prompt

    def test_options_accept_wire_names(self):
        options = ProcessingOptions.model_validate(
            {"extractSummary": False, "customKeywords": "a, b", "summarizationLevel": "brief"}
        )
        assert options.extract_summary is False
        assert options.user_keywords == ["a", "b"]


class TestSchema:

    def test_required_fields(self):
        assert NOTE_SCHEMA["required"] == ["title", "sections", "keywordsFound"]
        assert NOTE_SCHEMA["properties"]["sections"]["items"]["required"] == ["heading", "content"]
