"""
Keyword Matcher Tests
"""
from modules.keywords import (
    Match,
    PlainText,
    Provenance,
    annotate,
    is_probable_acronym,
    keyword_pattern,
    longest_first,
    matches,
    merge_keywords,
    parse_custom_keywords,
)


def _joined(segments):
    return "".join(seg.text for seg in segments)


class TestParsing:
    """Comma-separated keyword fields"""

    def test_split_and_trim(self):
        assert parse_custom_keywords(" OSI Model, TCP ,, ") == ["OSI Model", "TCP"]

    def test_empty(self):
        assert parse_custom_keywords("") == []
        assert parse_custom_keywords(None) == []


class TestKeywordSet:
    """Merging and ordering the working keyword set"""

    def test_user_wins_on_duplicates(self):
        merged = merge_keywords(["osi model"], ["OSI Model", "TCP"])
        assert [(k.text, k.provenance) for k in merged] == [
            ("osi model", Provenance.USER),
            ("TCP", Provenance.AI),
        ]

    def test_empty_strings_excluded(self):
        assert merge_keywords(["", "  "], [""]) == []

    def test_longest_first_is_stable(self):
        assert longest_first(["ab", "Network", "cd", "Neural Network"]) == [
            "Neural Network",
            "Network",
            "ab",
            "cd",
        ]

    def test_empty_pattern(self):
        assert keyword_pattern([]) is None


class TestAnnotate:
    """Splitting text into plain and matched segments"""

    def test_empty_keyword_set(self):
        text = "Nothing to see here."
        assert annotate(text, [], []) == [PlainText(text)]

    def test_longest_first_no_overlap(self):
        segments = annotate("Neural Network training", ["Network", "Neural Network"], [])
        found = matches(segments)
        assert len(found) == 1
        assert found[0].text == "Neural Network"
        assert (found[0].start, found[0].end) == (0, 14)

    def test_word_boundary(self):
        assert matches(annotate("Internationalization", ["nation"], [])) == []

    def test_underscore_is_not_a_word_character(self):
        found = matches(annotate("snake_TCP_case", [], ["TCP"]))
        assert [m.text for m in found] == ["TCP"]

    def test_case_insensitive_keeps_original_casing(self):
        found = matches(annotate("the osi MODEL and the OSI Model", [], ["OSI Model"]))
        assert [m.text for m in found] == ["osi MODEL", "OSI Model"]
        assert all(m.keyword == "OSI Model" for m in found)

    def test_acronym_flag_uses_matched_span(self):
        found = matches(annotate("NASA and Nasa", [], ["nasa"]))
        assert [(m.text, m.is_acronym) for m in found] == [("NASA", True), ("Nasa", False)]

    def test_acronym_with_digits(self):
        assert is_probable_acronym("IPv6") is False
        assert is_probable_acronym("3GPP") is True
        assert is_probable_acronym("A") is False

    def test_provenance_user_precedence(self):
        found = matches(annotate("TCP and IP", ["tcp"], ["TCP", "IP"]))
        assert [(m.text, m.provenance) for m in found] == [
            ("TCP", Provenance.USER),
            ("IP", Provenance.AI),
        ]

    def test_regex_metacharacters_are_literal(self):
        segments = annotate("C++ and C# differ from C.", ["C++", "C#"], [])
        assert [m.text for m in matches(segments)] == ["C++", "C#"]
        assert matches(annotate("Cx and C", ["C+"], [])) == []

    def test_segments_cover_input_without_empty_plain_text(self):
        text = "TCP over IP, then TCP"
        segments = annotate(text, [], ["TCP", "IP"])
        assert _joined(segments) == text
        assert isinstance(segments[0], Match)
        assert isinstance(segments[-1], Match)
        assert all(seg.text for seg in segments)

    def test_segment_offsets(self):
        text = "We use TCP daily."
        segments = annotate(text, ["TCP"], [])
        assert segments == [
            PlainText("We use "),
            Match("TCP", "TCP", Provenance.USER, True, 7, 10),
            PlainText(" daily."),
        ]
