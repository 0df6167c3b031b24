"""Tests for alt-text size suffix parsing."""

import pytest

from progimg.markup.descriptor import parse_descriptor


class TestParseDescriptor:
    @pytest.mark.parametrize(
        ("text", "label", "width", "height"),
        [
            ("Alt text", "Alt text", None, None),
            ("Alt text|300", "Alt text", 300, None),
            ("Alt text|640x480", "Alt text", 640, 480),
            ("My Image|100x200", "My Image", 100, 200),
            ("spaced alt |500", "spaced alt", 500, None),
            ("Large number|2048x1536", "Large number", 2048, 1536),
            ("|300", "", 300, None),
            ("|800x600", "", 800, 600),
            ("Single pixel|1x1", "Single pixel", 1, 1),
            ("  padded|300  ", "padded", 300, None),
        ],
    )
    def test_well_formed(self, text, label, width, height):
        result = parse_descriptor(text)
        assert result.label == label
        assert result.width == width
        assert result.height == height

    @pytest.mark.parametrize(
        "text",
        [
            "No dimensions here",
            "Invalid|abc",
            "Partial|300xabc",
            "Trailing|300px",
            "Spaced|300 x 200",
            "Zero|0",
            "Zero height|300x0",
            "Negative|-300",
            "Unicode digits|٣٠٠",
            "",
        ],
    )
    def test_malformed_keeps_whole_text(self, text):
        result = parse_descriptor(text)
        assert result.label == text
        assert result.width is None
        assert result.height is None
        assert not result.has_overrides

    def test_none_is_empty_label(self):
        assert parse_descriptor(None).label == ""

    def test_last_pipe_splits(self):
        result = parse_descriptor("a|b|300")
        assert result.label == "a|b"
        assert result.width == 300

    def test_idempotent_on_label(self):
        first = parse_descriptor("photo|300x200")
        again = parse_descriptor(first.label)
        assert again.label == first.label
        assert not again.has_overrides
