"""Tests for srcset generation."""

from progimg.markup.srcset import build_srcset, srcset_widths, width_variant_url


def _widths(srcset: str) -> list[int]:
    return [int(part.rsplit(" ", 1)[1].rstrip("w")) for part in srcset.split(", ")]


class TestSrcsetWidths:
    def test_filters_and_appends_original(self):
        assert srcset_widths(1000, [400, 600, 800, 1200, 2000]) == [400, 600, 800, 1000]

    def test_dedupes_and_sorts(self):
        assert srcset_widths(1000, [800, 400, 800, 400]) == [400, 800, 1000]

    def test_candidate_equal_to_original_collapses(self):
        assert srcset_widths(800, [400, 800]) == [400, 800]

    def test_empty_candidates(self):
        assert srcset_widths(500, []) == [500]


class TestWidthVariantUrl:
    def test_without_query(self):
        assert width_variant_url("https://cdn.example.com/a.jpg", 400) == "https://cdn.example.com/a.jpg?w=400"

    def test_with_query(self):
        assert width_variant_url("https://cdn.example.com/a.jpg?q=80", 400) == "https://cdn.example.com/a.jpg?q=80&w=400"


class TestBuildSrcset:
    def test_full_descriptor(self):
        result = build_srcset("https://cdn.example.com/a.jpg", 1200, [400, 800, 1200, 2000])
        assert result == (
            "https://cdn.example.com/a.jpg?w=400 400w, "
            "https://cdn.example.com/a.jpg?w=800 800w, "
            "https://cdn.example.com/a.jpg 1200w"
        )

    def test_all_candidates_too_large(self):
        result = build_srcset("https://cdn.example.com/a.jpg", 300, [400, 600])
        assert result == "https://cdn.example.com/a.jpg 300w"

    def test_no_candidates(self):
        assert build_srcset("https://cdn.example.com/a.jpg", 300, []) == "https://cdn.example.com/a.jpg 300w"

    def test_original_entry_keeps_query(self):
        result = build_srcset("https://cdn.example.com/a.jpg?v=2", 900, [400])
        assert result == "https://cdn.example.com/a.jpg?v=2&w=400 400w, https://cdn.example.com/a.jpg?v=2 900w"

    def test_widths_strictly_ascending(self):
        result = build_srcset("https://cdn.example.com/a.jpg", 2500, [3000, 400, 2000, 400, 600, 1200])
        widths = _widths(result)
        assert widths == sorted(set(widths))
        assert widths[-1] == 2500
        assert result.endswith("https://cdn.example.com/a.jpg 2500w")
