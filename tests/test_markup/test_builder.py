"""Tests for HTML assembly."""

from progimg.config.schema import ImageOptions, LazyOptions, ProgressiveOptions
from progimg.markup.builder import (
    build_markup,
    default_sizes,
    display_size,
    should_lazy_load,
)
from progimg.types import ImageMetadata, ParsedDescriptor

URL = "https://cdn.example.com/a.jpg"
SRCSET = "https://cdn.example.com/a.jpg?w=400 400w, https://cdn.example.com/a.jpg 1200w"


class TestDisplaySize:
    def test_original_when_no_overrides(self, metadata):
        assert display_size(ParsedDescriptor(label="x"), metadata) == (1200, 800)

    def test_width_override_derives_height(self, metadata):
        assert display_size(ParsedDescriptor(label="x", width=300), metadata) == (300, 200)

    def test_both_overrides(self, metadata):
        assert display_size(ParsedDescriptor(label="x", width=300, height=50), metadata) == (300, 50)

    def test_derived_height_rounds(self):
        meta = ImageMetadata(width=1000, height=333)
        assert display_size(ParsedDescriptor(label="x", width=500), meta) == (500, 166)

    def test_derived_height_at_least_one(self):
        meta = ImageMetadata(width=4000, height=1)
        assert display_size(ParsedDescriptor(label="x", width=10), meta) == (10, 1)


class TestShouldLazyLoad:
    def test_first_images_eager(self, options):
        assert not should_lazy_load(options, 1)
        assert not should_lazy_load(options, 2)

    def test_later_images_lazy(self, options):
        assert should_lazy_load(options, 3)

    def test_disabled(self):
        opts = ImageOptions(lazy=LazyOptions(enable=False))
        assert not should_lazy_load(opts, 10)

    def test_skip_zero(self):
        opts = ImageOptions(lazy=LazyOptions(skip_first=0))
        assert should_lazy_load(opts, 1)


class TestBuildMarkup:
    def test_container_with_placeholder(self, metadata, options, placeholder):
        html = build_markup(ParsedDescriptor(label="photo"), URL, metadata, SRCSET, options, 1)
        assert html.startswith('<div class="img-container"')
        assert "aspect-ratio: 1200 / 800;" in html
        assert "max-width: 1200px;" in html
        assert placeholder in html
        assert f'src="{URL}"' in html
        assert 'alt="photo"' in html
        assert 'width="1200" height="800"' in html
        assert f'srcset="{SRCSET}"' in html
        assert 'sizes="(max-width: 1200px) 100vw, 1200px"' in html
        assert "onload=" in html
        assert html.endswith("></div>")

    def test_width_override(self, metadata, options):
        html = build_markup(ParsedDescriptor(label="photo", width=300), URL, metadata, SRCSET, options, 1)
        assert 'width="300" height="200"' in html
        assert "aspect-ratio: 300 / 200;" in html
        assert "max-width: 300px;" in html
        assert 'sizes="(max-width: 300px) 100vw, 300px"' in html

    def test_configured_sizes(self, metadata):
        opts = ImageOptions(progressive=ProgressiveOptions(sizes="100vw"))
        html = build_markup(ParsedDescriptor(label="x"), URL, metadata, SRCSET, opts, 1)
        assert 'sizes="100vw"' in html

    def test_eager_hint(self, metadata, options):
        html = build_markup(ParsedDescriptor(label="x"), URL, metadata, SRCSET, options, 1)
        assert 'fetchpriority="high"' in html
        assert 'loading="lazy"' not in html

    def test_lazy_hint(self, metadata, options):
        html = build_markup(ParsedDescriptor(label="x"), URL, metadata, SRCSET, options, 3)
        assert 'loading="lazy" decoding="async"' in html
        assert "fetchpriority" not in html

    def test_bare_img_without_placeholder(self, options):
        meta = ImageMetadata(width=1200, height=800)
        html = build_markup(ParsedDescriptor(label="x"), URL, meta, SRCSET, options, 1)
        assert html.startswith("<img ")
        assert "img-container" not in html
        assert "background-image" not in html
        assert "onload" not in html
        assert 'width="1200" height="800"' in html

    def test_escapes_attribute_values(self, metadata, options):
        html = build_markup(
            ParsedDescriptor(label='"><script>alert(1)</script>'),
            URL,
            metadata,
            SRCSET,
            options,
            1,
        )
        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert "&#34;" in html

    def test_escapes_query_ampersand(self, metadata, options):
        url = "https://cdn.example.com/a.jpg?v=2"
        srcset = "https://cdn.example.com/a.jpg?v=2&w=400 400w, https://cdn.example.com/a.jpg?v=2 1200w"
        html = build_markup(ParsedDescriptor(label="x"), url, metadata, srcset, options, 1)
        assert "?v=2&amp;w=400 400w" in html

    def test_deterministic(self, metadata, options):
        descriptor = ParsedDescriptor(label="x", width=640)
        first = build_markup(descriptor, URL, metadata, SRCSET, options, 4)
        second = build_markup(descriptor, URL, metadata, SRCSET, options, 4)
        assert first == second


def test_default_sizes():
    assert default_sizes(640) == "(max-width: 640px) 100vw, 640px"
