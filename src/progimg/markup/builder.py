"""Jinja2-based HTML assembly for enriched images."""

from __future__ import annotations

from jinja2 import Environment
from markupsafe import Markup

from progimg.config.schema import ImageOptions
from progimg.types import ImageMetadata, ParsedDescriptor

_jinja_env = Environment(autoescape=True, keep_trailing_newline=False)

_IMG_TEMPLATE = _jinja_env.from_string(
    '<img src="{{ src }}" alt="{{ alt }}" width="{{ width }}" height="{{ height }}"'
    ' srcset="{{ srcset }}" sizes="{{ sizes }}"'
    "{% if lazy %} loading=\"lazy\" decoding=\"async\"{% else %} fetchpriority=\"high\"{% endif %}"
    ' style="{{ style }}"'
    '{% if onload %} onload="{{ onload }}"{% endif %}>'
)

_CONTAINER_TEMPLATE = _jinja_env.from_string(
    '<div class="img-container" style="position: relative; overflow: hidden;'
    " aspect-ratio: {{ width }} / {{ height }}; max-width: {{ width }}px; width: 100%;"
    " background-image: url('{{ placeholder }}'); background-size: cover;"
    ' background-repeat: no-repeat;">{{ img }}</div>'
)

_FADE_IN_STYLE = "width: 100%; height: auto; display: block; transition: opacity 0.4s; opacity: 0;"
_FADE_IN_ONLOAD = "this.style.opacity=1; this.parentElement.style.backgroundImage='none';"


def display_size(descriptor: ParsedDescriptor, metadata: ImageMetadata) -> tuple[int, int]:
    """Resolve rendered width/height from overrides and the original aspect ratio."""
    width = descriptor.width or metadata.width
    if descriptor.height is not None:
        return width, descriptor.height
    if width == metadata.width:
        return width, metadata.height
    return width, max(1, round(metadata.height * width / metadata.width))


def default_sizes(display_width: int) -> str:
    return f"(max-width: {display_width}px) 100vw, {display_width}px"


def should_lazy_load(options: ImageOptions, image_index: int) -> bool:
    """Images past the first ``skip_first`` in a document load lazily."""
    return options.lazy.enable and image_index > options.lazy.skip_first


def build_markup(
    descriptor: ParsedDescriptor,
    url: str,
    metadata: ImageMetadata,
    srcset: str,
    options: ImageOptions,
    image_index: int,
) -> str:
    """Render the replacement HTML for one enriched image.

    With a placeholder the image sits in an aspect-ratio box painted with the
    placeholder and fades in on load; without one a bare ``<img>`` is returned.
    """
    width, height = display_size(descriptor, metadata)
    lazy = should_lazy_load(options, image_index)
    sizes = options.progressive.sizes or default_sizes(width)

    if not metadata.has_placeholder:
        return _IMG_TEMPLATE.render(
            src=url,
            alt=descriptor.label,
            width=width,
            height=height,
            srcset=srcset,
            sizes=sizes,
            lazy=lazy,
            style=f"max-width: {width}px; width: 100%; height: auto; display: block;",
            onload=None,
        )

    img = _IMG_TEMPLATE.render(
        src=url,
        alt=descriptor.label,
        width=width,
        height=height,
        srcset=srcset,
        sizes=sizes,
        lazy=lazy,
        style=_FADE_IN_STYLE,
        onload=_FADE_IN_ONLOAD,
    )
    return _CONTAINER_TEMPLATE.render(
        width=width,
        height=height,
        placeholder=metadata.placeholder,
        img=Markup(img),
    )
