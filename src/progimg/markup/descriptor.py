"""Alt-text parser for ``label|W`` and ``label|WxH`` size suffixes."""

from __future__ import annotations

import re

from progimg.types import ParsedDescriptor

_SIZE_SUFFIX = re.compile(r"^(?P<label>.*)\|(?P<width>[0-9]+)(?:x(?P<height>[0-9]+))?$", re.DOTALL)


def parse_descriptor(text: str | None) -> ParsedDescriptor:
    """Split alt text into a label and optional display-size overrides.

    Anything that is not a well-formed numeric suffix is kept verbatim as the
    label, with no overrides.
    """
    original = text or ""
    match = _SIZE_SUFFIX.match(original.strip())
    if match is None:
        return ParsedDescriptor(label=original)

    width = int(match.group("width"))
    height = int(match.group("height")) if match.group("height") is not None else None
    if width <= 0 or (height is not None and height <= 0):
        return ParsedDescriptor(label=original)

    return ParsedDescriptor(
        label=match.group("label").strip(),
        width=width,
        height=height,
    )
