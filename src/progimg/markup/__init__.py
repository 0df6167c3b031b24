"""Markup — alt-text parsing, srcset generation and HTML assembly."""

from progimg.markup.builder import build_markup, display_size
from progimg.markup.descriptor import parse_descriptor
from progimg.markup.srcset import build_srcset

__all__ = [
    "build_markup",
    "build_srcset",
    "display_size",
    "parse_descriptor",
]
