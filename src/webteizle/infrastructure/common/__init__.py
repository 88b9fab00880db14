"""Common infrastructure utilities."""

from __future__ import annotations

from .parsers import clean_html, clean_title, extract_slug_from_url, normalize_image_url
from .patterns import decode_html_entities, extract_iframe_src, first_match

__all__ = [
    "clean_html",
    "clean_title",
    "decode_html_entities",
    "extract_iframe_src",
    "extract_slug_from_url",
    "first_match",
    "normalize_image_url",
]
