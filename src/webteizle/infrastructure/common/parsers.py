"""Parsing utilities for site URLs, titles and HTML fragments."""

from __future__ import annotations

import re

_SLUG_PATTERNS = (
    re.compile(r"/hakkinda/([^/?#]+)"),  # detail page
    re.compile(r"/izle/[^/]+/([^/?#]+)"),  # watch page: /izle/{dublaj|altyazi}/{slug}
)
_LAST_SEGMENT_RE = re.compile(r"/([^/?#]+)/?$")
_TRAILING_YEAR_RE = re.compile(r"\s*\(\d{4}\)\s*$")
_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")

_TEXT_ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
)


def extract_slug_from_url(url: str | None) -> str | None:
    """Extract the title slug from a detail, watch or search-result URL.

    Tries ``/hakkinda/{slug}``, then ``/izle/{type}/{slug}``, then the last
    path segment as long as it does not look like a file name.
    """
    if not url:
        return None

    for pattern in _SLUG_PATTERNS:
        m = pattern.search(url)
        if m:
            return m.group(1)

    m = _LAST_SEGMENT_RE.search(url)
    if m and "." not in m.group(1):
        return m.group(1)
    return None


def clean_title(title: str | None) -> str:
    """Strip a trailing ``(YYYY)`` and surrounding whitespace."""
    if not title:
        return ""
    return _TRAILING_YEAR_RE.sub("", title).strip()


def normalize_image_url(url: str | None, base_url: str) -> str:
    """Make a poster URL absolute against *base_url*."""
    if not url:
        return ""
    if url.startswith("//"):
        return "https:" + url
    if url.startswith("/"):
        return base_url + url
    return url


def clean_html(text: str | None) -> str:
    """Drop tags, decode common entities and collapse whitespace."""
    if not text:
        return ""
    text = _TAG_RE.sub(" ", text)
    for entity, char in _TEXT_ENTITIES:
        text = text.replace(entity, char)
    return _WS_RE.sub(" ", text).strip()
