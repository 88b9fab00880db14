"""Regex extractors shared by the embed resolvers.

Playlist patterns are listed from most to least specific. Resolvers pick an
ordered subset and hand it to ``first_match``; the bare-URL patterns come
last because they can match unrelated content embedded in a page.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from urllib.parse import urlsplit

# JWPlayer config: file:"https://.../master.m3u8"
JW_FILE_M3U8 = re.compile(r"""file:\s*["']([^"']+\.m3u8[^"']*)["']""", re.IGNORECASE)

# JWPlayer sources array: sources:[{file:"..."}]
JW_SOURCES_FILE = re.compile(
    r"""sources:\s*\[\s*\{\s*file\s*:\s*["']([^"']+)["']""", re.IGNORECASE
)

# file: assignment restricted to absolute m3u8 URLs
FILE_HTTP_M3U8 = re.compile(
    r"""file\s*:\s*["'](https?://[^"']+\.m3u8[^"']*)["']""", re.IGNORECASE
)

# Any absolute m3u8 URL in the page
BARE_M3U8 = re.compile(r"""(https?://[^"'\s]+\.m3u8[^"'\s]*)""", re.IGNORECASE)

# Same, but stops at markup brackets as well
BARE_M3U8_STRICT = re.compile(
    r"""(https?://[^"'\s<>]+\.m3u8[^"'\s<>]*)""", re.IGNORECASE
)

BARE_MP4 = re.compile(r"""(https?://[^"'\s<>]+\.mp4[^"'\s<>]*)""", re.IGNORECASE)

IFRAME_SRC = re.compile(r"""<iframe[^>]+src=["']([^"']+)["']""", re.IGNORECASE)

# Applied in this order; &amp; after &quot; so "&amp;quot;" yields "&quot;".
_HTML_ENTITIES = (
    ("&quot;", '"'),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
)


def first_match(text: str, patterns: Iterable[re.Pattern[str]]) -> str | None:
    """Return group 1 of the first pattern that matches *text*, else ``None``."""
    if not text:
        return None
    for pattern in patterns:
        m = pattern.search(text)
        if m and m.group(1):
            return m.group(1)
    return None


def extract_iframe_src(html: str) -> str | None:
    """Return the ``src`` of the first ``<iframe>`` as an absolute URL."""
    m = IFRAME_SRC.search(html or "")
    if not m:
        return None
    return absolutize_url(m.group(1))


def decode_html_entities(text: str) -> str:
    """Decode the four entities used when JSON is stored in an HTML attribute.

    Only ``&quot; &amp; &lt; &gt;`` are decoded; any other entity is left as is.
    """
    for entity, char in _HTML_ENTITIES:
        text = text.replace(entity, char)
    return text


def absolutize_url(url: str) -> str:
    """Turn a scheme-relative ``//host/path`` URL into ``https://host/path``."""
    if url.startswith("//"):
        return "https:" + url
    return url


def origin_of(url: str) -> str:
    """Return ``scheme://host[:port]`` of an absolute http(s) URL, or ``""``."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return ""
    if parts.scheme not in ("http", "https") or not parts.netloc:
        return ""
    return f"{parts.scheme}://{parts.netloc}"
