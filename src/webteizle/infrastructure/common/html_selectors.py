"""CSS-selector-based HTML extraction with fallback chains.

Every helper accepts a primary selector and optional *fallback_selectors*;
the first selector that yields a match wins.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag


def parse_html(html: str) -> BeautifulSoup:
    """Parse an HTML string (or fragment) with the ``lxml`` parser."""
    return BeautifulSoup(html, "lxml")


def select_items(
    root: BeautifulSoup | Tag,
    selector: str,
    *fallback_selectors: str,
) -> list[Tag]:
    """Select elements via CSS, returning matches of the first hit selector."""
    for sel in (selector, *fallback_selectors):
        items = root.select(sel)
        if items:
            return items
    return []


def extract_inner_html(
    root: BeautifulSoup | Tag,
    selector: str,
    *fallback_selectors: str,
    default: str = "",
) -> str:
    """Return the inner markup of the first matching element."""
    for sel in (selector, *fallback_selectors):
        match = root.select_one(sel)
        if match is not None:
            return match.decode_contents()
    return default


def extract_all_texts(
    root: BeautifulSoup | Tag,
    selector: str,
    *fallback_selectors: str,
) -> list[str]:
    """Return the stripped, non-empty texts of all matching elements."""
    texts: list[str] = []
    for tag in select_items(root, selector, *fallback_selectors):
        text = tag.get_text(strip=True)
        if text:
            texts.append(text)
    return texts
