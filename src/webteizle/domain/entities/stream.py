"""Domain entities for stream resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Provider(str, Enum):
    """Closed set of embed provider families, ``GENERIC`` being the default arm."""

    FILEMOON = "filemoon"
    VIDMOLY = "vidmoly"
    NETU = "netu"
    OKRU = "okru"
    MAILRU = "mailru"
    DZEN = "dzen"
    STREAMRUBY = "streamruby"
    PIXELDRAIN = "pixeldrain"
    GENERIC = "generic"


@dataclass(frozen=True)
class ExtractedVideo:
    """Result of running one provider resolver against an embed URL.

    Returned by HosterResolverPort implementations. ``headers`` are the
    headers a playback client must send, not the ones used for extraction.
    """

    video_url: str
    headers: dict[str, str] = field(default_factory=dict)
    is_hls: bool = False


@dataclass(frozen=True)
class ResolvedStream:
    """A directly playable stream for one source of a title."""

    title: str  # "Filemoon 1080p"
    stream_url: str
    headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.stream_url:
            raise ValueError("ResolvedStream requires a non-empty stream_url")


def stream_title(source_name: str, quality: int | str | None) -> str:
    """Build the display title for a stream: ``"<name> <quality>p"``."""
    suffix = f"{quality}p" if quality else ""
    return f"{source_name or 'Unknown'} {suffix}".strip()
