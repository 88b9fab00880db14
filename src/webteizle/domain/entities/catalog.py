"""Domain entities for the title catalog (search, details, watch options).

Pure value objects — no framework dependencies, no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Fallback descriptions shown by the host when details are unavailable.
NOT_FOUND = "Film bulunamadı"
LOAD_FAILED = "Detaylar yüklenemedi"
NO_DESCRIPTION = "Açıklama bulunamadı"
UNEXPECTED_ERROR = "Hata oluştu"


class Language(str, Enum):
    """Audio track selector understood by the sources endpoint (``dil``)."""

    DUBLAJ = "0"  # Turkish dub
    ALTYAZI = "1"  # original audio, Turkish subtitles


@dataclass(frozen=True)
class SearchResult:
    """A single title returned by a keyword search."""

    title: str
    image: str
    href: str  # detail page, e.g. https://webteizle3.xyz/hakkinda/{slug}


@dataclass(frozen=True)
class TitleDetail:
    """Free-text metadata for a title. Fields are always present, possibly empty."""

    description: str = ""
    aliases: str = ""  # "Dram, Gerilim | 120 dakika"
    airdate: str = ""  # "Yıl: 2024 | IMDB: 7,1"


@dataclass(frozen=True)
class WatchOption:
    """A watch page for one language track of a title."""

    href: str
    number: int  # 1 = dublaj, 2 = altyazi


@dataclass(frozen=True)
class SourceDescriptor:
    """One backend offering playback for a title.

    ``id`` is opaque and only meaningful for a single embed lookup.
    """

    id: str
    name: str = ""
    quality: int | None = None
