from .catalog import Language, SearchResult, SourceDescriptor, TitleDetail, WatchOption
from .stream import ExtractedVideo, Provider, ResolvedStream, stream_title

__all__ = [
    "ExtractedVideo",
    "Language",
    "Provider",
    "ResolvedStream",
    "SearchResult",
    "SourceDescriptor",
    "TitleDetail",
    "WatchOption",
    "stream_title",
]
