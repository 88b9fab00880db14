"""webteizle: search, metadata and stream resolution for webteizle titles."""

__version__ = "0.1.0"
