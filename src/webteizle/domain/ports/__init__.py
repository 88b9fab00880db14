from .hoster_resolver import EmbedDispatcherPort, HosterResolverPort
from .http_transport import FetchResponse, HttpTransportPort
from .site_client import SiteClientPort

__all__ = [
    "EmbedDispatcherPort",
    "FetchResponse",
    "HosterResolverPort",
    "HttpTransportPort",
    "SiteClientPort",
]
