"""Factory building the full resolver set for the registry."""

from __future__ import annotations

from webteizle.domain.ports.hoster_resolver import HosterResolverPort
from webteizle.domain.ports.http_transport import HttpTransportPort

from ._base import BROWSER_UA, DEFAULT_SITE_URL
from .dzen import DzenResolver
from .filemoon import FilemoonResolver
from .generic import GenericResolver
from .mailru import MailRuResolver
from .netu import NetuResolver
from .okru import OkRuResolver
from .pixeldrain import PixelDrainResolver
from .streamruby import StreamRubyResolver
from .vidmoly import VidmolyResolver

_PAGE_RESOLVERS = (
    FilemoonResolver,
    VidmolyResolver,
    NetuResolver,
    OkRuResolver,
    MailRuResolver,
    DzenResolver,
    StreamRubyResolver,
    GenericResolver,
)


def create_all_resolvers(
    transport: HttpTransportPort,
    *,
    site_url: str = DEFAULT_SITE_URL,
    user_agent: str = BROWSER_UA,
) -> list[HosterResolverPort]:
    """Create one resolver per provider family plus the generic fallback."""
    resolvers: list[HosterResolverPort] = [
        cls(transport, site_url=site_url, user_agent=user_agent)
        for cls in _PAGE_RESOLVERS
    ]
    resolvers.append(PixelDrainResolver())
    return resolvers
