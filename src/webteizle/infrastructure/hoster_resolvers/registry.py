"""Registry that dispatches embed URL resolution to per-provider resolvers."""

from __future__ import annotations

import structlog

from webteizle.domain.entities.stream import ExtractedVideo, Provider
from webteizle.domain.ports.hoster_resolver import HosterResolverPort

log = structlog.get_logger(__name__)

# Checked in declaration order; first substring hit wins.
_PROVIDER_TABLE: tuple[tuple[Provider, tuple[str, ...]], ...] = (
    (Provider.FILEMOON, ("filemoon",)),
    (Provider.VIDMOLY, ("vidmoly",)),
    (Provider.NETU, ("netu", "waaw", "hqq")),
    (Provider.OKRU, ("ok.ru", "odnoklassniki")),
    (Provider.MAILRU, ("mail.ru",)),
    (Provider.DZEN, ("dzen", "zen.yandex")),
    (Provider.STREAMRUBY, ("streamruby", "rubyvidhub")),
    (Provider.PIXELDRAIN, ("pixeldrain",)),
)


def classify_embed_url(url: str) -> Provider:
    """Map an embed URL to its provider family.

    Matching is a case-insensitive substring test over the whole URL,
    so path and query never prevent a match. Unknown URLs map to
    ``Provider.GENERIC``.
    """
    lowered = (url or "").lower()
    for provider, needles in _PROVIDER_TABLE:
        if any(needle in lowered for needle in needles):
            return provider
    return Provider.GENERIC


class HosterResolverRegistry:
    """Dispatches embed URL resolution to the resolver for its provider.

    Resolvers are keyed by ``name``, which equals the ``Provider`` value
    they handle. URLs of an unknown family, or of a family with no
    registered resolver, go to the ``generic`` resolver when present.
    """

    def __init__(self, resolvers: list[HosterResolverPort] | None = None) -> None:
        self._resolvers: dict[str, HosterResolverPort] = {}
        for resolver in resolvers or []:
            self.register(resolver)

    def register(self, resolver: HosterResolverPort) -> None:
        self._resolvers[resolver.name] = resolver

    @property
    def supported_hosters(self) -> list[str]:
        """Return list of providers with registered resolvers."""
        return list(self._resolvers.keys())

    def get_resolver(self, url: str) -> HosterResolverPort | None:
        provider = classify_embed_url(url)
        return self._resolvers.get(provider.value) or self._resolvers.get(
            Provider.GENERIC.value
        )

    async def resolve(self, url: str) -> ExtractedVideo | None:
        """Resolve an embed URL to a playable video URL.

        Never raises: every failure degrades to ``None``.
        """
        resolver = self.get_resolver(url)
        if resolver is None:
            log.warning("hoster_no_resolver", url=url)
            return None
        return await self._try_resolver(resolver, url)

    async def _try_resolver(
        self,
        resolver: HosterResolverPort,
        url: str,
    ) -> ExtractedVideo | None:
        """Attempt resolution with a specific resolver, logging success/failure."""
        try:
            result = await resolver.resolve(url)
            if result is not None:
                log.info(
                    "hoster_resolve_success",
                    hoster=resolver.name,
                    is_hls=result.is_hls,
                )
                return result
            log.warning("hoster_resolve_failed", hoster=resolver.name, url=url)
        except Exception:
            log.exception("hoster_resolve_error", hoster=resolver.name, url=url)
        return None
