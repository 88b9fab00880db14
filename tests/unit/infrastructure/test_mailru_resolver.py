"""Tests for MailRuResolver."""

from __future__ import annotations

import pytest
import respx

from webteizle.infrastructure.hoster_resolvers.mailru import (
    MailRuResolver,
    select_mailru_video,
)
from webteizle.infrastructure.http import HttpxTransport

_URL = "https://my.mail.ru/video/embed/987654"
_META = "https://my.mail.ru/video/meta/987654"
_PAGE = '<script>window.cfg = {"metaUrl": "//my.mail.ru/video/meta/987654"};</script>'


class TestSelectMailruVideo:
    def test_last_of_three(self) -> None:
        videos = [{"key": "360p"}, {"key": "480p"}, {"key": "720p"}]
        assert select_mailru_video(videos) is videos[2]

    def test_empty(self) -> None:
        assert select_mailru_video([]) is None

    def test_last_not_object(self) -> None:
        assert select_mailru_video([{"key": "360p"}, "x"]) is None


class TestMailRuResolver:
    @respx.mock
    @pytest.mark.asyncio()
    async def test_two_hop_last_video(self, transport: HttpxTransport) -> None:
        respx.get(_URL).respond(200, text=_PAGE)
        meta_route = respx.get(_META).respond(
            200,
            json={
                "videos": [
                    {"key": "360p", "url": "//cdn.mail.ru/v/360.mp4"},
                    {"key": "480p", "url": "//cdn.mail.ru/v/480.mp4"},
                    {"key": "720p", "url": "//cdn.mail.ru/v/720.mp4"},
                ]
            },
        )

        result = await MailRuResolver(transport).resolve(_URL)

        assert result is not None
        assert result.video_url == "https://cdn.mail.ru/v/720.mp4"
        assert result.headers == {
            "Referer": "https://my.mail.ru/",
            "Origin": "https://my.mail.ru",
        }
        sent = meta_route.calls.last.request
        assert sent.headers["Accept"] == "application/json"
        assert sent.headers["Referer"] == "https://my.mail.ru/"

    @respx.mock
    @pytest.mark.asyncio()
    async def test_no_meta_url(self, transport: HttpxTransport) -> None:
        respx.get(_URL).respond(200, text="<html></html>")

        assert await MailRuResolver(transport).resolve(_URL) is None

    @respx.mock
    @pytest.mark.asyncio()
    async def test_meta_not_json(self, transport: HttpxTransport) -> None:
        respx.get(_URL).respond(200, text=_PAGE)
        respx.get(_META).respond(200, text="<html>blocked</html>")

        assert await MailRuResolver(transport).resolve(_URL) is None

    @respx.mock
    @pytest.mark.asyncio()
    async def test_meta_without_videos(self, transport: HttpxTransport) -> None:
        respx.get(_URL).respond(200, text=_PAGE)
        respx.get(_META).respond(200, json={"videos": []})

        assert await MailRuResolver(transport).resolve(_URL) is None

    @respx.mock
    @pytest.mark.asyncio()
    async def test_meta_http_error(self, transport: HttpxTransport) -> None:
        respx.get(_URL).respond(200, text=_PAGE)
        respx.get(_META).respond(403)

        assert await MailRuResolver(transport).resolve(_URL) is None
