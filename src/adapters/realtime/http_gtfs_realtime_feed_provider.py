from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Mapping, Sequence

import httpx
from google.protobuf.message import DecodeError

from src.adapters.mta import MtaRuntimeConfig
from src.app.ports.output import IRealtimeFeedProvider
from src.domain.exceptions import UpstreamAlertsFailure, UpstreamFeedFailure
from src.domain.models import DecodedFeed, FeedResult

from .gtfs_realtime_decoder import decode_feed_message

logger = logging.getLogger(__name__)


async def _get_feed(
    client: httpx.AsyncClient, url: str, headers: Mapping[str, str]
) -> DecodedFeed:
    try:
        resp = await client.get(url, headers=dict(headers))
        resp.raise_for_status()
        return decode_feed_message(resp.content)
    except httpx.HTTPStatusError as exc:
        raise UpstreamFeedFailure(url, f"HTTP {exc.response.status_code}") from exc
    except httpx.HTTPError as exc:
        raise UpstreamFeedFailure(url, f"{type(exc).__name__}: {exc}") from exc
    except DecodeError as exc:
        raise UpstreamFeedFailure(url, f"undecodable payload: {exc}") from exc


async def _get_feed_within(
    client: httpx.AsyncClient,
    url: str,
    headers: Mapping[str, str],
    timeout_s: float | None,
) -> DecodedFeed:
    """`_get_feed` with a hard cap on the whole fetch, not just each I/O phase.

    Anything unexpected is reported as UpstreamFeedFailure too.
    """

    try:
        return await asyncio.wait_for(_get_feed(client, url, headers), timeout_s)
    except UpstreamFeedFailure:
        raise
    except asyncio.TimeoutError as exc:
        raise UpstreamFeedFailure(url, f"timed out after {timeout_s}s") from exc
    except Exception as exc:
        logger.warning("Unexpected error fetching %s", url, exc_info=True)
        raise UpstreamFeedFailure(url, f"{type(exc).__name__}: {exc}") from exc


async def _fetch_one(
    client: httpx.AsyncClient,
    url: str,
    headers: Mapping[str, str],
    timeout_s: float | None,
) -> FeedResult:
    try:
        feed = await _get_feed_within(client, url, headers, timeout_s)
    except UpstreamFeedFailure as exc:
        logger.warning("Skipping feed %s: %s", url, exc.reason)
        return FeedResult(url=url, ok=False, error=exc.reason)
    return FeedResult(url=url, ok=True, feed=feed)


async def fetch_all_feeds(
    client: httpx.AsyncClient,
    urls: Sequence[str],
    headers: Mapping[str, str],
    timeout_s: float | None = None,
) -> tuple[FeedResult, ...]:
    """Fetch and decode every URL concurrently.

    Each feed succeeds or fails on its own; results keep the order of `urls`.
    `timeout_s` bounds each feed end to end.
    """

    return tuple(
        await asyncio.gather(
            *(_fetch_one(client, url, headers, timeout_s) for url in urls)
        )
    )


@dataclass(slots=True)
class HttpGtfsRealtimeFeedProvider(IRealtimeFeedProvider):
    """Fetches MTA GTFS-Realtime feeds over HTTP.

    Unset fields are filled from MtaRuntimeConfig.from_env().

    Notes:
      - No caching: every call goes upstream.
      - `transport` lets tests swap in httpx.MockTransport.
    """

    feed_urls: tuple[str, ...] | None = None
    alerts_url: str | None = None
    api_key: str | None = None
    timeout_s: float | None = None
    transport: httpx.AsyncBaseTransport | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        cfg = MtaRuntimeConfig.from_env()
        if self.feed_urls is None:
            self.feed_urls = cfg.feed_urls
        if self.alerts_url is None:
            self.alerts_url = cfg.alerts_url
        if self.api_key is None:
            self.api_key = cfg.api_key
        if self.timeout_s is None:
            self.timeout_s = cfg.timeout_s

    def _headers(self) -> dict[str, str]:
        if not self.api_key:
            return {}
        return {"x-api-key": self.api_key}

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout_s, transport=self.transport)

    async def fetch_trip_feeds(self) -> tuple[FeedResult, ...]:
        async with self._client() as client:
            results = await fetch_all_feeds(
                client, self.feed_urls or (), self._headers(), self.timeout_s
            )

        failed = sum(1 for r in results if not r.ok)
        if failed:
            logger.info("%d of %d trip feeds unavailable", failed, len(results))
        return results

    async def fetch_alerts_feed(self) -> DecodedFeed:
        if not self.alerts_url:
            raise UpstreamAlertsFailure("", "alerts feed URL not configured")

        async with self._client() as client:
            try:
                return await _get_feed_within(
                    client, self.alerts_url, self._headers(), self.timeout_s
                )
            except UpstreamFeedFailure as exc:
                logger.error("Alerts feed %s failed: %s", exc.url, exc.reason)
                raise UpstreamAlertsFailure(exc.url, exc.reason) from exc
