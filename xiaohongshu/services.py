"""
Topic page extraction.

Opens a xiaohongshu topic page, waits for ``window.__INITIAL_STATE__`` to be
hydrated, then reads the topic info and the feed list out of it:

- topic info lives at ``topic.topicData`` -> unwrap -> ``pageInfo``
- feeds live at ``topic.topicNotes`` -> unwrap

Usage:
    from xiaohongshu.services import get_topic_feeds
    result = await get_topic_feeds("5be0bd2ab6e7e10001b5a7fb")
"""
from __future__ import annotations

import asyncio
import logging
from typing import List, Optional
from urllib.parse import quote

from .browser import await_ready, open_page
from .config import (
    MAX_CONCURRENT_PAGES,
    PAGE_TIMEOUT,
    READY_TIMEOUT,
    SETTLE_DELAY,
    STABLE_TIMEOUT,
    TOPIC_URL_TEMPLATE,
)
from .decoder import decode_snapshot
from .errors import MissingFieldError, NoFeedsError, PageTimeoutError
from .models import TopicFeed, TopicInfo, TopicResponse
from .state import STATE_READY_SCRIPT, StatePath, diagnose, locate

logger = logging.getLogger(__name__)

TOPIC_INFO_PATH = StatePath(("topic", "topicData"), "pageInfo")
TOPIC_NOTES_PATH = StatePath(("topic", "topicNotes"))

_page_slots: Optional[asyncio.Semaphore] = None


def make_topic_url(topic_id: str) -> str:
    topic_id = (topic_id or "").strip()
    if not topic_id:
        raise ValueError("topic id must not be empty")
    return TOPIC_URL_TEMPLATE.format(topic_id=quote(topic_id, safe=""))


class TopicAction:
    """Extract one topic page through a page the caller owns exclusively."""

    def __init__(
        self,
        page,
        *,
        timeout: float = PAGE_TIMEOUT,
        ready_timeout: float = READY_TIMEOUT,
        stable_timeout: float = STABLE_TIMEOUT,
        settle_delay: float = SETTLE_DELAY,
    ):
        self.page = page
        self.timeout = timeout
        self.ready_timeout = ready_timeout
        self.stable_timeout = stable_timeout
        self.settle_delay = settle_delay

    async def get_topic_feeds(self, topic_id: str) -> TopicResponse:
        """
        Return the topic info and feeds of ``topic_id``.

        Raises PageTimeoutError, MissingFieldError, NoFeedsError or
        DecodeError; nothing is retried here.
        """
        url = make_topic_url(topic_id)
        try:
            return await asyncio.wait_for(self._extract(url), self.timeout)
        except PageTimeoutError:
            raise
        except asyncio.TimeoutError as exc:
            raise PageTimeoutError(
                f"topic {topic_id} not extracted within {self.timeout:.1f} seconds"
            ) from exc

    async def _extract(self, url: str) -> TopicResponse:
        logger.info("Opening topic page: %s", url)
        await self.page.navigate(url)
        await self.page.wait_stable(self.stable_timeout)
        await await_ready(self.page, STATE_READY_SCRIPT, self.ready_timeout, self.settle_delay)

        topic = await self._extract_topic()
        logger.debug("Decoded topic info: %s", topic)
        feeds = await self._extract_feeds()
        logger.debug("Decoded %d topic feeds", len(feeds))

        return TopicResponse(topic=topic, feeds=feeds)

    async def _extract_topic(self) -> TopicInfo:
        payload = await locate(self.page, TOPIC_INFO_PATH)
        if not payload:
            diagnostic = await diagnose(self.page, TOPIC_INFO_PATH)
            logger.error("Topic info lookup failed: %s", diagnostic.describe())
            raise MissingFieldError(diagnostic)
        return decode_snapshot(payload, TopicInfo)

    async def _extract_feeds(self) -> List[TopicFeed]:
        payload = await locate(self.page, TOPIC_NOTES_PATH)
        if not payload:
            diagnostic = await diagnose(self.page, TOPIC_NOTES_PATH)
            logger.error("Topic feed lookup failed: %s", diagnostic.describe())
            raise NoFeedsError(diagnostic)
        return decode_snapshot(payload, TopicFeed, many=True)


def _get_page_slots() -> asyncio.Semaphore:
    # created lazily so it binds to the running event loop
    global _page_slots
    if _page_slots is None:
        _page_slots = asyncio.Semaphore(max(1, MAX_CONCURRENT_PAGES))
    return _page_slots


async def get_topic_feeds(topic_id: str, **options) -> TopicResponse:
    """
    Open a dedicated browser page and extract ``topic_id`` from it.

    ``options`` are passed to TopicAction (timeouts, settle delay).
    """
    make_topic_url(topic_id)
    async with _get_page_slots():
        async with open_page() as page:
            return await TopicAction(page, **options).get_topic_feeds(topic_id)
