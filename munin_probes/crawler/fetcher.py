# munin_probes/crawler/fetcher.py
"""
Fetcher module: timed GET requests with a fixed timeout and redirect limit.
"""
from __future__ import annotations

import asyncio
import time

from aiohttp import ClientError, ClientSession

from munin_probes.config import HttpLoadConfig
from munin_probes.crawler.models import FetchResult
from munin_probes.logger import logger

#: What a failed request is recorded as, mirroring the response an HTTP
#: client library synthesises when the transport fails.
FAILED_STATUS = 500
FAILED_CONTENT_TYPE = "none"


class Fetcher:
    """Issues one GET at a time and measures it; never retries."""

    def __init__(self, session: ClientSession, config: HttpLoadConfig) -> None:
        self.session = session
        self.config = config

    async def fetch(self, url: str) -> FetchResult:
        """
        GET *url*, reading the whole body.

        Transport failures (connection errors, timeouts, too many redirects)
        come back as a FAILED_STATUS result with an empty body.
        """
        # aiohttp treats max_redirects=0 as "no limit"
        allow_redirects = self.config.max_redirects > 0
        start = time.monotonic()
        try:
            async with self.session.get(
                url,
                allow_redirects=allow_redirects,
                max_redirects=max(self.config.max_redirects, 1),
                raise_for_status=False,
            ) as resp:
                content = await resp.read()
                status = resp.status
                ctype = resp.content_type.lower()
        except (ClientError, asyncio.TimeoutError) as exc:
            logger.debug("Fetch failed %s: %r", url, exc)
            status, ctype, content = FAILED_STATUS, FAILED_CONTENT_TYPE, b""
        elapsed = time.monotonic() - start
        logger.debug("GET %s -> %s %s %d bytes in %.3f s", url, status, ctype, len(content), elapsed)
        return FetchResult(url=url, status=status, content_type=ctype, content=content, elapsed=elapsed)
