from __future__ import annotations

import time
from typing import Optional

from aiohttp import ClientSession, ClientTimeout

from munin_probes.aggregator import Accumulator
from munin_probes.config import HttpLoadConfig
from munin_probes.crawler.fetcher import Fetcher
from munin_probes.crawler.link_extractor import extract_resources
from munin_probes.logger import logger
from munin_probes.parser.html_parser import parse_links
from munin_probes.utils import extract_host, url_identifier

__all__ = ("PageProbe",)


class PageProbe:
    """Loads a page and the resources it embeds, one request at a time."""

    def __init__(self, config: HttpLoadConfig) -> None:
        self.config = config
        self.session: Optional[ClientSession] = None
        self.fetcher: Optional[Fetcher] = None

    async def __aenter__(self) -> PageProbe:
        timeout = ClientTimeout(total=self.config.timeout)
        self.session = ClientSession(
            timeout=timeout,
            headers={"User-Agent": self.config.user_agent},
            raise_for_status=False,
        )
        self.fetcher = Fetcher(self.session, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def probe(self, url: str) -> Accumulator:
        """
        Measure *url* and every followed sub-resource.

        The root counts as an element of its host only when it loaded
        successfully (status below 400); every fetched sub-resource counts as
        an element of its own host.
        """
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        acc = Accumulator()
        start = time.monotonic()

        root = await self.fetcher.fetch(url)
        # hostless URLs (e.g. without a scheme) are filed under their identifier
        host = extract_host(url) or url_identifier(url) or "nohost"
        acc.record_fetch(host, root, element=root.status < 400)

        refs = parse_links(root.content)
        for ref in refs:
            acc.count_tag(ref)

        resources = extract_resources(url, refs)
        for link in resources:
            result = await self.fetcher.fetch(link)
            host = extract_host(link, fallback=host) or host
            acc.record_fetch(host, result)

        logger.info(
            "Probed %s: %d resources, %d series in %.2f s",
            url, len(resources), len(acc), time.monotonic() - start,
        )
        return acc
