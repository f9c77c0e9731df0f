# File: munin_probes/engine.py
"""munin_probes.engine: the ``cron`` cycle, probing every URL and merging into the caches."""

from __future__ import annotations

import asyncio
from typing import Dict, Mapping, Optional

from munin_probes.aggregator import Accumulator
from munin_probes.cache import Cache, CacheStore, FileCacheStore
from munin_probes.config import HttpLoadConfig
from munin_probes.crawler.crawler import PageProbe
from munin_probes.crawler.models import Category, Instance
from munin_probes.logger import logger
from munin_probes.registry import load_registry

__all__ = ["Engine"]


class Engine:
    """Facade for the CLI and tests: probe the registry's URLs and persist the results."""

    def __init__(self, config: HttpLoadConfig, store: Optional[CacheStore] = None) -> None:
        self.config = config
        self.store = store if store is not None else FileCacheStore(
            config.cache_dir, config.instance_prefix
        )

    def registry(self) -> Dict[str, str]:
        return load_registry(self.config.url_file)

    def run_cycle(self, urls: Optional[Mapping[str, str]] = None) -> Dict[Instance, Cache]:
        """Probe each URL in turn and update its caches; returns what was written."""
        urls = self.registry() if urls is None else urls
        logger.info("Starting cycle over %d URLs", len(urls))
        return asyncio.run(self.probe_all(urls))

    async def probe_all(self, urls: Mapping[str, str]) -> Dict[Instance, Cache]:
        written: Dict[Instance, Cache] = {}
        async with PageProbe(self.config) as probe:
            for url_id, url in urls.items():
                acc = await probe.probe(url)
                written.update(self.store_results(url_id, acc))
        return written

    def store_results(self, url_id: str, acc: Accumulator) -> Dict[Instance, Cache]:
        """Merge one URL's measurements into each of its category caches."""
        written: Dict[Instance, Cache] = {}
        for category in Category:
            instance = Instance(url_id, category)
            written[instance] = self.store.update(instance, acc.for_category(category))
        return written
