"""munin_probes.cache: the measurement cache shared by ``cron`` and the render modes.

A cache maps :class:`~munin_probes.crawler.models.MeasurementKey` to the
string munin should print, a number or ``unknown``.  Each instance (URL
identifier + category) has its own cache.  A cycle never drops a key: series
that were not measured again are reset to ``unknown`` so their graphs show a
gap instead of a stale value.
"""
from __future__ import annotations

import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Mapping, Union

from munin_probes.crawler.models import Instance, MeasurementKey
from munin_probes.logger import logger
from munin_probes.utils import UNKNOWN

__all__ = (
    "Cache",
    "merge",
    "parse_cache",
    "dump_cache",
    "CacheStore",
    "FileCacheStore",
    "MemoryCacheStore",
)

Cache = Dict[MeasurementKey, str]

_LINE_RE = re.compile(r"^(\S+)\s+(\S.*?)\s*$")


def merge(previous: Mapping[MeasurementKey, str], fresh: Mapping[MeasurementKey, str]) -> Cache:
    """Keys only in *previous* become ``unknown``; keys in *fresh* take its value."""
    merged: Cache = {key: UNKNOWN for key in previous}
    merged.update(fresh)
    return merged


class CacheStore(ABC):
    """Read/merge/write access to per-instance caches."""

    @abstractmethod
    def read(self, instance: Instance) -> Cache:
        """Return the stored cache, empty if there is none."""

    @abstractmethod
    def write(self, instance: Instance, cache: Mapping[MeasurementKey, str]) -> None:
        """Replace the stored cache."""

    def update(self, instance: Instance, fresh: Mapping[MeasurementKey, str]) -> Cache:
        """Merge *fresh* into the stored cache and persist the result."""
        merged = merge(self.read(instance), fresh)
        self.write(instance, merged)
        return merged


class MemoryCacheStore(CacheStore):
    """In-process store, handy for tests and dry runs."""

    def __init__(self, initial: Mapping[Instance, Mapping[MeasurementKey, str]] | None = None) -> None:
        self._caches: Dict[Instance, Cache] = {k: dict(v) for k, v in (initial or {}).items()}

    def read(self, instance: Instance) -> Cache:
        return dict(self._caches.get(instance, {}))

    def write(self, instance: Instance, cache: Mapping[MeasurementKey, str]) -> None:
        self._caches[instance] = dict(cache)


class FileCacheStore(CacheStore):
    """One ``<key> <value>`` text file per instance under *cache_dir*."""

    def __init__(self, cache_dir: Union[str, Path], prefix: str = "http_load_") -> None:
        self.cache_dir = Path(cache_dir)
        self.prefix = prefix

    def path_for(self, instance: Instance) -> Path:
        return self.cache_dir / instance.plugin_name(self.prefix)

    def read(self, instance: Instance) -> Cache:
        path = self.path_for(instance)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.debug("No cache at %s: %s", path, exc)
            return {}
        return parse_cache(text)

    def write(self, instance: Instance, cache: Mapping[MeasurementKey, str]) -> None:
        path = self.path_for(instance)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dump_cache(cache), encoding="utf-8")
        logger.debug("Wrote %d entries to %s", len(cache), path)


def parse_cache(text: str) -> Cache:
    """Parse cache file contents; lines that do not hold a known key and a value are skipped."""
    cache: Cache = {}
    for line in text.splitlines():
        match = _LINE_RE.match(line)
        if match is None:
            continue
        key = MeasurementKey.parse(match.group(1))
        if key is None:
            continue
        cache[key] = match.group(2)
    return cache


def dump_cache(cache: Mapping[MeasurementKey, str]) -> str:
    return "".join(f"{key} {value}\n" for key, value in cache.items())
