# munin_probes/crawler/models.py
"""
Data models for the http_load probe.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Category(str, Enum):
    """Measurement dimension; each one is a separate munin graph."""

    SIZE = "size"
    LOADTIME = "loadtime"
    ELEMENTS = "elements"
    RESPONSE = "response"
    TYPE = "type"
    TAGS = "tags"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class MeasurementKey:
    """Cache key: a category plus the subkey that tells its series apart."""

    category: Category
    subkey: str

    def __str__(self) -> str:
        return f"{self.category.value}_{self.subkey}"

    @classmethod
    def parse(cls, raw: str) -> Optional[MeasurementKey]:
        """Inverse of ``str()``; returns None for anything that is not a known key."""
        category, sep, subkey = raw.partition("_")
        if not sep or not subkey:
            return None
        try:
            return cls(Category(category), subkey)
        except ValueError:
            return None

    # Constructors for the key layout the probe writes --------------------
    @classmethod
    def size(cls, host: str) -> MeasurementKey:
        return cls(Category.SIZE, host)

    @classmethod
    def loadtime(cls, host: str) -> MeasurementKey:
        return cls(Category.LOADTIME, host)

    @classmethod
    def elements(cls, host: str) -> MeasurementKey:
        return cls(Category.ELEMENTS, host)

    @classmethod
    def response(cls, host: str, status: int) -> MeasurementKey:
        return cls(Category.RESPONSE, f"{host}_{status}")

    @classmethod
    def content_type(cls, host: str, ctype: str) -> MeasurementKey:
        return cls(Category.TYPE, f"{host}_{ctype}")

    @classmethod
    def tag(cls, tag: str, attr: str) -> MeasurementKey:
        return cls(Category.TAGS, f"{tag}-{attr}")


_CATEGORY_ALT = "|".join(c.value for c in Category)


@dataclass(frozen=True, slots=True)
class Instance:
    """One munin graph: a monitored URL (by identifier) and a category."""

    url_id: str
    category: Category

    def plugin_name(self, prefix: str) -> str:
        return f"{prefix}{self.url_id}_{self.category.value}"

    @classmethod
    def from_plugin_name(cls, name: str, prefix: str) -> Optional[Instance]:
        """Decode ``<prefix><url_id>_<category>``, e.g. ``http_load_examplecom_size``."""
        match = re.fullmatch(rf"{re.escape(prefix)}(\w+)_({_CATEGORY_ALT})", name)
        if match is None:
            return None
        return cls(match.group(1), Category(match.group(2)))


@dataclass(slots=True)
class FetchResult:
    """One GET as the probe sees it: timing, size, status and body."""

    url: str
    status: int
    content_type: str
    content: bytes
    elapsed: float

    @property
    def size(self) -> int:
        return len(self.content)

    def text(self, encoding: str = "utf-8") -> str:
        return self.content.decode(encoding, errors="replace")


@dataclass(frozen=True, slots=True)
class LinkRef:
    """A URL-bearing attribute found in a page."""

    tag: str
    attr: str
    target: str
