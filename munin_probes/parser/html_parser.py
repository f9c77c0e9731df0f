"""HTML parsing utilities for munin_probes.

:func:`parse_links` walks a page with BeautifulSoup and reports every
URL-bearing attribute as a :class:`~munin_probes.crawler.models.LinkRef`,
in document order.  Nothing is filtered or resolved here; the probe counts
every reference in its ``tags`` graph and decides separately which ones to
fetch (see :mod:`munin_probes.crawler.link_extractor`).

The attribute table follows the classic HTML link-element list, extended
with the HTML5 media elements.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Mapping, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from munin_probes.crawler.models import LinkRef

__all__: Sequence[str] = ("LINK_ATTRIBUTES", "parse_links")

#: tag -> attributes whose value is a URL
LINK_ATTRIBUTES: Mapping[str, tuple[str, ...]] = {
    "a": ("href",),
    "applet": ("archive", "codebase", "code"),
    "area": ("href",),
    "audio": ("src",),
    "base": ("href",),
    "bgsound": ("src",),
    "blockquote": ("cite",),
    "body": ("background",),
    "del": ("cite",),
    "embed": ("pluginspage", "src"),
    "form": ("action",),
    "frame": ("src", "longdesc"),
    "head": ("profile",),
    "iframe": ("src", "longdesc"),
    "img": ("src", "lowsrc", "longdesc", "usemap"),
    "input": ("src", "usemap"),
    "ins": ("cite",),
    "link": ("href",),
    "object": ("classid", "codebase", "data", "archive", "usemap"),
    "q": ("cite",),
    "script": ("src",),
    "source": ("src",),
    "table": ("background",),
    "td": ("background",),
    "th": ("background",),
    "tr": ("background",),
    "track": ("src",),
    "video": ("src", "poster"),
}


def parse_links(html: Union[str, bytes]) -> list[LinkRef]:
    """Return every (tag, attribute, target) triple for URL-bearing attributes."""
    soup = BeautifulSoup(html, "html.parser")
    refs: list[LinkRef] = []
    for tag in soup.find_all(list(LINK_ATTRIBUTES)):
        if not isinstance(tag, Tag):
            continue
        for attr in LINK_ATTRIBUTES[tag.name]:
            value = tag.get(attr)
            if not isinstance(value, str):
                continue
            target = value.strip()
            if target:
                refs.append(LinkRef(tag.name, attr, target))
    return refs
