# munin_probes/crawler/link_extractor.py
"""
Selection of the sub-resources http_load fetches alongside a page.
"""
from __future__ import annotations

from typing import FrozenSet, Iterable, List, Tuple
from urllib.parse import urljoin, urlparse

from munin_probes.crawler.models import LinkRef

#: (tag, attribute) pairs that load part of the page rather than navigate away
FOLLOWED: FrozenSet[Tuple[str, str]] = frozenset(
    {
        ("link", "href"),
        ("img", "src"),
        ("script", "src"),
        ("iframe", "src"),
        ("frame", "src"),
        ("embed", "src"),
        ("input", "src"),
        ("source", "src"),
        ("audio", "src"),
        ("video", "src"),
        ("track", "src"),
        ("object", "data"),
        ("body", "background"),
        ("table", "background"),
        ("td", "background"),
    }
)


def is_followed(ref: LinkRef) -> bool:
    """True for resource references; anchors, areas, forms and the rest are only counted."""
    return (ref.tag, ref.attr) in FOLLOWED


def resolve(page_url: str, target: str) -> str | None:
    """
    Resolve *target* against *page_url*.

    Returns the absolute URL, or None unless it is http(s).
    """
    try:
        absolute = urljoin(page_url, target)
        scheme = urlparse(absolute).scheme
    except ValueError:
        return None
    if scheme not in ("http", "https"):
        return None
    return absolute


def extract_resources(page_url: str, refs: Iterable[LinkRef]) -> List[str]:
    """Absolute URLs of every followed reference, in document order, duplicates kept."""
    links: List[str] = []
    for ref in refs:
        if not is_followed(ref):
            continue
        absolute = resolve(page_url, ref.target)
        if absolute is not None:
            links.append(absolute)
    return links
