# File: munin_probes/utils.py
"""munin_probes.utils: helpers for URL identifiers, munin field names and value formatting."""

from __future__ import annotations

import re
from typing import Optional, Sequence, Union
from urllib.parse import urlparse

from munin_probes.logger import logger

__all__: Sequence[str] = (
    "UNKNOWN",
    "FIELD_NAME_LENGTH",
    "url_identifier",
    "field_name",
    "extract_host",
    "format_value",
)

#: Cache sentinel for a series that was not refreshed in the last cycle.
UNKNOWN = "unknown"
#: Munin field names are cut to this many characters.
FIELD_NAME_LENGTH = 19

_NON_WORD_RE = re.compile(r"\W")


def url_identifier(url: str) -> str:
    """Strips every non-word character from the URL; the result names the plugin instance."""
    return _NON_WORD_RE.sub("", url)


def field_name(subkey: str) -> str:
    """Munin-safe field name: non-word characters removed, at most 19 characters."""
    name = _NON_WORD_RE.sub("", subkey)[:FIELD_NAME_LENGTH]
    logger.debug("Field name: %s -> %s", subkey, name)
    return name


def extract_host(url: str, fallback: Optional[str] = None) -> Optional[str]:
    """Returns the host of the URL, or *fallback* if none can be parsed."""
    try:
        host = urlparse(url).hostname
    except ValueError:
        host = None
    return host or fallback


def format_value(value: Union[int, float, str]) -> str:
    """Integral numbers print without a fraction, others with up to six decimals."""
    if isinstance(value, str):
        return value
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.6f}".rstrip("0").rstrip(".")
