# File: munin_probes/registry.py
"""munin_probes.registry: the list of URLs http_load watches."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Union

from munin_probes.logger import logger
from munin_probes.utils import url_identifier


def load_registry(path: Union[str, Path]) -> Dict[str, str]:
    """
    Read the URL list into ``{identifier: url}``, in file order.

    A later line with the same identifier replaces the earlier one; lines
    whose identifier comes out empty are skipped.  A missing or unreadable
    file is an empty registry.
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        logger.debug("URL list %s not readable: %s", p, exc)
        return {}

    registry: Dict[str, str] = {}
    for line in text.splitlines():
        url = line.rstrip()
        ident = url_identifier(url)
        if not ident:
            continue
        registry[ident] = url
    logger.debug("Loaded %d URLs from %s", len(registry), p)
    return registry
