"""munin_probes.report.munin: text munin-node reads for ``config`` and value fetches.

Example::

    from munin_probes.report.munin import render_values
    for line in render_values(instance, cache):
        print(line)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping

from munin_probes.crawler.models import Category, Instance, MeasurementKey
from munin_probes.utils import field_name


@dataclass(frozen=True)
class GraphMeta:
    """Static graph settings of one category."""

    title: str
    vlabel: str
    args: str
    maximum: int
    info: str
    series_info: str


GRAPHS: Dict[Category, GraphMeta] = {
    Category.SIZE: GraphMeta(
        "total size", "Bytes", "--base 1024 -l 0", 20000000,
        "Total size of the page and its resources, grouped by host.",
        "Bytes loaded from this host.",
    ),
    Category.LOADTIME: GraphMeta(
        "load time", "Seconds", "--base 1000 -l 0", 400,
        "Time spent loading the page and its resources one after another, grouped by host.",
        "Seconds spent loading from this host.",
    ),
    Category.ELEMENTS: GraphMeta(
        "elements", "Number of elements", "--base 1000 -l 0", 10000,
        "Number of elements loaded, grouped by host.",
        "Elements loaded from this host.",
    ),
    Category.RESPONSE: GraphMeta(
        "response codes", "Server response code count", "--base 1000 -l 0", 10000,
        "HTTP response codes returned while loading the page, grouped by host.",
        "Responses with this host and code.",
    ),
    Category.TYPE: GraphMeta(
        "content types", "Content type count", "--base 1000 -l 0", 10000,
        "Content types returned while loading the page, grouped by host.",
        "Responses with this host and content type.",
    ),
    Category.TAGS: GraphMeta(
        "tags", "HTML tag count", "--base 1000 -l 0", 100000,
        "URL-bearing HTML tags found in the page, whether or not they were followed.",
        "Occurrences of this tag and attribute.",
    ),
}


def _series(instance: Instance, cache: Mapping[MeasurementKey, str]) -> List[MeasurementKey]:
    return sorted((k for k in cache if k.category is instance.category), key=str)


def render_config(
    instance: Instance, url: str, cache: Mapping[MeasurementKey, str], graph_category: str
) -> List[str]:
    """Graph header plus one block per series; the first series is the AREA the rest STACK on."""
    meta = GRAPHS[instance.category]
    lines = [
        f"graph_title {url} {meta.title}",
        f"graph_args {meta.args}",
        f"graph_vlabel {meta.vlabel}",
        f"graph_category {graph_category}",
        f"graph_info {meta.info}",
    ]
    for index, key in enumerate(reversed(_series(instance, cache))):
        name = field_name(key.subkey)
        lines += [
            f"{name}.label {key.subkey}",
            f"{name}.info {meta.series_info}",
            f"{name}.min 0",
            f"{name}.max {meta.maximum}",
            f"{name}.draw {'AREA' if index == 0 else 'STACK'}",
        ]
    return lines


def render_values(instance: Instance, cache: Mapping[MeasurementKey, str]) -> List[str]:
    """``<field>.value <stored value>`` for each series, in key order."""
    return [f"{field_name(key.subkey)}.value {cache[key]}" for key in _series(instance, cache)]
