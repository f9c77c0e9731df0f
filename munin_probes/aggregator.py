# File: munin_probes/aggregator.py
"""munin_probes.aggregator: per-cycle accumulation of http_load measurements."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Union

from munin_probes.crawler.models import Category, FetchResult, LinkRef, MeasurementKey
from munin_probes.utils import format_value

Number = Union[int, float]


@dataclass(slots=True)
class Accumulator:
    """Sums and counts gathered while probing one URL and its resources."""

    totals: Dict[MeasurementKey, Number] = field(default_factory=dict)

    def add(self, key: MeasurementKey, amount: Number = 1) -> None:
        self.totals[key] = self.totals.get(key, 0) + amount

    def record_fetch(self, host: str, result: FetchResult, *, element: bool = True) -> None:
        """Attribute size, load time, status and content type of *result* to *host*."""
        self.add(MeasurementKey.size(host), result.size)
        self.add(MeasurementKey.loadtime(host), result.elapsed)
        self.add(MeasurementKey.response(host, result.status))
        self.add(MeasurementKey.content_type(host, result.content_type))
        if element:
            self.add(MeasurementKey.elements(host))

    def count_tag(self, ref: LinkRef) -> None:
        self.add(MeasurementKey.tag(ref.tag, ref.attr))

    def for_category(self, category: Category) -> Dict[MeasurementKey, str]:
        """Formatted values of one category, ready to merge into its cache."""
        return {
            key: format_value(value)
            for key, value in self.totals.items()
            if key.category is category
        }

    def __iter__(self) -> Iterator[MeasurementKey]:
        return iter(self.totals)

    def __len__(self) -> int:
        return len(self.totals)
