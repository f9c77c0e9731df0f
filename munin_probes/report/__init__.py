"""munin_probes.report: munin output for the http_load render modes."""

from __future__ import annotations

from munin_probes.report.munin import GRAPHS, GraphMeta, render_config, render_values

__all__ = ["GRAPHS", "GraphMeta", "render_config", "render_values"]
