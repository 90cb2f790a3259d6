"""Prometheus counters for migration runs."""

from __future__ import annotations

from prometheus_client import Counter

changesets_total = Counter(
    "docmigrate_changesets_total",
    "Changesets seen by the migration engine, by outcome",
    ["outcome"],
)

scripts_total = Counter(
    "docmigrate_scripts_total",
    "Scripts sent to the eval command, by success",
    ["success"],
)
