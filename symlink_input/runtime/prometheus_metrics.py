"""
Planning metrics pushed to a Prometheus Pushgateway.

Split planning runs as a short-lived batch step, so its figures are
pushed rather than scraped: one gauge set per planning call, labelled by
input format.
"""
from __future__ import annotations

import json
import logging
import os

from prometheus_client import CollectorRegistry, Gauge, push_to_gateway

LOGGER = logging.getLogger(__name__)

PLANNING_JOB = "symlink_input_planning"


class PlanningMetricsClient:
    """Records the outcome of split planning and pushes it.

    Expected environment (unless ``pushgateway_url`` is given):
    - PROMETHEUS_PUSHGATEWAY_URL: URL to the Pushgateway.

    Optional:
    - PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON: JSON object of string
      labels used as grouping key, e.g. {"workflow_uid": "..."}.
      Without it, concurrent planners overwrite each other's pushes.

    Delivery is best-effort; the input format logs and swallows push
    failures.
    """

    def __init__(self, *, pushgateway_url: str | None = None) -> None:
        self._pushgateway_url = pushgateway_url or os.environ.get("PROMETHEUS_PUSHGATEWAY_URL")
        self._grouping_key = self._load_grouping_key()
        self._registry = CollectorRegistry()

        labelnames = ["input_format"]
        self._splits = Gauge(
            "symlink_input_split_count",
            "Number of splits produced by the last planning call",
            labelnames=labelnames,
            registry=self._registry,
        )
        self._targets = Gauge(
            "symlink_input_target_count",
            "Number of resolved target references, duplicates included",
            labelnames=labelnames,
            registry=self._registry,
        )
        self._bytes = Gauge(
            "symlink_input_total_bytes",
            "Total size of the resolved targets in bytes",
            labelnames=labelnames,
            registry=self._registry,
        )
        self._seconds = Gauge(
            "symlink_input_planning_seconds",
            "Wall time spent resolving and planning",
            labelnames=labelnames,
            registry=self._registry,
        )

    def is_enabled(self) -> bool:
        return self._pushgateway_url is not None

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    @staticmethod
    def _load_grouping_key() -> dict[str, str]:
        raw = os.environ.get("PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON")
        if not raw:
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            LOGGER.warning(
                "Invalid PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON; ignoring"
            )
            return {}

        if not isinstance(data, dict):
            return {}

        return {
            key: value
            for key, value in data.items()
            if isinstance(key, str) and isinstance(value, str)
        }

    def record_planning(
        self,
        *,
        input_format: str,
        split_count: int,
        target_count: int,
        total_bytes: int,
        duration_seconds: float,
    ) -> None:
        """Set the planning gauges for ``input_format`` and push them."""
        if not self._pushgateway_url:
            return

        self._splits.labels(input_format=input_format).set(split_count)
        self._targets.labels(input_format=input_format).set(target_count)
        self._bytes.labels(input_format=input_format).set(total_bytes)
        self._seconds.labels(input_format=input_format).set(duration_seconds)

        push_to_gateway(
            gateway=self._pushgateway_url,
            job=PLANNING_JOB,
            registry=self._registry,
            grouping_key=self._grouping_key,
        )

        LOGGER.info(
            "Planning metrics pushed",
            extra={
                "input_format": input_format,
                "split_count": split_count,
                "grouping_key": self._grouping_key,
            },
        )
