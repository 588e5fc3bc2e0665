"""
Semantic test: planning metrics are best-effort.

Invariant:
When a Pushgateway is configured, get_splits records split, target,
byte and duration gauges labelled by input format; a failing push never
fails planning.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from symlink_input.core.config.job_config import JobConfig
from symlink_input.format.input_format import DirectTextInputFormat, SymlinkTextInputFormat
from symlink_input.runtime import prometheus_metrics
from symlink_input.runtime.prometheus_metrics import PLANNING_JOB, PlanningMetricsClient


@pytest.fixture
def pushes(monkeypatch: pytest.MonkeyPatch) -> list[dict]:
    calls: list[dict] = []

    def _fake_push(**kwargs) -> None:
        calls.append(kwargs)

    monkeypatch.setattr(prometheus_metrics, "push_to_gateway", _fake_push)
    return calls


def test_disabled_without_pushgateway(monkeypatch: pytest.MonkeyPatch, pushes) -> None:
    monkeypatch.delenv("PROMETHEUS_PUSHGATEWAY_URL", raising=False)

    metrics = PlanningMetricsClient()
    metrics.record_planning(
        input_format="symlink",
        split_count=1,
        target_count=1,
        total_bytes=1,
        duration_seconds=0.1,
    )

    assert not metrics.is_enabled()
    assert pushes == []
    assert metrics.registry.get_sample_value("symlink_input_split_count", {"input_format": "symlink"}) is None


def test_get_splits_pushes_planning_gauges(tmp_path: Path, fs, write_text, write_manifest, pushes) -> None:
    a = write_text("data/a", "a1\na2\n")
    write_manifest("links/m", a, a)

    metrics = PlanningMetricsClient(pushgateway_url="http://pushgateway:9091")
    input_format = SymlinkTextInputFormat(fs, metrics=metrics)

    splits = input_format.get_splits(JobConfig(input_paths=[str(tmp_path / "links")]), 2)

    registry = metrics.registry
    labels = {"input_format": "symlink"}
    assert registry.get_sample_value("symlink_input_split_count", labels) == len(splits)
    assert registry.get_sample_value("symlink_input_target_count", labels) == 2
    assert registry.get_sample_value("symlink_input_total_bytes", labels) == 12
    assert registry.get_sample_value("symlink_input_planning_seconds", labels) >= 0

    assert len(pushes) == 1
    assert pushes[0]["job"] == PLANNING_JOB
    assert pushes[0]["gateway"] == "http://pushgateway:9091"


def test_gauges_are_labelled_per_format(tmp_path: Path, fs, write_text, write_manifest, pushes) -> None:
    a = write_text("data/a", "a1\n")
    write_manifest("links/m", a, a, a)

    metrics = PlanningMetricsClient(pushgateway_url="http://pushgateway:9091")

    SymlinkTextInputFormat(fs, metrics=metrics).get_splits(
        JobConfig(input_paths=[str(tmp_path / "links")]), 1
    )
    DirectTextInputFormat(fs, metrics=metrics).get_splits(
        JobConfig(input_paths=[str(tmp_path / "data")], input_format="direct"), 1
    )

    registry = metrics.registry
    assert registry.get_sample_value("symlink_input_target_count", {"input_format": "symlink"}) == 3
    assert registry.get_sample_value("symlink_input_target_count", {"input_format": "direct"}) == 1


def test_repeated_planning_reuses_gauges(tmp_path: Path, fs, write_text, write_manifest, pushes) -> None:
    a = write_text("data/a", "a1\n")
    write_manifest("links/m", a)

    metrics = PlanningMetricsClient(pushgateway_url="http://pushgateway:9091")
    input_format = SymlinkTextInputFormat(fs, metrics=metrics)
    job = JobConfig(input_paths=[str(tmp_path / "links")])

    input_format.get_splits(job, 1)
    input_format.get_splits(job, 1)

    assert len(pushes) == 2


def test_failed_push_does_not_fail_planning(
    tmp_path: Path,
    fs,
    write_text,
    write_manifest,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def _broken_push(**kwargs) -> None:
        raise OSError("pushgateway unreachable")

    monkeypatch.setattr(prometheus_metrics, "push_to_gateway", _broken_push)

    a = write_text("data/a", "a1\n")
    write_manifest("links/m", a)

    metrics = PlanningMetricsClient(pushgateway_url="http://pushgateway:9091")
    splits = SymlinkTextInputFormat(fs, metrics=metrics).get_splits(
        JobConfig(input_paths=[str(tmp_path / "links")]), 1
    )

    assert len(splits) == 1


def test_invalid_grouping_key_is_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON", "{not json")

    assert PlanningMetricsClient._load_grouping_key() == {}
