from datetime import datetime, timedelta, timezone

import pytest

from esoperator.metrics import calculate_median, cpu_usage_percent, record_sample
from esoperator.models import (
    Container,
    ContainerMetrics,
    DataSet,
    Metric,
    MetricSet,
    OwnerReference,
    Pod,
    PodMetrics,
    ScalingSpec,
)

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def test_calculate_median():
    assert calculate_median([1, 4, 6]) == 4
    assert calculate_median([1, 4]) == 1


def test_calculate_median_unsorted_input():
    assert calculate_median([9, 1, 5, 3]) == 3


def test_calculate_median_empty():
    with pytest.raises(ValueError):
        calculate_median([])


def test_cpu_usage_percent():
    pods = [
        Pod(
            name="pod-x",
            containers=[Container("a", cpu_request="100m"), Container("b", cpu_request="1000m")],
        )
    ]
    metrics = [
        PodMetrics(
            name="pod-x",
            containers=[ContainerMetrics("a", "50m"), ContainerMetrics("b", "0m")],
        ),
        PodMetrics(
            name="pod-y",
            containers=[ContainerMetrics("a", "50m"), ContainerMetrics("b", "0m")],
        ),
    ]

    assert cpu_usage_percent(metrics, pods) == [50]


def test_cpu_usage_percent_ignores_containers_without_request():
    pods = [Pod(name="p", containers=[Container("a"), Container("b", cpu_request="1")])]
    metrics = [PodMetrics(name="p", containers=[ContainerMetrics("a", "5"), ContainerMetrics("b", "250m")])]

    assert cpu_usage_percent(metrics, pods) == [25]


def _eds():
    return DataSet(
        name="eds",
        namespace="default",
        uid="uid-1",
        api_version="zalando.org/v1",
        kind="ElasticsearchDataSet",
        labels={"app": "es"},
        scaling=ScalingSpec(
            scale_up_threshold_duration_seconds=240,
            scale_down_threshold_duration_seconds=600,
        ),
    )


def test_record_sample_creates_metric_set():
    result = record_sample(None, _eds(), 42, NOW)

    assert result.name == "eds"
    assert result.namespace == "default"
    assert result.labels == {"app": "es"}
    assert result.owner_references == [
        OwnerReference(api_version="zalando.org/v1", kind="ElasticsearchDataSet", name="eds", uid="uid-1")
    ]
    assert result.metrics == [Metric(timestamp=NOW, value=42)]


def test_record_sample_drops_samples_older_than_threshold():
    recent = Metric(timestamp=NOW - timedelta(seconds=300), value=10)
    old = Metric(timestamp=NOW - timedelta(seconds=601), value=20)
    edge = Metric(timestamp=NOW - timedelta(seconds=600), value=30)
    metric_set = MetricSet(name="eds", metrics=[old, edge, recent])

    result = record_sample(metric_set, _eds(), 7, NOW)

    assert result is metric_set
    assert [m.value for m in result.metrics] == [30, 10, 7]
    assert result.metrics[-1].timestamp == NOW