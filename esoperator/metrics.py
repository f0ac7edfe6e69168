"""CPU usage samples used to drive autoscaling of data sets."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from esoperator.models import (
    DataSet,
    Metric,
    MetricSet,
    OwnerReference,
    Pod,
    PodMetrics,
    parse_cpu_millis,
)


def _truncating_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def cpu_usage_percent(metrics: Iterable[PodMetrics], pods: Iterable[Pod]) -> list[int]:
    """Per known pod, the highest container CPU usage in percent of its request.

    Metrics of pods not in ``pods`` are skipped; containers without a CPU
    request do not count.
    """
    requests_by_pod = {
        pod.name: {
            container.name: parse_cpu_millis(container.cpu_request)
            for container in pod.containers
        }
        for pod in pods
    }

    result = []
    for pod_metrics in metrics:
        requested = requests_by_pod.get(pod_metrics.name)
        if requested is None:
            continue
        pod_max = 0
        for container in pod_metrics.containers:
            requested_cpu = requested.get(container.name)
            if requested_cpu is None or requested_cpu <= 0:
                continue
            usage = _truncating_div(100 * parse_cpu_millis(container.cpu_usage), requested_cpu)
            pod_max = max(pod_max, usage)
        result.append(pod_max)
    return result


def calculate_median(values: Iterable[int]) -> int:
    """The median of the values; for an even count the lower middle value."""
    ordered = sorted(values)
    if not ordered:
        raise ValueError("cannot take the median of no values")
    return ordered[(len(ordered) - 1) // 2]


def record_sample(
    metric_set: MetricSet | None, eds: DataSet, value: int, now: datetime
) -> MetricSet:
    """Add a sample to the data set's metric set and return that set.

    Without a metric set a new one owned by the data set is made. Otherwise
    samples older than the longer of the scale-up and scale-down threshold
    durations are dropped first.
    """
    sample = Metric(timestamp=now, value=value)

    if metric_set is None:
        return MetricSet(
            name=eds.name,
            namespace=eds.namespace,
            labels=dict(eds.labels),
            owner_references=[
                OwnerReference(
                    api_version=eds.api_version, kind=eds.kind, name=eds.name, uid=eds.uid
                )
            ],
            metrics=[sample],
        )

    scaling = eds.scaling
    threshold_seconds = (
        max(scaling.scale_down_threshold_duration_seconds,
            scaling.scale_up_threshold_duration_seconds)
        if scaling is not None
        else 0
    )
    oldest = now - timedelta(seconds=threshold_seconds)
    metric_set.metrics = [m for m in metric_set.metrics if not m.timestamp < oldest]
    metric_set.metrics.append(sample)
    return metric_set