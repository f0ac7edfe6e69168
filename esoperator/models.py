"""Plain data types for the Kubernetes objects the operator works with."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_CEILING, Decimal, InvalidOperation


@dataclass
class OwnerReference:
    """A reference from a dependent object to the object that owns it."""

    api_version: str = ""
    kind: str = ""
    name: str = ""
    uid: str = ""


@dataclass
class ScalingSpec:
    """Autoscaling settings of an ElasticsearchDataSet."""

    enabled: bool = False
    min_replicas: int = 0
    max_replicas: int = 0
    min_index_replicas: int = 0
    max_index_replicas: int = 0
    min_shards_per_node: int = 0
    max_shards_per_node: int = 0
    scale_up_cpu_boundary: int = 0
    scale_up_threshold_duration_seconds: int = 0
    scale_up_cooldown_seconds: int = 0
    scale_down_cpu_boundary: int = 0
    scale_down_threshold_duration_seconds: int = 0
    scale_down_cooldown_seconds: int = 0
    disk_usage_percent_scaledown_watermark: int = 0


@dataclass
class DataSetStatus:
    """Observed state of an ElasticsearchDataSet."""

    replicas: int = 0
    observed_generation: int | None = None
    last_scale_up_started: datetime | None = None
    last_scale_down_started: datetime | None = None


@dataclass
class DataSet:
    """An ElasticsearchDataSet resource."""

    name: str = ""
    namespace: str = ""
    uid: str = ""
    api_version: str = ""
    kind: str = ""
    generation: int = 0
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    replicas: int | None = None
    scaling: ScalingSpec | None = None
    template_labels: dict[str, str] = field(default_factory=dict)
    template_annotations: dict[str, str] = field(default_factory=dict)
    status: DataSetStatus = field(default_factory=DataSetStatus)


@dataclass
class Metric:
    """A single CPU usage sample."""

    timestamp: datetime
    value: int


@dataclass
class MetricSet:
    """Collected CPU samples for one ElasticsearchDataSet."""

    name: str = ""
    namespace: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    owner_references: list[OwnerReference] = field(default_factory=list)
    metrics: list[Metric] = field(default_factory=list)


@dataclass
class Container:
    """A container of a pod with its requested CPU as a resource quantity."""

    name: str
    cpu_request: str = "0"


@dataclass
class Pod:
    """A pod, reduced to the fields the operator reads."""

    name: str = ""
    generate_name: str = ""
    namespace: str = ""
    uid: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    node_name: str = ""
    pod_ip: str = ""
    phase: str = ""
    containers: list[Container] = field(default_factory=list)
    termination_grace_period_seconds: int | None = None


@dataclass
class ContainerMetrics:
    """CPU usage of one container as a resource quantity."""

    name: str
    cpu_usage: str = "0"


@dataclass
class PodMetrics:
    """Usage metrics for the containers of one pod."""

    name: str = ""
    namespace: str = ""
    containers: list[ContainerMetrics] = field(default_factory=list)


@dataclass
class StatefulSet:
    """A StatefulSet, reduced to the fields the operator reads."""

    name: str = ""
    namespace: str = ""
    replicas: int | None = None
    ready_replicas: int = 0
    update_revision: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    owner_references: list[OwnerReference] = field(default_factory=list)
    selector: dict[str, str] = field(default_factory=dict)


@dataclass
class ESResource:
    """A data set together with its StatefulSet, metric set and pods."""

    data_set: DataSet
    stateful_set: StatefulSet | None = None
    metric_set: MetricSet | None = None
    pods: list[Pod] = field(default_factory=list)

    def replicas(self) -> int:
        """Desired node replicas of the data set."""
        return eds_replicas(self.data_set)


def eds_replicas(eds: DataSet) -> int:
    """Desired node replicas of a data set.

    Without enabled scaling this is the spec replicas or 1 when unset. With
    scaling it is at least ``min_replicas``.
    """
    scaling = eds.scaling
    if scaling is None or not scaling.enabled:
        return 1 if eds.replicas is None else eds.replicas
    if eds.replicas is None:
        return scaling.min_replicas
    return max(eds.replicas, scaling.min_replicas)


_SUFFIXES = {
    "n": Decimal("1e-9"),
    "u": Decimal("1e-6"),
    "m": Decimal("1e-3"),
    "": Decimal(1),
    "k": Decimal(10) ** 3,
    "M": Decimal(10) ** 6,
    "G": Decimal(10) ** 9,
    "T": Decimal(10) ** 12,
    "P": Decimal(10) ** 15,
    "E": Decimal(10) ** 18,
    "Ki": Decimal(2) ** 10,
    "Mi": Decimal(2) ** 20,
    "Gi": Decimal(2) ** 30,
    "Ti": Decimal(2) ** 40,
    "Pi": Decimal(2) ** 50,
    "Ei": Decimal(2) ** 60,
}

_QUANTITY = re.compile(
    r"^(?P<number>[+-]?(?:\d+\.?\d*|\.\d+))"
    r"(?:(?P<exponent>[eE][+-]?\d+)|(?P<suffix>[a-zA-Z]{0,2}))$"
)


def parse_cpu_millis(quantity: str | int) -> int:
    """Convert a Kubernetes resource quantity to milli-units, rounding up."""
    text = str(quantity).strip()
    match = _QUANTITY.match(text)
    if match is None:
        raise ValueError(f"invalid resource quantity: {quantity!r}")
    try:
        number = Decimal(match["number"])
    except InvalidOperation as exc:
        raise ValueError(f"invalid resource quantity: {quantity!r}") from exc
    if match["exponent"] is not None:
        multiplier = Decimal(10) ** int(match["exponent"][1:])
    else:
        suffix = match["suffix"] or ""
        if suffix not in _SUFFIXES:
            raise ValueError(f"invalid resource quantity suffix: {quantity!r}")
        multiplier = _SUFFIXES[suffix]
    millis = number * multiplier * 1000
    return int(millis.to_integral_value(rounding=ROUND_CEILING))