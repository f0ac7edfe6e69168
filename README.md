# esoperator

Building blocks for running Elasticsearch data nodes as a Kubernetes
stateful set: label selectors, plain data classes for the objects
involved, CPU usage samples for scaling decisions, and the order in which
pods should be replaced during a rolling update.

The package has no dependencies outside the standard library.

## Install

```
pip install esoperator
```

For running the tests:

```
pip install "esoperator[test]"
pytest
```

## What is in it

- `esoperator.labels` – `Labels`, a `dict` that parses selectors of the
  form `key=value,key2=value2` with `set()`. A pair without `=` gets an
  empty value; a pair with more than one `=` raises `LabelFormatError`
  (a `ValueError`). `str()` joins the pairs back with commas.
- `esoperator.models` – data classes `OwnerReference`, `ScalingSpec`,
  `DataSetStatus`, `DataSet`, `Metric`, `MetricSet`, `Container`, `Pod`,
  `ContainerMetrics`, `PodMetrics`, `StatefulSet` and `ESResource`, plus:
  - `eds_replicas(eds)` – desired node count: the spec replicas (1 when
    unset), raised to `min_replicas` when scaling is enabled;
  - `parse_cpu_millis(quantity)` – a Kubernetes resource quantity such as
    `"100m"`, `"2"` or `"1.5k"` in milli-units, rounded up.
- `esoperator.metrics` –
  - `cpu_usage_percent(metrics, pods)` – for each known pod, the highest
    container CPU usage as a percentage of its request;
  - `calculate_median(values)` – the median, taking the lower middle value
    for an even count (`ValueError` when empty);
  - `record_sample(metric_set, eds, value, now)` – appends a sample,
    creating a metric set owned by the data set if there is none and
    dropping samples older than the longer scaling threshold duration.
- `esoperator.updates` – `prioritize_pods_for_update(pods, sts,
  desired_replicas, priority_nodes, unschedulable_nodes)` orders the pods
  that need replacing: pods marked draining first, then pods on
  unschedulable nodes, pods off the priority nodes and pods with an
  outdated revision, ties broken by ordinal. Pods without a node are
  skipped. `priority_names(priority)` names the levels a priority reaches;
  `UpdatePriority` holds a pod with its priority and ordinal.
- `esoperator.workloads` –
  - `sort_stateful_set_pods(pods)` – pods by ordinal number (`ValueError`
    when a name has none);
  - `sts_parent_generation(annotations)` – the generation recorded on a
    stateful set, 0 when missing or invalid;
  - `is_owned_reference(owner, owner_references)` – whether a reference
    points at the owner by API version, kind, name and UID.

## Example

```python
from esoperator.labels import Labels
from esoperator.metrics import calculate_median, cpu_usage_percent
from esoperator.models import Container, ContainerMetrics, Pod, PodMetrics, StatefulSet
from esoperator.updates import prioritize_pods_for_update

selector = Labels()
selector.set("role=data,tier=hot")
print(str(selector))  # role=data,tier=hot

pods = [
    Pod(name="data-0", generate_name="data-", node_name="node-b",
        labels={"controller-revision-hash": "new"},
        containers=[Container("es", cpu_request="1000m")]),
    Pod(name="data-1", generate_name="data-", node_name="node-a",
        labels={"controller-revision-hash": "old"},
        containers=[Container("es", cpu_request="1000m")]),
]

usage = cpu_usage_percent(
    [PodMetrics("data-0", containers=[ContainerMetrics("es", "400m")]),
     PodMetrics("data-1", containers=[ContainerMetrics("es", "700m")])],
    pods,
)
print(usage, calculate_median(usage))  # [40, 70] 40

sts = StatefulSet(name="data", replicas=2, update_revision="new")
to_update = prioritize_pods_for_update(pods, sts, 2, {"node-b"}, set())
print([pod.name for pod in to_update])  # ['data-1']
```

## What it does not do

The package only computes; it talks to nothing. It has no client for the
Kubernetes API or for Elasticsearch, so it cannot list or change stateful
sets, pods or indices, drain a node's shards, or store metric sets. It
does not decide how many nodes or index replicas a data set should have,
and it has no command or long-running process: the functions above are
meant to be called from code that does those things.