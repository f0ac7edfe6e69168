"""Ordering of pods by how urgently they need to be replaced."""

from __future__ import annotations

import logging
import re
from collections.abc import Container, Iterable
from dataclasses import dataclass

from esoperator.models import Pod, StatefulSet

logger = logging.getLogger(__name__)

OPERATOR_POD_DRAINING_ANNOTATION_KEY = "operator.zalando.org/draining"
CONTROLLER_REVISION_HASH_LABEL_KEY = "controller-revision-hash"

POD_DRAINING_PRIORITY = 16
UNSCHEDULABLE_NODE_PRIORITY = 8
NODE_SELECTOR_PRIORITY = 4
POD_OLD_REVISION_PRIORITY = 2
STS_REPLICA_DIFF_PRIORITY = 1

_PRIORITY_NAMES = {
    POD_DRAINING_PRIORITY: "PodDraining",
    UNSCHEDULABLE_NODE_PRIORITY: "UnschedulableNode",
    NODE_SELECTOR_PRIORITY: "NodeSelector",
    POD_OLD_REVISION_PRIORITY: "PodOldRevision",
    STS_REPLICA_DIFF_PRIORITY: "STSReplicaDiff",
}

_INTEGER = re.compile(r"[+-]?\d+")


@dataclass
class UpdatePriority:
    """A pod with its update priority and its ordinal number in the StatefulSet."""

    pod: Pod
    priority: int = 0
    number: int = 0


def pod_ordinal(pod: Pod) -> int:
    """The ordinal number of a StatefulSet pod: its name after the generate-name prefix."""
    name = pod.name
    if pod.generate_name and name.startswith(pod.generate_name):
        name = name[len(pod.generate_name):]
    if not _INTEGER.fullmatch(name):
        raise ValueError(f"invalid ordinal {name!r} in pod name {pod.name!r}")
    return int(name)


def priority_names(priority: int) -> list[str]:
    """Names of the priority levels that the given priority reaches, highest first."""
    return [name for level, name in _PRIORITY_NAMES.items() if priority >= level]


def prioritize_pods_for_update(
    pods: Iterable[Pod],
    sts: StatefulSet,
    desired_replicas: int,
    priority_nodes: Container[str],
    unschedulable_nodes: Container[str],
) -> list[Pod]:
    """Pods that need updating, most urgent first, then by ordinal number.

    Pods already marked draining come first, then pods on unschedulable
    nodes, pods not on a priority node and pods with an outdated revision.
    A differing replica count of the StatefulSet adds the lowest priority,
    which alone does not make a pod need an update. Pods without a node are
    skipped.
    """
    sts_replicas = sts.replicas if sts.replicas is not None else 0
    priorities: list[UpdatePriority] = []
    for pod in pods:
        prio = UpdatePriority(pod=pod, number=pod_ordinal(pod))

        if OPERATOR_POD_DRAINING_ANNOTATION_KEY in pod.annotations:
            prio.priority += POD_DRAINING_PRIORITY

        if not pod.node_name:
            logger.debug("Skipping Pod %s/%s. No assigned node found.", pod.namespace, pod.name)
            continue

        if pod.node_name in unschedulable_nodes:
            prio.priority += UNSCHEDULABLE_NODE_PRIORITY

        if pod.node_name not in priority_nodes:
            prio.priority += NODE_SELECTOR_PRIORITY

        revision = pod.labels.get(CONTROLLER_REVISION_HASH_LABEL_KEY)
        if revision is not None and revision != sts.update_revision:
            prio.priority += POD_OLD_REVISION_PRIORITY

        if desired_replicas != sts_replicas:
            prio.priority += STS_REPLICA_DIFF_PRIORITY

        priorities.append(prio)

    priorities.sort(key=lambda p: (-p.priority, p.number))

    result = []
    for prio in priorities:
        if prio.priority > 1:
            logger.info(
                "Pod %s/%s should be updated. Priority: %d (%s)",
                prio.pod.namespace,
                prio.pod.name,
                prio.priority,
                ",".join(priority_names(prio.priority)),
            )
            result.append(prio.pod)
    return result