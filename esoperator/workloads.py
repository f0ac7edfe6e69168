"""Helpers for the StatefulSets that back data sets."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Protocol

from esoperator.models import OwnerReference, Pod
from esoperator.updates import pod_ordinal

OPERATOR_PARENT_GENERATION_ANNOTATION_KEY = "operator.zalando.org/parent-generation"

_INT64 = re.compile(r"[+-]?\d+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class _Owner(Protocol):
    api_version: str
    kind: str
    name: str
    uid: str


def sort_stateful_set_pods(pods: Iterable[Pod]) -> list[Pod]:
    """Pods ordered by their ordinal number, lowest first.

    Raises ValueError when a pod name does not end in an ordinal number.
    """
    return [pod for _, pod in sorted(((pod_ordinal(pod), pod) for pod in pods),
                                     key=lambda item: item[0])]


def sts_parent_generation(annotations: Mapping[str, str] | None) -> int:
    """The parent generation stored on a StatefulSet, or 0 if absent or invalid."""
    value = (annotations or {}).get(OPERATOR_PARENT_GENERATION_ANNOTATION_KEY)
    if value is None or not _INT64.fullmatch(value):
        return 0
    generation = int(value)
    if not _INT64_MIN <= generation <= _INT64_MAX:
        return 0
    return generation


def is_owned_reference(
    owner: _Owner, owner_references: Iterable[OwnerReference] | None
) -> bool:
    """Whether one of the owner references points at the given owner."""
    return any(
        ref.api_version == owner.api_version
        and ref.kind == owner.kind
        and ref.uid == owner.uid
        and ref.name == owner.name
        for ref in owner_references or []
    )