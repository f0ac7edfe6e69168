import pytest

from esoperator.models import DataSet, OwnerReference, Pod
from esoperator.workloads import (
    OPERATOR_PARENT_GENERATION_ANNOTATION_KEY,
    is_owned_reference,
    sort_stateful_set_pods,
    sts_parent_generation,
)


def test_sort_stateful_set_pods():
    pods = [Pod(name=f"sts-{num}", generate_name="sts-") for num in range(12, -1, -1)]
    sorted_pods = sort_stateful_set_pods(pods)
    assert len(sorted_pods) == 13
    assert sorted_pods[12].name == "sts-12"
    assert sorted_pods[0].name == "sts-0"
    assert [p.name for p in sorted_pods] == [f"sts-{n}" for n in range(13)]


def test_sort_stateful_set_pods_numeric_not_lexical():
    pods = [
        Pod(name="sts-10", generate_name="sts-"),
        Pod(name="sts-2", generate_name="sts-"),
        Pod(name="sts-1", generate_name="sts-"),
    ]
    assert [p.name for p in sort_stateful_set_pods(pods)] == ["sts-1", "sts-2", "sts-10"]


def test_sort_stateful_set_pods_empty():
    assert sort_stateful_set_pods([]) == []


def test_sort_stateful_set_pods_invalid_ordinal():
    with pytest.raises(ValueError):
        sort_stateful_set_pods([Pod(name="sts-x", generate_name="sts-")])


@pytest.mark.parametrize(
    "annotations, expected",
    [
        ({OPERATOR_PARENT_GENERATION_ANNOTATION_KEY: "5"}, 5),
        ({OPERATOR_PARENT_GENERATION_ANNOTATION_KEY: "-3"}, -3),
        ({OPERATOR_PARENT_GENERATION_ANNOTATION_KEY: "abc"}, 0),
        ({OPERATOR_PARENT_GENERATION_ANNOTATION_KEY: ""}, 0),
        ({OPERATOR_PARENT_GENERATION_ANNOTATION_KEY: "99999999999999999999"}, 0),
        ({}, 0),
        (None, 0),
    ],
)
def test_sts_parent_generation(annotations, expected):
    assert sts_parent_generation(annotations) == expected


def _owner():
    return DataSet(name="eds", namespace="default", uid="uid-1",
                   api_version="zalando.org/v1", kind="ElasticsearchDataSet")


def test_is_owned_reference_matches():
    refs = [
        OwnerReference(api_version="v1", kind="Other", name="x", uid="u"),
        OwnerReference(api_version="zalando.org/v1", kind="ElasticsearchDataSet",
                       name="eds", uid="uid-1"),
    ]
    assert is_owned_reference(_owner(), refs) is True


@pytest.mark.parametrize(
    "ref",
    [
        OwnerReference(api_version="zalando.org/v2", kind="ElasticsearchDataSet",
                       name="eds", uid="uid-1"),
        OwnerReference(api_version="zalando.org/v1", kind="Other",
                       name="eds", uid="uid-1"),
        OwnerReference(api_version="zalando.org/v1", kind="ElasticsearchDataSet",
                       name="other", uid="uid-1"),
        OwnerReference(api_version="zalando.org/v1", kind="ElasticsearchDataSet",
                       name="eds", uid="uid-2"),
    ],
)
def test_is_owned_reference_mismatch(ref):
    assert is_owned_reference(_owner(), [ref]) is False


def test_is_owned_reference_no_references():
    assert is_owned_reference(_owner(), []) is False
    assert is_owned_reference(_owner(), None) is False