import pytest

from srops import load
from srops.deployment import (
    TIMED_OUT_REASON,
    get_deployment_condition,
    make_deployment,
    rollout_status,
)
from srops.model import Cluster, ComponentKind, ComponentSpec, RolloutError


@pytest.fixture
def cluster():
    return Cluster(name="test", namespace="namespace", uid="uid-1")


def test_make_deployment_metadata(cluster):
    spec = ComponentSpec(kind=ComponentKind.FE_PROXY, replicas=2)
    got = make_deployment(cluster, spec, {"metadata": {"labels": {"a": "b"}}})
    meta = got["metadata"]
    assert meta["name"] == load.name("test", spec)
    assert meta["namespace"] == "namespace"
    assert meta["labels"] == dict(load.labels("test", spec))
    assert meta["annotations"] == {}
    assert meta["ownerReferences"] == [cluster.controller_reference()]


def test_make_deployment_spec(cluster):
    spec = ComponentSpec(kind=ComponentKind.FE_PROXY, replicas=2)
    template = {"metadata": {"labels": {"a": "b"}}}
    got = make_deployment(cluster, spec, template)
    assert got["spec"]["replicas"] == 2
    assert got["spec"]["selector"] == {"matchLabels": dict(load.selector("test", spec))}
    assert got["spec"]["template"] == template
    assert got["kind"] == "Deployment"


def test_make_deployment_without_replicas(cluster):
    got = make_deployment(cluster, ComponentSpec(kind=ComponentKind.FE_PROXY), None)
    assert "replicas" not in got["spec"]
    assert got["spec"]["template"] == {}


def test_status_waits_for_observed_generation():
    dep = {"metadata": {"name": "d", "generation": 2}, "status": {"observedGeneration": 1}}
    assert rollout_status(dep) == ("Waiting for deployment spec update to be observed...\n", False)


def test_status_timed_out_raises():
    dep = {
        "metadata": {"name": "d"},
        "status": {"conditions": [{"type": "Progressing", "reason": TIMED_OUT_REASON}]},
    }
    with pytest.raises(RolloutError, match="exceeded its progress deadline"):
        rollout_status(dep)


def test_status_waiting_for_updated_replicas():
    dep = {"metadata": {"name": "d"}, "spec": {"replicas": 3}, "status": {"updatedReplicas": 1}}
    message, done = rollout_status(dep)
    assert done is False
    assert message == (
        'Waiting for deployment "d" rollout to finish: '
        "1 out of 3 new replicas have been updated...\n"
    )


def test_status_old_replicas_pending():
    dep = {
        "metadata": {"name": "d"},
        "spec": {"replicas": 2},
        "status": {"updatedReplicas": 2, "replicas": 3},
    }
    message, done = rollout_status(dep)
    assert done is False
    assert "1 old replicas are pending termination" in message


def test_status_waiting_for_available():
    dep = {
        "metadata": {"name": "d"},
        "spec": {"replicas": 2},
        "status": {"updatedReplicas": 2, "replicas": 2, "availableReplicas": 1},
    }
    message, done = rollout_status(dep)
    assert done is False
    assert "1 of 2 updated replicas are available" in message


def test_status_rolled_out():
    dep = {
        "metadata": {"name": "d"},
        "spec": {"replicas": 2},
        "status": {"updatedReplicas": 2, "replicas": 2, "availableReplicas": 2},
    }
    assert rollout_status(dep) == ('deployment "d" successfully rolled out\n', True)


def test_get_deployment_condition_found_and_copied():
    status = {"conditions": [{"type": "Available"}, {"type": "Progressing", "reason": "r"}]}
    cond = get_deployment_condition(status, "Progressing")
    assert cond == {"type": "Progressing", "reason": "r"}
    cond["reason"] = "changed"
    assert status["conditions"][1]["reason"] == "r"


def test_get_deployment_condition_missing():
    assert get_deployment_condition({"conditions": [{"type": "Available"}]}, "Progressing") is None
    assert get_deployment_condition({}, "Progressing") is None