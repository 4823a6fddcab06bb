"""Building Deployment manifests and reporting their rollout status."""

from __future__ import annotations

import copy
import json
from typing import Any, Mapping

from srops import load
from srops.model import Cluster, ComponentSpec, RolloutError

DEPLOYMENT_API_VERSION = "apps/v1"
DEPLOYMENT_KIND = "Deployment"
DEPLOYMENT_PROGRESSING = "Progressing"

# Set on a deployment whose newest replica set made no progress within
# progressDeadlineSeconds.
TIMED_OUT_REASON = "ProgressDeadlineExceeded"


def make_deployment(
    cluster: Cluster, spec: ComponentSpec, pod_template_spec: Mapping[str, Any] | None
) -> dict[str, Any]:
    """Build the Deployment running the component's pods."""
    deployment_spec: dict[str, Any] = {}
    if spec.replicas is not None:
        deployment_spec["replicas"] = spec.replicas
    deployment_spec["selector"] = {"matchLabels": dict(load.selector(cluster.name, spec))}
    deployment_spec["template"] = copy.deepcopy(dict(pod_template_spec or {}))
    return {
        "apiVersion": DEPLOYMENT_API_VERSION,
        "kind": DEPLOYMENT_KIND,
        "metadata": {
            "name": load.name(cluster.name, spec),
            "namespace": cluster.namespace,
            "labels": dict(load.labels(cluster.name, spec)),
            "annotations": load.annotations(),
            "ownerReferences": [cluster.controller_reference()],
        },
        "spec": deployment_spec,
    }


def get_deployment_condition(
    status: Mapping[str, Any] | None, cond_type: str
) -> dict[str, Any] | None:
    """Return a copy of the first condition of the given type, or None."""
    for condition in (status or {}).get("conditions") or []:
        if condition.get("type") == cond_type:
            return copy.deepcopy(dict(condition))
    return None


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def rollout_status(deployment: Mapping[str, Any]) -> tuple[str, bool]:
    """Describe the rollout and say whether it is done.

    Raises RolloutError when the deployment exceeded its progress deadline.
    """
    meta = deployment.get("metadata") or {}
    spec = deployment.get("spec") or {}
    status = deployment.get("status") or {}
    name = _quote(meta.get("name", ""))

    if meta.get("generation", 0) > status.get("observedGeneration", 0):
        return "Waiting for deployment spec update to be observed...\n", False

    condition = get_deployment_condition(status, DEPLOYMENT_PROGRESSING)
    if condition is not None and condition.get("reason") == TIMED_OUT_REASON:
        raise RolloutError(f"deployment {name} exceeded its progress deadline")

    replicas = spec.get("replicas")
    updated = status.get("updatedReplicas", 0)
    current = status.get("replicas", 0)
    available = status.get("availableReplicas", 0)

    if replicas is not None and updated < replicas:
        return (
            f"Waiting for deployment {name} rollout to finish: "
            f"{updated} out of {replicas} new replicas have been updated...\n",
            False,
        )
    if current > updated:
        return (
            f"Waiting for deployment {name} rollout to finish: "
            f"{current - updated} old replicas are pending termination...\n",
            False,
        )
    if available < updated:
        return (
            f"Waiting for deployment {name} rollout to finish: "
            f"{available} of {updated} updated replicas are available...\n",
            False,
        )
    return f"deployment {name} successfully rolled out\n", True