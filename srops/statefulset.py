"""Building StatefulSet manifests and reporting their rollout status."""

from __future__ import annotations

import copy
import re
from typing import Any, Iterable, Mapping

from srops import load
from srops.model import Cluster, ComponentSpec, RolloutError, StorageVolume
from srops.service_templates import search_service_name

STATEFULSET_API_VERSION = "apps/v1"
STATEFULSET_KIND = "StatefulSet"
ROLLING_UPDATE = "RollingUpdate"
PARALLEL_POD_MANAGEMENT = "Parallel"
READ_WRITE_ONCE = "ReadWriteOnce"
DEFAULT_ROLLING_UPDATE_START_POD = 0

_QUANTITY = re.compile(
    r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+|Ki|Mi|Gi|Ti|Pi|Ei|n|u|m|k|M|G|T|P|E)?$"
)


def _storage_quantity(size: str) -> str:
    if not _QUANTITY.match(size or ""):
        raise ValueError(f"cannot parse {size!r} as a storage quantity")
    return size


def pvc_list(volumes: Iterable[StorageVolume] | None) -> list[dict[str, Any]]:
    """Persistent volume claim templates for the storage volumes.

    Raises ValueError when a storage size is not a valid quantity.
    """
    claims = []
    for volume in volumes or []:
        spec: dict[str, Any] = {"accessModes": [READ_WRITE_ONCE]}
        if volume.storage_class_name is not None:
            spec["storageClassName"] = volume.storage_class_name
        spec["resources"] = {"requests": {"storage": _storage_quantity(volume.storage_size)}}
        claims.append({"metadata": {"name": volume.name}, "spec": spec})
    return claims


def make_statefulset(
    cluster: Cluster, spec: ComponentSpec, pod_template_spec: Mapping[str, Any] | None
) -> dict[str, Any]:
    """Build the StatefulSet running the component's pods."""
    st_spec: dict[str, Any] = {}
    if spec.replicas is not None:
        st_spec["replicas"] = spec.replicas
    st_spec["selector"] = {"matchLabels": dict(load.selector(cluster.name, spec))}
    st_spec["updateStrategy"] = {
        "type": ROLLING_UPDATE,
        "rollingUpdate": {"partition": DEFAULT_ROLLING_UPDATE_START_POD},
    }
    st_spec["template"] = copy.deepcopy(dict(pod_template_spec or {}))
    st_spec["serviceName"] = search_service_name(cluster.name, spec)
    claims = pvc_list(spec.storage_volumes)
    if claims:
        st_spec["volumeClaimTemplates"] = claims
    st_spec["podManagementPolicy"] = PARALLEL_POD_MANAGEMENT
    return {
        "apiVersion": STATEFULSET_API_VERSION,
        "kind": STATEFULSET_KIND,
        "metadata": {
            "name": load.name(cluster.name, spec),
            "namespace": cluster.namespace,
            "annotations": load.annotations(),
            "labels": dict(load.labels(cluster.name, spec)),
            "ownerReferences": [cluster.controller_reference()],
        },
        "spec": st_spec,
    }


def rollout_status(statefulset: Mapping[str, Any]) -> tuple[str, bool]:
    """Describe the rollout and say whether it is done.

    Raises RolloutError when the update strategy is not RollingUpdate.
    """
    meta = statefulset.get("metadata") or {}
    spec = statefulset.get("spec") or {}
    status = statefulset.get("status") or {}
    strategy = spec.get("updateStrategy") or {}

    if strategy.get("type", "") != ROLLING_UPDATE:
        raise RolloutError(f"rollout status is only available for {ROLLING_UPDATE} strategy type")

    observed = status.get("observedGeneration", 0)
    if observed == 0 or meta.get("generation", 0) > observed:
        return "Waiting for statefulset spec update to be observed", False

    replicas = spec.get("replicas")
    ready = status.get("readyReplicas", 0)
    updated = status.get("updatedReplicas", 0)
    if replicas is not None and ready < replicas:
        return f"Waiting for {replicas - ready} pods to be ready", False

    rolling_update = strategy.get("rollingUpdate")
    if rolling_update is not None:
        partition = rolling_update.get("partition")
        if replicas is not None and partition is not None and updated < replicas - partition:
            return (
                "Waiting for partitioned roll out to finish: "
                f"{updated} out of {replicas - partition} new pods have been updated",
                False,
            )
        return f"partitioned roll out complete: {updated} new pods have been updated", True

    update_revision = status.get("updateRevision", "")
    current_revision = status.get("currentRevision", "")
    if update_revision != current_revision:
        return (
            f"waiting for statefulset rolling update to complete {updated} pods "
            f"at revision {update_revision}...\n",
            False,
        )
    return (
        f"statefulset rolling update complete {status.get('currentReplicas', 0)} pods "
        f"at revision {current_revision}...\n",
        True,
    )