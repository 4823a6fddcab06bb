"""Comparing and merging StatefulSet manifests."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from srops.hashing import hash_object
from srops.metadata import Annotations, merge_metadata
from srops.model import COMPONENT_RESOURCE_HASH

logger = logging.getLogger(__name__)


@dataclass
class _HashStatefulSet:
    """The statefulset fields that take part in the content hash."""

    _spew_type = "resource_utils.hashStatefulsetObject"

    name: str
    namespace: str
    labels: dict[str, str] | None
    finalizers: list[str] | None
    selector: dict[str, Any]
    pod_template: dict[str, Any]
    service_name: str
    volume_claim_templates: list[dict[str, Any]] | None
    replicas: int


def _statefulset_hash_object(st: Mapping[str, Any], exclude_replicas: bool) -> _HashStatefulSet:
    meta = st.get("metadata") or {}
    spec = st.get("spec") or {}
    replicas = -1
    if not exclude_replicas and spec.get("replicas") is not None:
        replicas = spec["replicas"]
    return _HashStatefulSet(
        name=meta.get("name", ""),
        namespace=meta.get("namespace", ""),
        labels=meta.get("labels"),
        finalizers=meta.get("finalizers"),
        selector=spec.get("selector") or {},
        pod_template=spec.get("template") or {},
        service_name=spec.get("serviceName", ""),
        volume_claim_templates=spec.get("volumeClaimTemplates"),
        replicas=replicas,
    )


def statefulset_deep_equal(
    new: dict[str, Any], old: Mapping[str, Any], exclude_replicas: bool = False
) -> bool:
    """Compare statefulsets by content hash; records the new hash on new's annotations."""
    new_meta = new.setdefault("metadata", {})
    old_meta = old.get("metadata") or {}

    new_hso = _statefulset_hash_object(new, exclude_replicas)
    logger.debug("new statefulset hash object: %r", new_hso)
    new_annotations = new_meta.get("annotations") or {}
    if COMPONENT_RESOURCE_HASH in new_annotations:
        new_hash = new_annotations[COMPONENT_RESOURCE_HASH]
    else:
        new_hash = hash_object(new_hso)

    # A statefulset in the cluster may be changed by the controller manager,
    # so prefer the hash recorded when it was last applied.
    old_annotations = old_meta.get("annotations") or {}
    if COMPONENT_RESOURCE_HASH in old_annotations:
        old_hash = old_annotations[COMPONENT_RESOURCE_HASH]
    else:
        old_hso = _statefulset_hash_object(old, exclude_replicas)
        logger.debug("old statefulset hash object: %r", old_hso)
        old_hash = hash_object(old_hso)

    annotations = Annotations()
    annotations.add_annotation(new_meta.get("annotations"))
    annotations.add(COMPONENT_RESOURCE_HASH, new_hash)
    new_meta["annotations"] = annotations

    logger.info(
        "the statefulset name %s new hash value %s old have value %s",
        new_meta.get("name", ""),
        new_hash,
        old_hash,
    )
    return new_hash == old_hash and new_meta.get("namespace", "") == old_meta.get("namespace", "")


def merge_statefulsets(new: dict[str, Any], old: Mapping[str, Any]) -> None:
    """Merge the existing statefulset's metadata into the new one in place."""
    merge_metadata(new.setdefault("metadata", {}), old.get("metadata") or {})