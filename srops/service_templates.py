"""Search (headless) services and the naming of component services."""

from __future__ import annotations

import copy
from typing import Any, Mapping

from srops.model import ComponentKind, ComponentSpec


def _kind(spec: Any) -> ComponentKind | None:
    if isinstance(spec, ComponentKind):
        return spec
    if isinstance(spec, ComponentSpec):
        return spec.kind
    return None


def make_search_service(
    service_name: str,
    external_service: Mapping[str, Any],
    ports: list[dict[str, Any]] | None,
) -> dict[str, Any]:
    """A headless service sharing the external service's metadata and selector."""
    metadata = copy.deepcopy(dict(external_service.get("metadata") or {}))
    metadata["name"] = service_name
    selector = (external_service.get("spec") or {}).get("selector")
    return {
        "metadata": metadata,
        "spec": {
            "clusterIP": "None",
            "ports": ports,
            "selector": copy.deepcopy(selector),
            # Pods must be resolvable by domain before they are ready.
            "publishNotReadyAddresses": True,
        },
    }


def search_service_name(cluster_name: str, spec: Any) -> str:
    """The name of the statefulset's search service; empty for other components."""
    kind = _kind(spec)
    if kind in (ComponentKind.FE, ComponentKind.BE, ComponentKind.CN):
        return f"{cluster_name}-{kind.value}-search"
    return ""


def external_service_name(cluster_name: str, spec: Any) -> str:
    """The name of a component's external service; empty for unknown specs."""
    kind = _kind(spec)
    return f"{cluster_name}-{kind.value}-service" if kind else ""