"""Names, labels and selectors for component workloads."""

from __future__ import annotations

from typing import Any

from srops.metadata import Labels
from srops.model import COMPONENT_LABEL_KEY, OWNER_REFERENCE_LABEL, ComponentKind, ComponentSpec


def _kind(spec: Any) -> ComponentKind | None:
    if isinstance(spec, ComponentKind):
        return spec
    if isinstance(spec, ComponentSpec):
        return spec.kind
    return None


def name(cluster_name: str, spec: Any) -> str:
    kind = _kind(spec)
    return f"{cluster_name}-{kind.value}" if kind else ""


def labels(owner_reference: str, spec: Any) -> Labels:
    result = Labels({OWNER_REFERENCE_LABEL: owner_reference})
    kind = _kind(spec)
    if kind:
        result[COMPONENT_LABEL_KEY] = kind.value
    return result


def annotations() -> dict[str, str]:
    return {}


def selector(cluster_name: str, spec: Any) -> Labels:
    return labels(name(cluster_name, spec), spec)