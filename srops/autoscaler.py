"""Building HorizontalPodAutoscaler manifests."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Callable

from srops.model import AutoscalerVersion

AUTOSCALER_KIND = "HorizontalPodAutoscaler"
STATEFULSET_KIND = "StatefulSet"
SERVICE_KIND = "Service"


@dataclass
class PodAutoscalerParams:
    autoscaler_type: AutoscalerVersion | None
    namespace: str
    name: str
    labels: dict[str, str]
    target_name: str
    owner_references: list[dict[str, Any]] = field(default_factory=list)
    scaler_policy: dict[str, Any] = field(default_factory=dict)


def _base(params: PodAutoscalerParams, api_version: str) -> dict[str, Any]:
    policy = params.scaler_policy or {}
    spec: dict[str, Any] = {
        "scaleTargetRef": {
            "name": params.target_name,
            "kind": STATEFULSET_KIND,
            "apiVersion": "apps/v1",
        },
        "maxReplicas": policy.get("maxReplicas", 0),
    }
    if policy.get("minReplicas") is not None:
        spec["minReplicas"] = policy["minReplicas"]
    return {
        "apiVersion": api_version,
        "kind": AUTOSCALER_KIND,
        "metadata": {
            "name": params.name,
            "namespace": params.namespace,
            "labels": params.labels,
            "ownerReferences": params.owner_references,
        },
        "spec": spec,
    }


def _with_policy(params: PodAutoscalerParams, api_version: str) -> dict[str, Any]:
    hpa = _base(params, api_version)
    hpa_policy = (params.scaler_policy or {}).get("hpaPolicy")
    if hpa_policy:
        if hpa_policy.get("metrics"):
            hpa["spec"]["metrics"] = copy.deepcopy(hpa_policy["metrics"])
        if hpa_policy.get("behavior") is not None:
            hpa["spec"]["behavior"] = copy.deepcopy(hpa_policy["behavior"])
    return hpa


def build_autoscaler_v1(params: PodAutoscalerParams) -> dict[str, Any]:
    return _base(params, "autoscaling/v1")


def build_autoscaler_v2(params: PodAutoscalerParams) -> dict[str, Any]:
    return _with_policy(params, "autoscaling/v2")


def build_autoscaler_v2beta2(params: PodAutoscalerParams) -> dict[str, Any]:
    return _with_policy(params, "autoscaling/v2beta2")


_BUILDERS: dict[AutoscalerVersion, Callable[[PodAutoscalerParams], dict[str, Any]]] = {
    AutoscalerVersion.V1: build_autoscaler_v1,
    AutoscalerVersion.V2: build_autoscaler_v2,
    AutoscalerVersion.V2BETA2: build_autoscaler_v2beta2,
}


def build_horizontal_pod_autoscaler(params: PodAutoscalerParams) -> dict[str, Any]:
    """Build the autoscaler for the requested API version (v2beta2 otherwise)."""
    return _BUILDERS.get(params.autoscaler_type, build_autoscaler_v2beta2)(params)