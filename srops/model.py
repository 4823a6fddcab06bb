"""Core data types describing a StarRocks cluster and its components."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

KUBECTL_RESTART_ANNOTATION_KEY = "kubectl.kubernetes.io/restartedAt"
COMPONENT_RESOURCE_HASH = "app.starrocks.io/component-resource-hash"
OWNER_REFERENCE_LABEL = "app.starrocks.ownerreference/name"
COMPONENT_LABEL_KEY = "app.kubernetes.io/component"
COMPONENT_NAME_ENV = "COMPONENT_NAME"
FE_SERVICE_NAME_ENV = "FE_SERVICE_NAME"

CLUSTER_API_VERSION = "starrocks.com/v1"
CLUSTER_KIND = "StarRocksCluster"


class ComponentKind(str, enum.Enum):
    """The kinds of StarRocks components."""

    FE = "fe"
    BE = "be"
    CN = "cn"
    FE_PROXY = "fe-proxy"


class AutoscalerVersion(str, enum.Enum):
    """Supported HorizontalPodAutoscaler API versions."""

    V1 = "v1"
    V2 = "v2"
    V2BETA2 = "v2beta2"


class RolloutError(Exception):
    """Raised when a rollout cannot progress or its status cannot be computed."""


@dataclass
class MountInfo:
    _spew_type = "v1.MountInfo"

    name: str = ""
    mount_path: str = ""
    sub_path: str = ""


@dataclass
class StorageVolume:
    name: str = ""
    storage_class_name: str | None = None
    storage_size: str = ""
    mount_path: str = ""
    sub_path: str = ""


@dataclass
class ConfigMapInfo:
    config_map_name: str = ""
    resolve_key: str = ""


@dataclass
class ServicePortSpec:
    name: str = ""
    port: int = 0
    container_port: int = 0
    node_port: int = 0


@dataclass
class ServiceSpec:
    type: str = ""
    load_balancer_ip: str = ""
    annotations: dict[str, str] | None = None
    ports: list[ServicePortSpec] | None = None


@dataclass
class ComponentSpec:
    """Settings shared by every component of a cluster."""

    kind: ComponentKind
    replicas: int | None = None
    service: ServiceSpec | None = None
    storage_volumes: list[StorageVolume] = field(default_factory=list)
    pod_labels: dict[str, str] | None = None
    annotations: dict[str, str] | None = None
    service_account: str = ""
    config_maps: list[MountInfo] = field(default_factory=list)
    secrets: list[MountInfo] = field(default_factory=list)
    config_map_info: ConfigMapInfo = field(default_factory=ConfigMapInfo)
    run_as_user: int | None = None
    run_as_group: int | None = None
    affinity: dict[str, Any] | None = None
    tolerations: list[dict[str, Any]] | None = None
    image_pull_secrets: list[dict[str, Any]] | None = None
    node_selector: dict[str, str] | None = None
    host_aliases: list[dict[str, Any]] | None = None
    scheduler_name: str = ""


@dataclass
class Cluster:
    """A StarRocks cluster resource."""

    name: str
    namespace: str = ""
    uid: str = ""
    fe: ComponentSpec | None = None
    be: ComponentSpec | None = None
    cn: ComponentSpec | None = None
    fe_proxy: ComponentSpec | None = None

    def controller_reference(self) -> dict[str, Any]:
        """Return an owner reference marking this cluster as the controller."""
        return {
            "apiVersion": CLUSTER_API_VERSION,
            "kind": CLUSTER_KIND,
            "name": self.name,
            "uid": self.uid,
            "controller": True,
            "blockOwnerDeletion": True,
        }