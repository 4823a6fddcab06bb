"""Building external services and comparing services by content hash."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from srops.hashing import hash_object
from srops.model import (
    COMPONENT_RESOURCE_HASH,
    Cluster,
    ComponentKind,
    ServicePortSpec,
    ServiceSpec,
)
from srops.ports import (
    BE_PORT,
    BRPC_PORT,
    EDIT_LOG_PORT,
    FE_PROXY_HTTP_PORT,
    FE_PROXY_HTTP_PORT_NAME,
    HEARTBEAT_SERVICE_PORT,
    HTTP_PORT,
    QUERY_PORT,
    RPC_PORT,
    THRIFT_PORT,
    WEBSERVER_PORT,
    get_port,
)

logger = logging.getLogger(__name__)

SERVICE_TYPE_CLUSTER_IP = "ClusterIP"
SERVICE_TYPE_LOAD_BALANCER = "LoadBalancer"
PROTOCOL_TCP = "TCP"


class ServiceType(str, enum.Enum):
    """The StarRocks component a service fronts."""

    FE = "fe"
    BE = "be"
    CN = "cn"
    FE_PROXY = "fe-proxy"


@dataclass
class _HashService:
    """The service fields that take part in the content hash."""

    _spew_type = "resource_utils.hashService"

    name: str
    namespace: str
    finalizers: list[str] | None
    ports: list[dict[str, Any]] | None
    selector: dict[str, str] | None
    service_type: str
    labels: dict[str, str] | None


def _service_hash_object(svc: Mapping[str, Any]) -> _HashService:
    meta = svc.get("metadata") or {}
    spec = svc.get("spec") or {}
    return _HashService(
        name=meta.get("name", ""),
        namespace=meta.get("namespace", ""),
        finalizers=meta.get("finalizers"),
        ports=spec.get("ports"),
        selector=spec.get("selector"),
        service_type=spec.get("type", ""),
        labels=meta.get("labels"),
    )


def _merge_port(service: ServiceSpec | None, default: ServicePortSpec) -> ServicePortSpec:
    """Override the default port with a same-named port from the service spec."""
    if service is None or service.ports is None:
        return default
    port = ServicePortSpec(
        name=default.name,
        port=default.port,
        container_port=default.container_port,
        node_port=default.node_port,
    )
    match = next((sp for sp in service.ports if sp.name == default.name), None)
    if match is not None:
        if match.port:
            port.port = match.port
        if match.container_port:
            port.container_port = match.container_port
        if match.node_port:
            port.node_port = match.node_port
    return port


def _ports(
    config: Mapping[str, Any],
    service: ServiceSpec | None,
    keyed_names: list[tuple[str, str]],
) -> list[ServicePortSpec]:
    result = []
    for key, port_name in keyed_names:
        value = get_port(config, key)
        result.append(
            _merge_port(service, ServicePortSpec(name=port_name, port=value, container_port=value))
        )
    return result


def fe_service_ports(config: Mapping[str, Any], service: ServiceSpec | None) -> list[ServicePortSpec]:
    """Ports exposed by an FE service."""
    return _ports(
        config,
        service,
        [(HTTP_PORT, "http"), (RPC_PORT, "rpc"), (QUERY_PORT, "query"), (EDIT_LOG_PORT, "edit-log")],
    )


def be_service_ports(config: Mapping[str, Any], service: ServiceSpec | None) -> list[ServicePortSpec]:
    """Ports exposed by a BE service."""
    return _ports(
        config,
        service,
        [
            (BE_PORT, "be"),
            (WEBSERVER_PORT, "webserver"),
            (HEARTBEAT_SERVICE_PORT, "heartbeat"),
            (BRPC_PORT, "brpc"),
        ],
    )


def cn_service_ports(config: Mapping[str, Any], service: ServiceSpec | None) -> list[ServicePortSpec]:
    """Ports exposed by a CN service."""
    return _ports(
        config,
        service,
        [
            (THRIFT_PORT, "thrift"),
            (WEBSERVER_PORT, "webserver"),
            (HEARTBEAT_SERVICE_PORT, "heartbeat"),
            (BRPC_PORT, "brpc"),
        ],
    )


def _fe_proxy_service_ports(
    config: Mapping[str, Any], service: ServiceSpec | None
) -> list[ServicePortSpec]:
    return [
        _merge_port(
            service,
            ServicePortSpec(
                name=FE_PROXY_HTTP_PORT_NAME,
                port=FE_PROXY_HTTP_PORT,
                container_port=FE_PROXY_HTTP_PORT,
            ),
        )
    ]


def service_annotations(service: ServiceSpec | None) -> dict[str, str]:
    """Return a copy of the annotations configured for a service."""
    if service is not None and service.annotations is not None:
        return dict(service.annotations)
    return {}


def _set_service_type(service: ServiceSpec | None, spec: dict[str, Any]) -> None:
    spec["type"] = SERVICE_TYPE_CLUSTER_IP
    if service is not None and service.type:
        spec["type"] = service.type
    if spec["type"] == SERVICE_TYPE_LOAD_BALANCER and service is not None and service.load_balancer_ip:
        spec["loadBalancerIP"] = service.load_balancer_ip


_COMPONENTS: dict[ServiceType, tuple[ComponentKind, Callable[..., list[ServicePortSpec]]]] = {
    ServiceType.FE: (ComponentKind.FE, fe_service_ports),
    ServiceType.BE: (ComponentKind.BE, be_service_ports),
    ServiceType.CN: (ComponentKind.CN, cn_service_ports),
    ServiceType.FE_PROXY: (ComponentKind.FE_PROXY, _fe_proxy_service_ports),
}


def _component_spec(cluster: Cluster, kind: ComponentKind):
    specs = {
        ComponentKind.FE: cluster.fe,
        ComponentKind.BE: cluster.be,
        ComponentKind.CN: cluster.cn,
        ComponentKind.FE_PROXY: cluster.fe_proxy,
    }
    spec = specs[kind]
    if spec is None:
        raise ValueError(f"cluster {cluster.name!r} has no {kind.value} component")
    return spec


def build_external_service(
    cluster: Cluster,
    name: str,
    service_type: ServiceType | str,
    config: Mapping[str, Any] | None,
    selector: dict[str, str] | None,
    labels: dict[str, str] | None,
) -> dict[str, Any]:
    """Build the external service of a component, annotated with its content hash."""
    kind, port_builder = _COMPONENTS[ServiceType(service_type)]
    component = _component_spec(cluster, kind)
    service = component.service

    metadata: dict[str, Any] = {
        "name": name or f"{cluster.name}-{kind.value}",
        "namespace": cluster.namespace,
        "labels": labels,
    }
    spec: dict[str, Any] = {"selector": selector}
    _set_service_type(service, spec)
    annotations = service_annotations(service)
    sr_ports = port_builder(config or {}, service)

    metadata["ownerReferences"] = [cluster.controller_reference()]
    spec["ports"] = [
        {
            "name": sp.name,
            "port": sp.port,
            "nodePort": sp.node_port,
            "protocol": PROTOCOL_TCP,
            "targetPort": sp.container_port,
        }
        for sp in sr_ports
    ]
    svc = {"metadata": metadata, "spec": spec}

    annotations[COMPONENT_RESOURCE_HASH] = hash_object(_service_hash_object(svc))
    metadata["annotations"] = annotations
    return svc


def service_deep_equal(new: Mapping[str, Any], old: Mapping[str, Any]) -> bool:
    """Compare two services by content hash and namespace."""
    new_meta = new.get("metadata") or {}
    old_meta = old.get("metadata") or {}

    new_hso = _service_hash_object(new)
    logger.debug("new service hash object: %r", new_hso)
    new_annotations = new_meta.get("annotations") or {}
    if COMPONENT_RESOURCE_HASH in new_annotations:
        new_hash = new_annotations[COMPONENT_RESOURCE_HASH]
    else:
        new_hash = hash_object(new_hso)

    old_hso = _service_hash_object(old)
    logger.debug("old service hash object: %r", old_hso)
    old_hash = hash_object(old_hso)

    return new_hash == old_hash and new_meta.get("namespace", "") == old_meta.get("namespace", "")


def have_equal_owner_reference(svc1: Mapping[str, Any], svc2: Mapping[str, Any]) -> bool:
    """True when the services share at least one owner (by kind and name)."""

    def keys(svc: Mapping[str, Any]) -> set[str]:
        refs = (svc.get("metadata") or {}).get("ownerReferences") or []
        return {ref.get("kind", "") + ref.get("name", "") for ref in refs}

    return bool(keys(svc1) & keys(svc2))