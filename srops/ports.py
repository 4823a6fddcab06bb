"""Port defaults and resolution from component configuration."""

from __future__ import annotations

from typing import Any, Mapping

HTTP_PORT = "http_port"
RPC_PORT = "rpc_port"
QUERY_PORT = "query_port"
EDIT_LOG_PORT = "edit_log_port"

THRIFT_PORT = "thrift_port"
BE_PORT = "be_port"
WEBSERVER_PORT = "webserver_port"
HEARTBEAT_SERVICE_PORT = "heartbeat_service_port"
BRPC_PORT = "brpc_port"

FE_PROXY_HTTP_PORT = 8080
FE_PROXY_HTTP_PORT_NAME = "http-port"

DEF_MAP: dict[str, int] = {
    HTTP_PORT: 8030,
    RPC_PORT: 9020,
    QUERY_PORT: 9030,
    EDIT_LOG_PORT: 9010,
    THRIFT_PORT: 9060,
    BE_PORT: 9060,
    WEBSERVER_PORT: 8040,
    HEARTBEAT_SERVICE_PORT: 9050,
    BRPC_PORT: 8060,
}

_INT32_MIN, _INT32_MAX = -(2**31), 2**31 - 1


def parse_properties(text: str) -> dict[str, str]:
    """Parse properties-file text; keys are lower-cased."""
    result: dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line[0] in "#!":
            continue
        positions = [p for p in (line.find("="), line.find(":")) if p >= 0]
        if positions:
            cut = min(positions)
            key, value = line[:cut], line[cut + 1 :]
        else:
            key, _, value = line.partition(" ")
        result[key.strip().lower()] = value.strip()
    return result


def resolve_config_map(config_map: Mapping[str, Any], key: str) -> dict[str, str]:
    """Parse the properties stored under key in a config map's data."""
    data = config_map.get("data") or {}
    if key not in data:
        return {}
    return parse_properties(data[key])


def get_port(config: Mapping[str, Any], key: str) -> int:
    """Return the configured port for key, or its default."""
    value = config.get(key) if config else None
    if isinstance(value, str):
        try:
            port = int(value.strip(), 10)
        except ValueError:
            port = None
        if port is not None and _INT32_MIN <= port <= _INT32_MAX:
            return port
    return DEF_MAP.get(key, 0)