"""Data types for configuration items and service discovery records."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Callable, TypeVar

STATE_RUNNING = 0
STATE_SHUTDOWN = 1

_T = TypeVar("_T")


def _as_str(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected a string, got {type(value).__name__}")
    return value


def _as_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"expected a boolean, got {type(value).__name__}")
    return value


def _as_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected an integer, got {type(value).__name__}")
    return value


def _as_uint(value: Any) -> int:
    number = _as_int(value)
    if number < 0:
        raise ValueError(f"expected a non-negative integer, got {number}")
    return number


def _as_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a number, got {type(value).__name__}")
    return float(value)


def _as_str_map(value: Any) -> dict[str, str]:
    if not isinstance(value, dict):
        raise TypeError(f"expected an object, got {type(value).__name__}")
    return {_as_str(key): _as_str(item) for key, item in value.items()}


def _list_of(decode: Callable[[Any], _T]) -> Callable[[Any], list[_T]]:
    def convert(value: Any) -> list[_T]:
        if not isinstance(value, list):
            raise TypeError(f"expected an array, got {type(value).__name__}")
        return [decode(item) for item in value]

    return convert


def _nested(cls: type[_T]) -> Callable[[Any], _T]:
    return lambda value: _from_json(cls, value)


def _json(name: str, decode: Callable[[Any], Any] | None = None, **kwargs: Any) -> Any:
    return field(metadata={"json": name, "decode": decode}, **kwargs)


def _param(name: str, **kwargs: Any) -> Any:
    return field(metadata={"param": name}, **kwargs)


def _from_json(cls: type[_T], data: Any) -> _T:
    """Build a dataclass from a decoded JSON object using field metadata."""
    if not isinstance(data, dict):
        raise TypeError(f"cannot decode {type(data).__name__} into {cls.__name__}")
    kwargs: dict[str, Any] = {}
    for f in fields(cls):  # type: ignore[arg-type]
        key = f.metadata.get("json")
        decode = f.metadata.get("decode")
        if key is None or decode is None:
            continue
        value = data.get(key)
        if value is not None:
            kwargs[f.name] = decode(value)
    return cls(**kwargs)


@dataclass
class ConfigItem:
    """One configuration entry as listed by a search."""

    id: str = _param("id", default="")
    data_id: str = _param("dataId", default="")
    group: str = _param("group", default="")
    content: str = _param("content", default="")
    md5: str = _param("md5", default="")
    tenant: str = _param("tenant", default="")
    appname: str = _param("appname", default="")


@dataclass
class ConfigPage:
    """A page of configuration search results."""

    total_count: int = _param("totalCount", default=0)
    page_number: int = _param("pageNumber", default=0)
    pages_available: int = _param("pagesAvailable", default=0)
    page_items: list[ConfigItem] = _param("pageItems", default_factory=list)


@dataclass
class ConfigListenContext:
    """Identifies a configuration being listened to, with its last known digest."""

    group: str = _json("group", _as_str, default="")
    md5: str = _json("md5", _as_str, default="")
    data_id: str = _json("dataId", _as_str, default="")
    tenant: str = _json("tenant", _as_str, default="")


@dataclass
class ConfigContext:
    """Identifies a configuration entry."""

    group: str = _json("group", _as_str, default="")
    data_id: str = _json("dataId", _as_str, default="")
    tenant: str = _json("tenant", _as_str, default="")


@dataclass
class Instance:
    """A registered service instance."""

    instance_id: str = _json("instanceId", _as_str, default="")
    ip: str = _json("ip", _as_str, default="")
    port: int = _json("port", _as_uint, default=0)
    weight: float = _json("weight", _as_float, default=0.0)
    healthy: bool = _json("healthy", _as_bool, default=False)
    enable: bool = _json("enabled", _as_bool, default=False)
    ephemeral: bool = _json("ephemeral", _as_bool, default=False)
    cluster_name: str = _json("clusterName", _as_str, default="")
    service_name: str = _json("serviceName", _as_str, default="")
    metadata: dict[str, str] = _json("metadata", _as_str_map, default_factory=dict)
    instance_heart_beat_interval: int = _json(
        "instanceHeartBeatInterval", _as_int, default=0
    )
    ip_delete_timeout: int = _json("ipDeleteTimeout", _as_int, default=0)
    instance_heart_beat_time_out: int = _json(
        "instanceHeartBeatTimeOut", _as_int, default=0
    )

    @classmethod
    def from_dict(cls, data: Any) -> Instance:
        """Build an instance from a decoded JSON object."""
        return _from_json(cls, data)


@dataclass
class Service:
    """A service with its current list of instances."""

    cache_millis: int = _json("cacheMillis", _as_uint, default=0)
    hosts: list[Instance] = _json("hosts", _list_of(_nested(Instance)), default_factory=list)
    checksum: str = _json("checksum", _as_str, default="")
    last_ref_time: int = _json("lastRefTime", _as_uint, default=0)
    clusters: str = _json("clusters", _as_str, default="")
    name: str = _json("name", _as_str, default="")
    group_name: str = _json("groupName", _as_str, default="")
    valid: bool = _json("valid", _as_bool, default=False)
    all_ips: bool = _json("allIPs", _as_bool, default=False)
    reach_protection_threshold: bool = _json(
        "reachProtectionThreshold", _as_bool, default=False
    )

    @classmethod
    def from_dict(cls, data: Any) -> Service:
        """Build a service from a decoded JSON object."""
        return _from_json(cls, data)


@dataclass
class ServiceSelector:
    """Selector expression attached to a service."""

    selector: str = _json("Selector", _as_str, default="")


@dataclass
class ServiceInfo:
    """Descriptive information about a service."""

    app: str = _json("app", _as_str, default="")
    group: str = _json("group", _as_str, default="")
    health_check_mode: str = _json("healthCheckMode", _as_str, default="")
    metadata: dict[str, str] = _json("metadata", _as_str_map, default_factory=dict)
    name: str = _json("name", _as_str, default="")
    protect_threshold: float = _json("protectThreshold", _as_float, default=0.0)
    selector: ServiceSelector = _json(
        "selector", _nested(ServiceSelector), default_factory=ServiceSelector
    )


@dataclass
class ClusterHealthChecker:
    """Health checker type of a cluster."""

    type: str = _json("type", _as_str, default="")


@dataclass
class Cluster:
    """A cluster of instances within a service."""

    service_name: str = _json("serviceName", _as_str, default="")
    name: str = _json("name", _as_str, default="")
    healthy_checker: ClusterHealthChecker = _json(
        "healthyChecker", _nested(ClusterHealthChecker), default_factory=ClusterHealthChecker
    )
    default_port: int = _json("defaultPort", _as_uint, default=0)
    default_check_port: int = _json("defaultCheckPort", _as_uint, default=0)
    use_ip_port_for_check: bool = _json("useIpPort4Check", _as_bool, default=False)
    metadata: dict[str, str] = _json("metadata", _as_str_map, default_factory=dict)


@dataclass
class ServiceDetail:
    """A service together with its clusters."""

    service: ServiceInfo = _json("service", _nested(ServiceInfo), default_factory=ServiceInfo)
    clusters: list[Cluster] = _json(
        "clusters", _list_of(_nested(Cluster)), default_factory=list
    )


@dataclass
class BeatInfo:
    """Heartbeat payload for an instance; period is in nanoseconds."""

    ip: str = _json("ip", _as_str, default="")
    port: int = _json("port", _as_uint, default=0)
    weight: float = _json("weight", _as_float, default=0.0)
    service_name: str = _json("serviceName", _as_str, default="")
    cluster: str = _json("cluster", _as_str, default="")
    metadata: dict[str, str] = _json("metadata", _as_str_map, default_factory=dict)
    scheduled: bool = _json("scheduled", _as_bool, default=False)
    period: int = _json("-", default=0)
    state: int = _json("-", default=STATE_RUNNING)


@dataclass
class ExpressionSelector:
    """A typed selector expression."""

    type: str = _json("type", _as_str, default="")
    expression: str = _json("expression", _as_str, default="")


@dataclass
class ServiceList:
    """A count of services and their names."""

    count: int = _json("count", _as_int, default=0)
    doms: list[str] = _json("doms", _list_of(_as_str), default_factory=list)