"""Request parameters for configuration and naming operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from nacoskit.model import Instance

Listener = Callable[[str, str, str, str], None]
SubscribeCallback = Callable[[list[Instance], Optional[BaseException]], None]


def _param(name: str, **kwargs: Any) -> Any:
    return field(metadata={"param": name}, **kwargs)


@dataclass
class ConfigParam:
    """Parameters for publishing, reading or listening to a configuration."""

    data_id: str = _param("dataId", default="")
    group: str = _param("group", default="")
    content: str = _param("content", default="")
    tag: str = _param("tag", default="")
    app_name: str = _param("appName", default="")
    beta_ips: str = _param("betaIps", default="")
    cas_md5: str = _param("casMd5", default="")
    type: str = _param("type", default="")
    src_user: str = _param("srcUser", default="")
    encrypted_data_key: str = _param("encryptedDataKey", default="")
    on_change: Optional[Listener] = None


@dataclass
class SearchConfigParam:
    """Parameters for searching configurations."""

    search: str = _param("search", default="")
    data_id: str = _param("dataId", default="")
    group: str = _param("group", default="")
    tag: str = _param("tag", default="")
    app_name: str = _param("appName", default="")
    page_no: int = _param("pageNo", default=0)
    page_size: int = _param("pageSize", default=0)


@dataclass
class RegisterInstanceParam:
    """Parameters for registering an instance."""

    ip: str = _param("ip", default="")
    port: int = _param("port", default=0)
    weight: float = _param("weight", default=0.0)
    enable: bool = _param("enabled", default=False)
    healthy: bool = _param("healthy", default=False)
    metadata: Optional[dict[str, str]] = _param("metadata", default=None)
    cluster_name: str = _param("clusterName", default="")
    service_name: str = _param("serviceName", default="")
    group_name: str = _param("groupName", default="")
    ephemeral: bool = _param("ephemeral", default=False)


@dataclass
class BatchRegisterInstanceParam:
    """Parameters for registering several instances of one service."""

    service_name: str = _param("serviceName", default="")
    group_name: str = _param("groupName", default="")
    instances: list[RegisterInstanceParam] = field(default_factory=list)


@dataclass
class DeregisterInstanceParam:
    """Parameters for removing an instance."""

    ip: str = _param("ip", default="")
    port: int = _param("port", default=0)
    cluster: str = _param("cluster", default="")
    service_name: str = _param("serviceName", default="")
    group_name: str = _param("groupName", default="")
    ephemeral: bool = _param("ephemeral", default=False)


@dataclass
class UpdateInstanceParam:
    """Parameters for updating an instance."""

    ip: str = _param("ip", default="")
    port: int = _param("port", default=0)
    weight: float = _param("weight", default=0.0)
    enable: bool = _param("enabled", default=False)
    healthy: bool = _param("healthy", default=False)
    metadata: Optional[dict[str, str]] = _param("metadata", default=None)
    cluster_name: str = _param("clusterName", default="")
    service_name: str = _param("serviceName", default="")
    group_name: str = _param("groupName", default="")
    ephemeral: bool = _param("ephemeral", default=False)


@dataclass
class GetServiceParam:
    """Parameters for fetching a service."""

    clusters: Optional[list[str]] = _param("clusters", default=None)
    service_name: str = _param("serviceName", default="")
    group_name: str = _param("groupName", default="")


@dataclass
class GetAllServiceInfoParam:
    """Parameters for listing services in a namespace."""

    name_space: str = _param("nameSpace", default="")
    group_name: str = _param("groupName", default="")
    page_no: int = _param("pageNo", default=0)
    page_size: int = _param("pageSize", default=0)


@dataclass
class SubscribeParam:
    """Parameters for subscribing to instance changes of a service."""

    service_name: str = _param("serviceName", default="")
    clusters: Optional[list[str]] = _param("clusters", default=None)
    group_name: str = _param("groupName", default="")
    subscribe_callback: Optional[SubscribeCallback] = None


@dataclass
class SelectAllInstancesParam:
    """Parameters for listing every instance of a service."""

    clusters: Optional[list[str]] = _param("clusters", default=None)
    service_name: str = _param("serviceName", default="")
    group_name: str = _param("groupName", default="")


@dataclass
class SelectInstancesParam:
    """Parameters for listing healthy or unhealthy instances of a service."""

    clusters: Optional[list[str]] = _param("clusters", default=None)
    service_name: str = _param("serviceName", default="")
    group_name: str = _param("groupName", default="")
    healthy_only: bool = _param("healthyOnly", default=False)


@dataclass
class SelectOneHealthInstanceParam:
    """Parameters for picking one healthy instance of a service."""

    clusters: Optional[list[str]] = _param("clusters", default=None)
    service_name: str = _param("serviceName", default="")
    group_name: str = _param("groupName", default="")