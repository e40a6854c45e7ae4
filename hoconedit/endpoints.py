"""Network endpoints advertised by a Corda node configuration.

Reading goes through a full HOCON parser (pyhocon) rather than the line
tokenizer, since values here are looked up by dotted path and may come from
any HOCON construct.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from pathlib import Path
from typing import Any, NotRequired, Optional, TypedDict

from pydantic import BaseModel, ValidationError, field_validator
from pyhocon import ConfigFactory, ConfigTree

from hoconedit.logger import Logger
from hoconedit.utils import resolve_config

IP_ADDRESS_PATTERN = re.compile(
    r"^((0|1\d?\d?|2[0-4]?\d?|25[0-5]?|[3-9]\d?)\.){3}(0|1\d?\d?|2[0-4]?\d?|25[0-5]?|[3-9]\d?)$"
)
HOST_NAME_PATTERN = re.compile(
    r"^(?=.{1,255}$)[0-9A-Za-z](?:(?:[0-9A-Za-z]|-){0,61}[0-9A-Za-z])?"
    r"(?:\.[0-9A-Za-z](?:(?:[0-9A-Za-z]|-){0,61}[0-9A-Za-z])?)*\.?$"
)


class Protocol(str, Enum):
    TCP = "TCP"  # unspecified TCP
    P2P = "P2P"
    RPC = "RPC"
    SSH = "SSH"
    HTTP = "HTTP"
    HTTPS = "HTTPS"


class NodeEndpointKind(str, Enum):
    RPC = "RPC"
    P2P = "P2P"
    SSH = "SSH"


class EndPoint(BaseModel):
    """Connection details for one service exposed by a node."""

    ip_or_host_name: str
    protocol: Protocol = Protocol.TCP
    port: int | None = None
    internal_ip: str | None = None
    platform_id: str | None = None

    @field_validator("ip_or_host_name")
    @classmethod
    def _check_host(cls, value: str) -> str:
        if not (IP_ADDRESS_PATTERN.match(value) or HOST_NAME_PATTERN.match(value)):
            raise ValueError(f"'{value}' is neither an IPv4 address nor a host name")
        return value

    @field_validator("port")
    @classmethod
    def _check_port(cls, value: int | None) -> int | None:
        if value is not None and not 0 <= value <= 65535:
            raise ValueError(f"port {value} is out of range")
        return value

    @field_validator("internal_ip")
    @classmethod
    def _check_internal_ip(cls, value: str | None) -> str | None:
        if value is not None and value != "localhost" and not IP_ADDRESS_PATTERN.match(value):
            raise ValueError(f"internal ip '{value}' must be 'localhost' or an IPv4 address")
        return value

    @field_validator("platform_id")
    @classmethod
    def _check_platform_id(cls, value: str | None) -> str | None:
        if value is not None and len(value) > 255:
            raise ValueError("platform id is longer than 255 characters")
        return value

    def has_port(self) -> bool:
        return self.port is not None

    def has_internal_ip(self) -> bool:
        return self.internal_ip is not None

    def has_platform_id(self) -> bool:
        return self.platform_id is not None

    def is_ip_address(self) -> bool:
        return IP_ADDRESS_PATTERN.match(self.ip_or_host_name) is not None

    def ip_address(self) -> str:
        if not self.is_ip_address():
            raise ValueError(f"{self.ip_or_host_name} is not a valid IP address")
        return self.ip_or_host_name


def split_address(address: Any) -> tuple[str, int] | None:
    """Split ``"host:port"``; ``None`` when there is no usable port."""
    if address is None:
        return None
    host, separator, port = str(address).partition(":")
    port = port.strip()
    if not separator or not port.isdigit():
        return None
    return host.strip(), int(port)


class ManagerConfig(TypedDict):
    enable_logger: NotRequired[bool]
    log_level: NotRequired[int]


class ManagerConfigRequired(TypedDict):
    enable_logger: bool
    log_level: int


DEFAULT_CONFIG: ManagerConfigRequired = {
    "enable_logger": True,
    "log_level": logging.INFO,
}


class NodeConfigManager:
    def __init__(self, node_config: str | Path | ConfigTree, config: Optional[ManagerConfig] = None):
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.logger = Logger.for_component("hoconedit.endpoints", self.config)
        if isinstance(node_config, ConfigTree):
            self.node_config = node_config
        else:
            self.node_config = ConfigFactory.parse_file(str(node_config))

    @classmethod
    def from_string(cls, text: str, config: Optional[ManagerConfig] = None) -> "NodeConfigManager":
        return cls(ConfigFactory.parse_string(text), config=config)

    def extract_endpoints(self) -> dict[NodeEndpointKind, EndPoint]:
        candidates = {
            NodeEndpointKind.RPC: self._rpc_endpoint(),
            NodeEndpointKind.P2P: self._p2p_endpoint(),
            NodeEndpointKind.SSH: self._ssh_endpoint(),
        }
        return {kind: endpoint for kind, endpoint in candidates.items() if endpoint is not None}

    def _lookup(self, path: str) -> Any:
        return self.node_config.get(path, None)

    def _rpc_endpoint(self) -> EndPoint | None:
        # the p2p address is taken to be the public address of the node
        p2p = split_address(self._lookup("p2pAddress"))
        rpc = split_address(self._lookup("rpcSettings.address"))
        if p2p is None or rpc is None:
            return None
        return self._build(ip_or_host_name=p2p[0], internal_ip=rpc[0], port=rpc[1], protocol=Protocol.RPC)

    def _p2p_endpoint(self) -> EndPoint | None:
        p2p = split_address(self._lookup("p2pAddress"))
        if p2p is None:
            return None
        return self._build(ip_or_host_name=p2p[0], internal_ip="localhost", port=p2p[1], protocol=Protocol.P2P)

    def _ssh_endpoint(self) -> EndPoint | None:
        p2p = split_address(self._lookup("p2pAddress"))
        ssh_port = self._lookup("sshd.port")
        if p2p is None or ssh_port is None or not str(ssh_port).strip().isdigit():
            return None
        # the internal address cannot be derived from node.conf
        return self._build(
            ip_or_host_name=p2p[0], internal_ip="localhost", port=int(str(ssh_port).strip()), protocol=Protocol.SSH
        )

    def _build(self, **fields: Any) -> EndPoint | None:
        try:
            return EndPoint(**fields)
        except ValidationError as exc:
            self.logger.warning(f"Ignoring {fields['protocol'].value} endpoint: {exc}")
            return None


__all__ = [
    "EndPoint",
    "Protocol",
    "NodeEndpointKind",
    "NodeConfigManager",
    "ManagerConfig",
    "split_address",
]
