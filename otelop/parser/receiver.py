"""Receiver parsers: turn a collector receiver's configuration into service ports."""

from __future__ import annotations

import enum
import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

# DNS_LABEL constraints for port names.
_DNS_LABEL = re.compile(r"(([A-Za-z0-9][-A-Za-z0-9_.]*)?[A-Za-z0-9])?")
_PORT_IN_ENDPOINT = re.compile(r":[0-9]+")
_MAX_INT32 = 2**31 - 1
_MAX_PORT_NAME_LENGTH = 63

_ENDPOINT_KEY = "endpoint"
_LISTEN_ADDRESS_KEY = "listen_address"

PARSER_NAME_GENERIC = "__generic"


class Protocol(str, enum.Enum):
    """Transport protocol of a service port."""

    TCP = "TCP"
    UDP = "UDP"
    SCTP = "SCTP"


@dataclass
class ServicePort:
    """A port to be exposed by the collector's service."""

    name: str
    port: int
    protocol: Protocol | None = None
    app_protocol: str | None = None
    target_port: int | str | None = None


class ReceiverParser(ABC):
    """Interface implemented by every receiver parser."""

    @abstractmethod
    def ports(self) -> list[ServicePort]:
        """Return the service ports derived from the receiver's configuration."""

    @abstractmethod
    def parser_name(self) -> str:
        """Return the name of this parser."""


Builder = Callable[[str, Mapping[Any, Any]], ReceiverParser]

_registry: dict[str, Builder] = {}


class GenericReceiver(ReceiverParser):
    """Parser for receivers exposing a single endpoint, with an optional default port."""

    def __init__(
        self,
        name: str,
        config: Mapping[Any, Any],
        default_port: int = 0,
        default_protocol: Protocol | None = None,
        default_app_protocol: str | None = None,
        parser_name: str = PARSER_NAME_GENERIC,
    ) -> None:
        self.name = name
        self.config = config
        self.default_port = default_port
        self.default_protocol = default_protocol
        self.default_app_protocol = default_app_protocol
        self._parser_name = parser_name

    def ports(self) -> list[ServicePort]:
        """Return the endpoint's port, or the default port if there is one."""
        port = single_port_from_config_endpoint(self.name, self.config)
        if port is not None:
            port.protocol = self.default_protocol
            port.app_protocol = self.default_app_protocol
            return [port]

        if self.default_port > 0:
            return [
                ServicePort(
                    name=port_name(self.name, self.default_port),
                    port=self.default_port,
                    protocol=self.default_protocol,
                    app_protocol=self.default_app_protocol,
                )
            ]

        return []

    def parser_name(self) -> str:
        return self._parser_name


def new_generic_receiver_parser(name: str, config: Mapping[Any, Any]) -> ReceiverParser:
    """Build a parser for receivers without a dedicated parser."""
    return GenericReceiver(name, config)


def builder_for(name: str) -> Builder:
    """Return the builder registered for the receiver's type, or the generic one."""
    return _registry.get(receiver_type(name), new_generic_receiver_parser)


def parser_for(name: str, config: Mapping[Any, Any]) -> ReceiverParser:
    """Return a parser for the given receiver name and configuration."""
    return builder_for(name)(name, config)


def register(name: str, builder: Builder) -> None:
    """Add a parser builder for receivers of the given type."""
    _registry[name] = builder


def is_registered(name: str) -> bool:
    """Tell whether a parser is registered under the given name."""
    return name in _registry


def _address_from_config(name: str, key: str, config: Mapping[Any, Any]) -> Any:
    if key not in config:
        logger.debug("%s receiver doesn't have an %s", name, key)
        return None
    return config[key]


def _nested_section(name: str, config: Mapping[Any, Any], section: str) -> Mapping[Any, Any] | None:
    value = config.get(section)
    if value is None:
        return None
    if not isinstance(value, Mapping):
        logger.info("%s receiver's %s section isn't a map", name, section)
        return {}
    return value


def single_port_from_config_endpoint(name: str, config: Mapping[Any, Any]) -> ServicePort | None:
    """Derive a single service port from the receiver's endpoint, if it has a usable one."""
    endpoint: Any = None
    if name == "syslog":
        # syslog keeps its address one level down, in the udp or tcp section
        for section in ("udp", "tcp"):
            nested = _nested_section(name, config, section)
            if nested is not None:
                endpoint = _address_from_config(name, _LISTEN_ADDRESS_KEY, nested)
                break
    elif name in ("tcplog", "udplog"):
        endpoint = _address_from_config(name, _LISTEN_ADDRESS_KEY, config)
    elif name == "kubeletstats":
        # a scraper: nothing to expose
        return None
    else:
        endpoint = _address_from_config(name, _ENDPOINT_KEY, config)

    if not isinstance(endpoint, str):
        logger.info("receiver's endpoint isn't a string")
        return None

    try:
        port = port_from_endpoint(endpoint)
    except ValueError:
        logger.info("couldn't parse the endpoint's port: %s", endpoint)
        return None

    return ServicePort(name=port_name(name, port), port=port)


def port_name(receiver_name: str, port: int) -> str:
    """Return a DNS_LABEL-safe port name for the receiver, or 'port-<n>' as fallback."""
    if len(receiver_name.encode("utf-8")) > _MAX_PORT_NAME_LENGTH:
        return f"port-{port}"

    candidate = receiver_name.replace("/", "-").replace("_", "-")
    if not _DNS_LABEL.fullmatch(candidate):
        return f"port-{port}"

    return candidate


def port_from_endpoint(endpoint: str) -> int:
    """Extract the port from an endpoint such as 'host:1234'; raise ValueError if there is none."""
    port = 0
    match = _PORT_IN_ENDPOINT.search(endpoint)
    if match:
        port = int(match.group()[1:])
        if port > _MAX_INT32:
            raise ValueError(f"port {port} in endpoint {endpoint!r} is out of range")

    if port == 0:
        raise ValueError("Port should not be empty")

    return port


def receiver_type(name: str) -> str:
    """Return the receiver type, i.e. the part of its name before any '/'."""
    return name.split("/", 1)[0]