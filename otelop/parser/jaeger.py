"""Parser for Jaeger receivers, which may expose one port per protocol."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from otelop.parser.receiver import (
    Protocol,
    ReceiverParser,
    ServicePort,
    port_name,
    register,
    single_port_from_config_endpoint,
)

PARSER_NAME_JAEGER = "__jaeger"

DEFAULT_GRPC_PORT = 14250
DEFAULT_THRIFT_HTTP_PORT = 14268
DEFAULT_THRIFT_COMPACT_PORT = 6831
DEFAULT_THRIFT_BINARY_PORT = 6832


@dataclass(frozen=True)
class _JaegerProtocol:
    name: str
    default_port: int
    transport: Protocol
    app_protocol: str | None = None


_PROTOCOLS = (
    _JaegerProtocol("grpc", DEFAULT_GRPC_PORT, Protocol.TCP, "grpc"),
    _JaegerProtocol("thrift_http", DEFAULT_THRIFT_HTTP_PORT, Protocol.TCP, "http"),
    _JaegerProtocol("thrift_compact", DEFAULT_THRIFT_COMPACT_PORT, Protocol.UDP),
    _JaegerProtocol("thrift_binary", DEFAULT_THRIFT_BINARY_PORT, Protocol.UDP),
)


class JaegerReceiverParser(ReceiverParser):
    """Parses the protocols section of a Jaeger receiver's configuration."""

    def __init__(self, name: str, protocols: Mapping[Any, Any]) -> None:
        self.name = name
        self.config = protocols

    def ports(self) -> list[ServicePort]:
        """Return one service port for every protocol that is configured."""
        ports: list[ServicePort] = []
        for protocol in _PROTOCOLS:
            if protocol.name not in self.config:
                continue

            name_with_protocol = f"{self.name}-{protocol.name}"
            settings = self.config[protocol.name]
            service_port: ServicePort | None = None
            if isinstance(settings, Mapping):
                service_port = single_port_from_config_endpoint(name_with_protocol, settings)

            if service_port is None:
                service_port = ServicePort(
                    name=port_name(name_with_protocol, protocol.default_port),
                    port=protocol.default_port,
                )

            service_port.protocol = protocol.transport
            if protocol.app_protocol:
                service_port.app_protocol = protocol.app_protocol

            ports.append(service_port)
        return ports

    def parser_name(self) -> str:
        return PARSER_NAME_JAEGER


def new_jaeger_receiver_parser(name: str, config: Mapping[Any, Any]) -> ReceiverParser:
    """Build a parser for Jaeger receivers."""
    protocols = config.get("protocols")
    if isinstance(protocols, Mapping):
        return JaegerReceiverParser(name, protocols)
    return JaegerReceiverParser(name, {})


register("jaeger", new_jaeger_receiver_parser)