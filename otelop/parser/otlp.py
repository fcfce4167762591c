"""Parser for OTLP receivers, exposing gRPC and HTTP ports."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from otelop.parser.receiver import (
    Protocol,
    ReceiverParser,
    ServicePort,
    port_name,
    register,
    single_port_from_config_endpoint,
)

PARSER_NAME_OTLP = "__otlp"

DEFAULT_OTLP_GRPC_PORT = 4317
DEFAULT_OTLP_HTTP_LEGACY_PORT = 55681
DEFAULT_OTLP_HTTP_PORT = 4318

_GRPC = "grpc"
_HTTP = "http"


class OTLPReceiverParser(ReceiverParser):
    """Parses the protocols section of an OTLP receiver's configuration."""

    def __init__(self, name: str, protocols: Mapping[Any, Any]) -> None:
        self.name = name
        self.config = protocols

    def _default_ports(self, protocol: str) -> list[ServicePort]:
        if protocol == _GRPC:
            return [
                ServicePort(
                    name=port_name(f"{self.name}-grpc", DEFAULT_OTLP_GRPC_PORT),
                    port=DEFAULT_OTLP_GRPC_PORT,
                    target_port=DEFAULT_OTLP_GRPC_PORT,
                    app_protocol=_GRPC,
                )
            ]
        return [
            ServicePort(
                name=port_name(f"{self.name}-http", DEFAULT_OTLP_HTTP_PORT),
                port=DEFAULT_OTLP_HTTP_PORT,
                target_port=DEFAULT_OTLP_HTTP_PORT,
                app_protocol=_HTTP,
            ),
            ServicePort(
                name=port_name(f"{self.name}-http-legacy", DEFAULT_OTLP_HTTP_LEGACY_PORT),
                port=DEFAULT_OTLP_HTTP_LEGACY_PORT,
                # the legacy port targets the official one
                target_port=DEFAULT_OTLP_HTTP_PORT,
                app_protocol=_HTTP,
            ),
        ]

    def ports(self) -> list[ServicePort]:
        """Return the service ports for every configured protocol."""
        ports: list[ServicePort] = []
        for protocol in (_GRPC, _HTTP):
            if protocol not in self.config:
                continue

            settings = self.config[protocol]
            service_port: ServicePort | None = None
            if isinstance(settings, Mapping):
                service_port = single_port_from_config_endpoint(
                    f"{self.name}-{protocol}", settings
                )

            if service_port is None:
                ports.extend(self._default_ports(protocol))
            else:
                service_port.protocol = Protocol.TCP
                service_port.app_protocol = protocol
                ports.append(service_port)
        return ports

    def parser_name(self) -> str:
        return PARSER_NAME_OTLP


def new_otlp_receiver_parser(name: str, config: Mapping[Any, Any]) -> ReceiverParser:
    """Build a parser for OTLP receivers."""
    protocols = config.get("protocols")
    if isinstance(protocols, Mapping):
        return OTLPReceiverParser(name, protocols)
    return OTLPReceiverParser(name, {})


register("otlp", new_otlp_receiver_parser)