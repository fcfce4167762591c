"""Deriving the collector container's liveness probe from its health_check extension."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

DEFAULT_HEALTH_CHECK_PATH = "/"
DEFAULT_HEALTH_CHECK_PORT = 13133

_INTEGER = re.compile(r"[+-]?[0-9]+")


class ProbeConfigError(ValueError):
    """The configuration doesn't describe a usable health check."""


class NoServiceError(ProbeConfigError):
    def __init__(self) -> None:
        super().__init__("no service available as part of the configuration")


class NoExtensionsError(ProbeConfigError):
    def __init__(self) -> None:
        super().__init__("no extensions available as part of the configuration")


class ServiceNotAMapError(ProbeConfigError):
    def __init__(self) -> None:
        super().__init__(
            "service property in the configuration doesn't contain valid services"
        )


class ExtensionsNotAMapError(ProbeConfigError):
    def __init__(self) -> None:
        super().__init__(
            "extensions property in the configuration doesn't contain valid extensions"
        )


class NoExtensionHealthCheckError(ProbeConfigError):
    def __init__(self) -> None:
        super().__init__(
            "extensions property in the configuration does not contain "
            "the expected health_check extension"
        )


class NoServiceExtensionsError(ProbeConfigError):
    def __init__(self) -> None:
        super().__init__("service property in the configuration doesn't contain extensions")


class ServiceExtensionsNotSliceError(ProbeConfigError):
    def __init__(self) -> None:
        super().__init__(
            "service extensions property in the configuration does not contain valid extensions"
        )


class NoServiceExtensionHealthCheckError(ProbeConfigError):
    def __init__(self) -> None:
        super().__init__(
            "no healthcheck extension available in service extension configuration"
        )


@dataclass
class HTTPGetAction:
    """An HTTP GET check against the container."""

    path: str
    port: int | str
    host: str = ""


@dataclass
class Probe:
    """A container probe performing an HTTP GET."""

    http_get: HTTPGetAction


def config_to_container_probe(config: Mapping[Any, Any]) -> Probe:
    """Build a liveness probe from the first health_check service extension that is defined."""
    if "service" not in config:
        raise NoServiceError()
    service = config["service"]
    if not isinstance(service, Mapping):
        raise ServiceNotAMapError()

    if "extensions" not in service:
        raise NoServiceExtensionsError()
    service_extensions = service["extensions"]
    if not isinstance(service_extensions, list):
        raise ServiceExtensionsNotSliceError()

    health_checks = [
        ext
        for ext in service_extensions
        if isinstance(ext, str) and ext.startswith("health_check")
    ]
    if not health_checks:
        raise NoServiceExtensionHealthCheckError()

    if "extensions" not in config:
        raise NoExtensionsError()
    extensions = config["extensions"]
    if not isinstance(extensions, Mapping):
        raise ExtensionsNotAMapError()

    # with several health_check extensions, the first one defined wins
    for name in health_checks:
        if name in extensions:
            return _probe_from_extension(extensions[name])

    raise NoExtensionHealthCheckError()


def _probe_from_extension(extension: Any) -> Probe:
    if not isinstance(extension, Mapping):
        return Probe(HTTPGetAction(path=DEFAULT_HEALTH_CHECK_PATH, port=DEFAULT_HEALTH_CHECK_PORT))
    return Probe(HTTPGetAction(path=_path_from(extension), port=_port_from(extension)))


def _path_from(extension: Mapping[Any, Any]) -> str:
    path = extension.get("path")
    return path if isinstance(path, str) else DEFAULT_HEALTH_CHECK_PATH


def _port_from(extension: Mapping[Any, Any]) -> int | str:
    endpoint = extension.get("endpoint")
    if not isinstance(endpoint, str):
        return DEFAULT_HEALTH_CHECK_PORT
    components = endpoint.split(":")
    if len(components) != 2:
        return DEFAULT_HEALTH_CHECK_PORT
    port = components[1]
    # a port that isn't a number is kept as a named port
    return int(port) if _INTEGER.fullmatch(port) else port