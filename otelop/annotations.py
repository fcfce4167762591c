"""Annotations for the collector's workload and pods."""

from __future__ import annotations

import hashlib
from collections.abc import Mapping

CONFIG_SHA_ANNOTATION = "opentelemetry-operator-config/sha256"

_PROMETHEUS_DEFAULTS = {
    "prometheus.io/scrape": "true",
    "prometheus.io/port": "8888",
    "prometheus.io/path": "/metrics",
}


def config_sha256(config: str) -> str:
    """Return the hex SHA-256 digest of the configuration text."""
    return hashlib.sha256(config.encode("utf-8")).hexdigest()


def annotations(instance_annotations: Mapping[str, str] | None, config: str) -> dict[str, str]:
    """Return the workload annotations: Prometheus defaults, the instance's own, and the config hash."""
    result = dict(_PROMETHEUS_DEFAULTS)
    if instance_annotations:
        result.update(instance_annotations)
    result[CONFIG_SHA_ANNOTATION] = config_sha256(config)
    return result


def pod_annotations(pod_annotations: Mapping[str, str] | None, config: str) -> dict[str, str]:
    """Return the pod template annotations: the given ones and the config hash."""
    result = dict(pod_annotations or {})
    result[CONFIG_SHA_ANNOTATION] = config_sha256(config)
    return result