"""Receiver service ports, liveness probes and annotations derived from OpenTelemetry Collector configurations."""

__version__ = "0.1.0"