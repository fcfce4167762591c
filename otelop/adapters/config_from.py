"""Reading the collector configuration from its YAML text."""

from __future__ import annotations

from typing import Any

import yaml


class InvalidYAMLError(ValueError):
    """The collector configuration couldn't be parsed."""

    def __init__(self) -> None:
        super().__init__("couldn't parse the opentelemetry-collector configuration")


def config_from_string(config_str: str) -> dict[Any, Any]:
    """Parse the configuration text into a mapping.

    An empty document gives an empty mapping; anything that isn't valid YAML
    or isn't a mapping raises InvalidYAMLError.
    """
    try:
        loaded = yaml.safe_load(config_str)
    except yaml.YAMLError as exc:
        raise InvalidYAMLError() from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise InvalidYAMLError()
    return loaded