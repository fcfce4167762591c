import pytest

from otelop.adapters.config_from import config_from_string
from otelop.adapters.config_to_probe import (
    ExtensionsNotAMapError,
    NoExtensionHealthCheckError,
    NoExtensionsError,
    NoServiceError,
    NoServiceExtensionHealthCheckError,
    NoServiceExtensionsError,
    ProbeConfigError,
    ServiceExtensionsNotSliceError,
    ServiceNotAMapError,
    config_to_container_probe,
)


@pytest.mark.parametrize(
    ("config_str", "expected_port", "expected_path"),
    [
        pytest.param(
            "extensions:\n  health_check:\nservice:\n  extensions: [health_check]",
            13133, "/", id="SimpleHappyPath",
        ),
        pytest.param(
            "extensions:\n  health_check:\n    endpoint: localhost:1234\n"
            "    path: /checkit\nservice:\n  extensions: [health_check]",
            1234, "/checkit", id="CustomEndpointAndPath",
        ),
        pytest.param(
            "extensions:\n  health_check:\n    endpoint: localhost:1234\n"
            "service:\n  extensions: [health_check]",
            1234, "/", id="CustomEndpointAndDefaultPath",
        ),
        pytest.param(
            "extensions:\n  health_check:\n    endpoint: :1234\n"
            "service:\n  extensions: [health_check]",
            1234, "/", id="CustomEndpointWithJustPortAndDefaultPath",
        ),
        pytest.param(
            "extensions:\n  health_check:\n    path: /checkit\n"
            "service:\n  extensions: [health_check]",
            13133, "/checkit", id="DefaultEndpointAndCustomPath",
        ),
        pytest.param(
            'extensions:\n  health_check:\n    endpoint: 0:0:0"\n'
            "service:\n  extensions: [health_check]",
            13133, "/", id="DefaultEndpointForUnexpectedEndpoint",
        ),
        pytest.param(
            'extensions:\n  health_check:\n    endpoint:\n      this: should-not-be-a-map"\n'
            "service:\n  extensions: [health_check]",
            13133, "/", id="DefaultEndpointForUnparseablendpoint",
        ),
        pytest.param(
            "extensions:\n  health_check:\nservice:\n  extensions: [health_check/1, health_check]",
            13133, "/", id="WillUseSecondServiceExtension",
        ),
    ],
)
def test_creates_probe(config_str, expected_port, expected_path):
    config = config_from_string(config_str)
    assert config

    probe = config_to_container_probe(config)
    assert probe.http_get.path == expected_path
    assert probe.http_get.port == expected_port
    assert probe.http_get.host == ""


@pytest.mark.parametrize(
    ("config_str", "error"),
    [
        pytest.param(
            "extensions:\n  pprof:\nservice:\n  extensions: [health_check]",
            NoExtensionHealthCheckError, id="NoHealthCheckExtension",
        ),
        pytest.param(
            "extensions: [hi]\nservice:\n  extensions: [health_check]",
            ExtensionsNotAMapError, id="BadlyFormattedExtensions",
        ),
        pytest.param(
            "service:\n  extensions: [health_check]",
            NoExtensionsError, id="NoExtensions",
        ),
        pytest.param(
            "service:\n  extensions: [pprof]",
            NoServiceExtensionHealthCheckError, id="NoHealthCheckInServiceExtensions",
        ),
        pytest.param(
            "service:\n  extensions:\n    this: should-not-be-a-map",
            ServiceExtensionsNotSliceError, id="BadlyFormattedServiceExtensions",
        ),
        pytest.param(
            "service:\n  pipelines:\n    traces:\n      receivers: [otlp]",
            NoServiceExtensionsError, id="NoServiceExtensions",
        ),
        pytest.param(
            "extensions:\n  health_check:\nservice: [hi]",
            ServiceNotAMapError, id="BadlyFormattedService",
        ),
        pytest.param(
            "extensions:\n  health_check:",
            NoServiceError, id="NoService",
        ),
    ],
)
def test_errors(config_str, error):
    config = config_from_string(config_str)
    assert config
    with pytest.raises(error):
        config_to_container_probe(config)


def test_errors_share_a_base():
    with pytest.raises(ProbeConfigError):
        config_to_container_probe({})


def test_non_numeric_port_is_kept_as_name():
    config = config_from_string(
        "extensions:\n  health_check:\n    endpoint: localhost:health\n"
        "service:\n  extensions: [health_check]"
    )
    assert config_to_container_probe(config).http_get.port == "health"