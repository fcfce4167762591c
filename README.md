# otelop

Read an OpenTelemetry Collector configuration and work out pieces of the
Kubernetes objects that depend on it:

- the service ports that a receiver listens on,
- a liveness probe built from the `health_check` extension,
- the annotations for the collector and its pods, including a SHA-256 of the
  configuration so that a changed configuration rolls the pods.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Reading the configuration

```python
from otelop.adapters.config_from import config_from_string

config = config_from_string("receivers:\n  zipkin:\n")
```

`config_from_string` returns a dict. An empty document gives `{}`; text that
is not valid YAML, or whose top level is not a mapping, raises
`InvalidYAMLError` (a `ValueError`).

## Service ports of a receiver

Each receiver is handled by a parser. `parser_for(name, config)` picks the
parser registered for the receiver's type (the part of its name before any
`/`) and falls back to the generic parser. The Jaeger and OTLP parsers
register themselves when their modules are imported:

```python
import otelop.parser.jaeger  # registers "jaeger"
import otelop.parser.otlp    # registers "otlp"
from otelop.adapters.config_from import config_from_string
from otelop.parser.receiver import parser_for

config = config_from_string("""
receivers:
  otlp:
    protocols:
      grpc:
      http:
  examplereceiver/settings:
    endpoint: 0.0.0.0:12346
""")

for name, settings in config["receivers"].items():
    parser = parser_for(name, settings or {})
    for port in parser.ports():
        print(port.name, port.port, port.protocol, port.app_protocol)
```

This prints `otlp-grpc 4317`, `otlp-http 4318` and `otlp-http-legacy 55681`
for the OTLP receiver, and `examplereceiver-settings 12346` for the other.

Each port is a `ServicePort` with `name`, `port`, `protocol` (a `Protocol`
member or `None`), `app_protocol` and `target_port`.

- The generic parser reads the port from the receiver's `endpoint`
  (`listen_address` for `tcplog` and `udplog`, and inside the `udp` or `tcp`
  section for `syslog`). `kubeletstats` is a scraper and gets no port. A
  receiver without a usable endpoint gets no port unless the parser has a
  default port.
- The Jaeger parser gives one port per configured protocol: `grpc` (14250,
  TCP), `thrift_http` (14268, TCP), `thrift_compact` (6831, UDP) and
  `thrift_binary` (6832, UDP), unless an `endpoint` overrides it.
- The OTLP parser gives `grpc` (4317) and `http` (4318 plus the legacy 55681,
  which targets 4318), unless an `endpoint` overrides them.

Port names follow the receiver name with `/` and `_` turned into `-`; a name
longer than 63 characters or not a valid DNS label becomes `port-<number>`
(`port_name`). `port_from_endpoint` extracts the port from strings such as
`0.0.0.0:1234` or `http://localhost:1234/path` and raises `ValueError` when
there is none. `receiver_type("otlp/2")` returns `"otlp"`.

### Custom receiver parsers

```python
from otelop.parser.receiver import GenericReceiver, is_registered, register

def new_my_receiver_parser(name, config):
    return GenericReceiver(name, config, default_port=9999,
                           parser_name="__myreceiver")

register("myreceiver", new_my_receiver_parser)
assert is_registered("myreceiver")
```

A parser is any subclass of `ReceiverParser` with `ports()` and
`parser_name()`. `builder_for(name)` returns the builder that `parser_for`
would use.

## Liveness probe

```python
from otelop.adapters.config_from import config_from_string
from otelop.adapters.config_to_probe import config_to_container_probe

probe = config_to_container_probe(config_from_string("""
extensions:
  health_check:
    endpoint: localhost:1234
    path: /checkit
service:
  extensions: [health_check]
"""))
print(probe.http_get.path, probe.http_get.port)   # /checkit 1234
```

Without an `endpoint` or `path` the probe uses port 13133 and path `/`. When
several `health_check` extensions are listed under `service.extensions`, the
first one that is defined under `extensions` is used. Each way the
configuration can lack a usable health check raises a subclass of
`ProbeConfigError`: `NoServiceError`, `ServiceNotAMapError`,
`NoServiceExtensionsError`, `ServiceExtensionsNotSliceError`,
`NoServiceExtensionHealthCheckError`, `NoExtensionsError`,
`ExtensionsNotAMapError` or `NoExtensionHealthCheckError`.

## Annotations

```python
from otelop.annotations import annotations, config_sha256, pod_annotations

annotations({"myapp": "mycomponent"}, "receivers: {}")
pod_annotations({"pod_annotation": "value"}, "receivers: {}")
config_sha256("test")
```

`annotations` starts from the Prometheus scrape annotations
(`prometheus.io/scrape: "true"`, `prometheus.io/port: "8888"`,
`prometheus.io/path: "/metrics"`), which the given annotations may override.
Both functions always set `opentelemetry-operator-config/sha256` to the
digest of the configuration text, and neither changes the mapping passed in.

## What this package does not do

- It has no function that walks a whole `receivers` section into a list of
  service ports; call `parser_for` for each receiver as shown above.
- Only Jaeger and OTLP receivers have parsers with default ports. Every other
  receiver type, such as `zipkin` or `statsd`, goes to the generic parser and
  gets a port only from its configured endpoint, unless you register a parser
  for it.
- It builds no Kubernetes objects and talks to no cluster; it only computes
  the values described here.