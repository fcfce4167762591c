"""Receiver parsers that find the service ports of collector receivers: generic, Jaeger and OTLP."""