[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "otelop"
version = "0.1.0"
description = "Derive receiver service ports, liveness probes and annotations from OpenTelemetry Collector configurations"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["opentelemetry", "collector", "kubernetes", "receivers", "service-ports", "probe"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["otelop"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]
