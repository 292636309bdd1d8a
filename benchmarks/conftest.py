from __future__ import annotations

import importlib.metadata as importlib_metadata
import json
import os
import platform
import sys
from pathlib import Path

import pytest
from jinja2 import DictLoader
from jinja2 import Environment as Jinja2Environment

from lightrender import RenderConfig, Runtime

BASE_DIR = Path(__file__).resolve().parent
BENCHMARK_OUTPUT_DIR = BASE_DIR.parent / ".benchmarks"
BENCHMARK_OUTPUT_DIR.mkdir(exist_ok=True)

# Equivalent markup for the jinja2 baseline
JINJA2_TEMPLATES = {
    "minimal.html": "<!DOCTYPE html><html><body><h1>{{ name }}</h1></body></html>",
    "table.html": (
        "<!DOCTYPE html><html><head><title>{{ title }}</title></head><body><table>"
        "{% for row in rows %}<tr>{% for cell in row %}<td>{{ cell }}</td>{% endfor %}</tr>"
        "{% endfor %}</table></body></html>"
    ),
}


def _version(dist: str) -> str:
    try:
        return importlib_metadata.version(dist)
    except importlib_metadata.PackageNotFoundError:
        return "unknown"


def collect_environment_metadata() -> dict[str, object]:
    """Capture reproducibility metadata for each benchmark run."""
    return {
        "python": {
            "version": platform.python_version(),
            "implementation": platform.python_implementation(),
            "executable": sys.executable,
        },
        "os": {
            "system": platform.system(),
            "release": platform.release(),
            "machine": platform.machine(),
        },
        "cpu": {
            "processor": platform.processor(),
            "count": os.cpu_count(),
        },
        "lightrender": _version("lightrender"),
        "jinja2": _version("jinja2"),
    }


@pytest.fixture(scope="session", autouse=True)
def environment_metadata() -> dict[str, object]:
    """Write environment metadata to .benchmarks for ingestion."""
    metadata = collect_environment_metadata()
    (BENCHMARK_OUTPUT_DIR / "environment.json").write_text(json.dumps(metadata, indent=2))
    return metadata


@pytest.fixture(scope="session")
def dev_runtime() -> Runtime:
    return Runtime(RenderConfig())


@pytest.fixture(scope="session")
def prod_runtime() -> Runtime:
    return Runtime(RenderConfig(mode="prod"))


@pytest.fixture(scope="session")
def jinja2_env() -> Jinja2Environment:
    return Jinja2Environment(loader=DictLoader(JINJA2_TEMPLATES), autoescape=True)


@pytest.fixture(scope="session")
def table_rows() -> list[list[str]]:
    return [[f"r{row}c{col} <&>" for col in range(10)] for row in range(100)]
