from __future__ import annotations

import json
import os
import platform
import sys
from pathlib import Path

import pytest
from jinja2 import DictLoader as Jinja2DictLoader
from jinja2 import Environment as Jinja2Environment

from stache import DictLoader as StacheDictLoader
from stache import Environment as StacheEnvironment

try:
    import importlib.metadata as importlib_metadata
except ModuleNotFoundError:  # pragma: no cover
    import importlib_metadata  # type: ignore


BASE_DIR = Path(__file__).resolve().parent
BENCHMARK_OUTPUT_DIR = BASE_DIR.parent / ".benchmarks"
BENCHMARK_OUTPUT_DIR.mkdir(exist_ok=True)

# Equivalent templates for both engines, keyed by loader name.
STACHE_TEMPLATES = {
    "minimal.mustache": "Hello, {{name}}!",
    "small.mustache": (
        "<h1>{{title}}</h1>\n"
        "<ul>{{#items}}<li>{{label}}</li>{{/items}}</ul>\n"
        "{{^items}}<p>No items</p>{{/items}}"
    ),
    "row.mustache": "<tr><td>{{id}}</td><td>{{name}}</td><td>{{email}}</td></tr>\n",
    "table.mustache": "<table>\n{{#rows}}{{>row}}{{/rows}}</table>",
    "nested.mustache": (
        "{{%DOT-NOTATION}}\n"
        "{{#users}}<div>{{profile.name}} ({{profile.address.city}})"
        "{{#tags}}<span>{{label}}</span>{{/tags}}</div>\n{{/users}}"
    ),
}

JINJA2_TEMPLATES = {
    "minimal.html": "Hello, {{ name }}!",
    "small.html": (
        "<h1>{{ title }}</h1>\n"
        "<ul>{% for item in items %}<li>{{ item.label }}</li>{% endfor %}</ul>\n"
        "{% if not items %}<p>No items</p>{% endif %}"
    ),
    "row.html": "<tr><td>{{ row.id }}</td><td>{{ row.name }}</td><td>{{ row.email }}</td></tr>\n",
    "table.html": "<table>\n{% for row in rows %}{% include 'row.html' %}{% endfor %}</table>",
    "nested.html": (
        "{% for user in users %}<div>{{ user.profile.name }} ({{ user.profile.address.city }})"
        "{% for tag in user.tags %}<span>{{ tag.label }}</span>{% endfor %}</div>\n{% endfor %}"
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
        "stache": _version("stache"),
        "jinja2": _version("jinja2"),
    }


@pytest.fixture(scope="session", autouse=True)
def environment_metadata() -> dict[str, object]:
    """Write environment metadata to .benchmarks for ingestion."""
    metadata = collect_environment_metadata()
    (BENCHMARK_OUTPUT_DIR / "environment.json").write_text(json.dumps(metadata, indent=2))
    return metadata


@pytest.fixture(scope="session")
def stache_env() -> StacheEnvironment:
    return StacheEnvironment(loader=StacheDictLoader(STACHE_TEMPLATES))


@pytest.fixture(scope="session")
def jinja2_env() -> Jinja2Environment:
    return Jinja2Environment(
        loader=Jinja2DictLoader(JINJA2_TEMPLATES),
        autoescape=True,
        keep_trailing_newline=True,
    )


@pytest.fixture(scope="session")
def small_context() -> dict[str, object]:
    return {"title": "Benchmark", "items": [{"label": f"item {i}"} for i in range(5)]}


@pytest.fixture(scope="session")
def table_context() -> dict[str, object]:
    rows = [{"id": i, "name": f"user{i}", "email": f"user{i}@example.com"} for i in range(1000)]
    return {"rows": rows}


@pytest.fixture(scope="session")
def nested_context() -> dict[str, object]:
    users = [
        {
            "profile": {"name": f"User <{i}>", "address": {"city": "Lisbon"}},
            "tags": [{"label": f"tag{j}"} for j in range(5)],
        }
        for i in range(100)
    ]
    return {"users": users}
