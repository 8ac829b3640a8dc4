"""Fixtures for the runnable stache examples.

Each example directory holds an ``app.py`` that builds an Environment,
renders its templates at import time and keeps the results in module
globals. The ``example_app`` fixture runs the sibling ``app.py`` of the
requesting test and exposes those globals as attributes.
"""

import runpy
from pathlib import Path
from types import SimpleNamespace

import pytest


@pytest.fixture
def example_app(request: pytest.FixtureRequest) -> SimpleNamespace:
    """Globals of a fresh run of the example's ``app.py``."""
    app_path = Path(request.path).parent / "app.py"
    namespace = runpy.run_path(str(app_path), run_name=f"stache_example_{app_path.parent.name}")
    return SimpleNamespace(**namespace)
