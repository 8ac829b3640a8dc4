"""Pytest configuration and fixtures for stache tests."""

import pytest

from stache import DictLoader, Environment
from stache.environment import terminal


@pytest.fixture(autouse=True)
def plain_terminal(monkeypatch):
    """Render diagnostics without ANSI codes so messages compare as text."""
    monkeypatch.setattr(terminal, "_USE_COLORS", False)


@pytest.fixture
def env():
    """Create a basic stache Environment."""
    return Environment()


@pytest.fixture
def env_strict():
    """Create an Environment that raises for every error condition."""
    return Environment(strict_variables=True, strict_sections=True, strict_partials=True)


@pytest.fixture
def env_lenient():
    """Create an Environment that degrades every error condition to ""."""
    return Environment(strict_variables=False, strict_sections=False, strict_partials=False)


@pytest.fixture
def env_with_loader():
    """Create a stache Environment with DictLoader and test templates."""
    loader = DictLoader(
        {
            "page.mustache": "<h1>{{title}}</h1>{{>body}}{{>footer}}",
            "body.mustache": "{{#items}}<p>{{name}}</p>{{/items}}",
            "footer.mustache": "<footer>{{year}}</footer>",
            "recursive.mustache": "[{{#child}}{{>recursive}}{{/child}}]",
            "dotted.mustache": "{{%DOT-NOTATION}}\n{{a.b}}",
            "data.json": '{"x": 1}',
        }
    )
    return Environment(loader=loader)


def assert_contains(template_result: str, *expected_parts: str) -> None:
    """Assert template result contains all expected parts.

    Args:
        template_result: The actual template rendering result.
        expected_parts: Strings that should all be present in the result.
    """
    for part in expected_parts:
        assert part in template_result, (
            f"Template output missing expected content:\n"
            f"  Missing: {part!r}\n"
            f"  Actual: {template_result!r}"
        )
