"""Tests for Environment configuration, caching and the render entry points."""

from __future__ import annotations

import gc
import threading

import pytest

from stache import (
    DictLoader,
    Environment,
    Template,
    TemplateNotFoundError,
    TemplateSyntaxError,
    UnclosedSectionError,
)


class TestConfiguration:
    """Constructor options and their validation."""

    def test_defaults(self):
        env = Environment()
        assert env.loader is None
        assert env.partials == {}
        assert env.template_extension == "mustache"
        assert env.charset == "utf-8"
        assert env.strict_variables is False
        assert env.strict_sections is True
        assert env.strict_partials is False
        assert env.max_depth == 100

    def test_unknown_charset(self):
        with pytest.raises(ValueError, match="Unknown charset"):
            Environment(charset="no-such-charset")

    @pytest.mark.parametrize("max_depth", [0, -1])
    def test_invalid_max_depth(self, max_depth):
        with pytest.raises(ValueError, match="max_depth"):
            Environment(max_depth=max_depth)

    def test_extension_leading_dot_stripped(self):
        assert Environment(template_extension=".html").template_extension == "html"

    def test_repr_hides_internals(self):
        text = repr(Environment())
        assert "strict_variables=False" in text
        assert "_cache" not in text


class TestFilenames:
    """Mapping template and partial names to loader names."""

    def test_template_filename(self, env):
        assert env.template_filename("page") == "page.mustache"
        assert env.template_filename("data.json") == "data.json"

    def test_partial_filename(self, env):
        assert env.partial_filename("page") == "page.mustache"
        assert env.partial_filename("a.b") == "a.b.mustache"

    def test_empty_extension(self):
        env = Environment(template_extension="")
        assert env.template_filename("page") == "page"
        assert env.partial_filename("page") == "page"


class TestGetTemplate:
    """Loading and caching."""

    def test_loads_with_extension(self, env_with_loader):
        template = env_with_loader.get_template("footer")
        assert template.name == "footer"
        assert template.render(year=2024) == "<footer>2024</footer>"

    def test_name_with_extension_used_as_is(self, env_with_loader):
        assert env_with_loader.get_template("data.json").render() == '{"x": 1}'

    def test_cached(self, env_with_loader):
        first = env_with_loader.get_template("page")
        assert env_with_loader.get_template("page") is first
        assert env_with_loader.cache_info() == {"size": 1}

    def test_clear_cache(self, env_with_loader):
        first = env_with_loader.get_template("page")
        env_with_loader.clear_cache()
        assert env_with_loader.cache_info() == {"size": 0}
        assert env_with_loader.get_template("page") is not first

    def test_not_found(self, env_with_loader):
        with pytest.raises(TemplateNotFoundError):
            env_with_loader.get_template("missing")

    def test_no_loader(self, env):
        with pytest.raises(TemplateNotFoundError, match="no loader configured"):
            env.get_template("page")

    def test_syntax_error_names_template(self):
        env = Environment(loader=DictLoader({"bad.mustache": "{{#open}}"}))
        with pytest.raises(UnclosedSectionError) as exc_info:
            env.get_template("bad")
        assert exc_info.value.name == "bad"

    def test_concurrent_loads_share_one_template(self, env_with_loader):
        results: list[Template] = []

        def load():
            results.append(env_with_loader.get_template("page"))

        threads = [threading.Thread(target=load) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len({id(t) for t in results}) == 1


class TestFromString:
    def test_not_cached(self, env):
        assert env.from_string("x") is not env.from_string("x")
        assert env.cache_info() == {"size": 0}

    def test_name(self, env):
        template = env.from_string("x", name="inline")
        assert template.name == "inline"
        assert template.filename is None
        assert template.source == "x"
        assert repr(template) == "<Template inline>"

    def test_unnamed_repr(self, env):
        assert repr(env.from_string("x")) == "<Template (inline)>"

    def test_lenient_sections(self):
        env = Environment(strict_sections=False)
        assert env.from_string("{{#a}}x").render(a=True) == "x"

    def test_strict_sections_checked_at_render(self, env):
        template = env.from_string("x{{/a}}")
        with pytest.raises(TemplateSyntaxError):
            template.render()


class TestRender:
    """Environment.render and Template.render variants."""

    def test_none_template(self, env):
        assert env.render() == ""
        assert env.render(None, {"x": 1}) == ""

    def test_template_object(self, env):
        template = env.from_string("{{x}}")
        assert env.render(template, {"x": 1}) == "1"

    def test_keyword_variables(self, env):
        assert env.render("{{a}}{{b}}", {"a": 1}, b=2) == "12"
        assert env.render("{{a}}", a=3) == "3"

    def test_object_view(self, env):
        class View:
            title = "T"

        assert env.render("{{title}}", View()) == "T"

    def test_too_many_positional_views(self, env):
        template = env.from_string("x")
        with pytest.raises(TypeError, match="at most 1 positional"):
            template.render({}, {})

    def test_template_reusable(self, env):
        template = env.from_string("{{#flag}}+{{/flag}}{{n}}")
        assert template.render(n=1, flag=True) == "+1"
        assert template.render(n=2) == "2"

    def test_concurrent_renders(self, env):
        template = env.from_string("{{#items}}<{{v}}>{{/items}}")
        outputs: dict[int, str] = {}

        def work(i: int):
            outputs[i] = template.render(items=[{"v": i}] * 50)

        threads = [threading.Thread(target=work, args=(i,)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        for i, output in outputs.items():
            assert output == f"<{i}>" * 50


class TestLifetime:
    """Templates hold their environment weakly."""

    def test_template_after_environment_collected(self):
        template = Environment().from_string("x", name="orphan")
        gc.collect()
        with pytest.raises(RuntimeError, match="garbage collected"):
            template.render()
