"""Tests for template loaders."""

from __future__ import annotations

import pytest

from stache import (
    ChoiceLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    FunctionLoader,
    Loader,
    TemplateNotFoundError,
)


@pytest.fixture
def template_dirs(tmp_path):
    custom = tmp_path / "custom"
    default = tmp_path / "default"
    (custom / "partials").mkdir(parents=True)
    default.mkdir()
    (custom / "nav.mustache").write_text("<nav>custom</nav>", encoding="utf-8")
    (custom / "partials" / "card.mustache").write_text("[{{title}}]", encoding="utf-8")
    (default / "nav.mustache").write_text("<nav>default</nav>", encoding="utf-8")
    (default / "page.mustache").write_text("{{>nav}}<p>{{body}}</p>", encoding="utf-8")
    (default / "notes.txt").write_text("not a template", encoding="utf-8")
    (tmp_path / "secret.mustache").write_text("secret", encoding="utf-8")
    return custom, default


class TestFileSystemLoader:
    def test_first_path_wins(self, template_dirs):
        custom, default = template_dirs
        loader = FileSystemLoader([custom, default])
        source, filename = loader.get_source("nav.mustache")
        assert source == "<nav>custom</nav>"
        assert filename == str(custom / "nav.mustache")

    def test_falls_back_to_later_path(self, template_dirs):
        loader = FileSystemLoader(list(template_dirs))
        source, _ = loader.get_source("page.mustache")
        assert source.startswith("{{>nav}}")

    def test_single_path(self, template_dirs):
        custom, _ = template_dirs
        loader = FileSystemLoader(str(custom))
        assert loader.paths == [custom]

    def test_subdirectory(self, template_dirs):
        loader = FileSystemLoader(list(template_dirs))
        source, _ = loader.get_source("partials/card.mustache")
        assert source == "[{{title}}]"

    def test_not_found(self, template_dirs):
        loader = FileSystemLoader(list(template_dirs))
        with pytest.raises(TemplateNotFoundError, match="missing.mustache"):
            loader.get_source("missing.mustache")

    def test_parent_traversal_never_found(self, template_dirs):
        custom, _ = template_dirs
        loader = FileSystemLoader(custom)
        with pytest.raises(TemplateNotFoundError):
            loader.get_source("../secret.mustache")

    def test_directory_is_not_a_template(self, template_dirs):
        loader = FileSystemLoader(list(template_dirs))
        with pytest.raises(TemplateNotFoundError):
            loader.get_source("partials")

    def test_list_templates(self, template_dirs):
        loader = FileSystemLoader(list(template_dirs))
        assert loader.list_templates("mustache") == [
            "nav.mustache",
            "page.mustache",
            "partials/card.mustache",
        ]
        assert "notes.txt" in loader.list_templates()

    def test_encoding(self, tmp_path):
        (tmp_path / "latin.mustache").write_bytes("café".encode("latin-1"))
        loader = FileSystemLoader(tmp_path, encoding="latin-1")
        assert loader.get_source("latin.mustache")[0] == "café"

    def test_environment_integration(self, template_dirs):
        env = Environment(loader=FileSystemLoader(list(template_dirs)))
        assert env.get_template("page").render(body="hi") == "<nav>custom</nav><p>hi</p>"
        assert env.render("{{>partials/card}}", {"title": "t"}) == "[t]"


class TestDictLoader:
    def test_get_source(self):
        loader = DictLoader({"a.mustache": "A"})
        assert loader.get_source("a.mustache") == ("A", None)

    def test_did_you_mean(self):
        loader = DictLoader({"header.mustache": ""})
        with pytest.raises(TemplateNotFoundError, match="Did you mean 'header.mustache'"):
            loader.get_source("heder.mustache")

    def test_available_listed(self):
        loader = DictLoader({"a": "", "b": ""})
        with pytest.raises(TemplateNotFoundError, match="Available: a, b"):
            loader.get_source("something-else")

    def test_list_templates(self):
        assert DictLoader({"b": "", "a": ""}).list_templates() == ["a", "b"]


class TestChoiceLoader:
    def test_first_match(self):
        loader = ChoiceLoader(
            [DictLoader({"nav": "custom"}), DictLoader({"nav": "default", "footer": "f"})]
        )
        assert loader.get_source("nav")[0] == "custom"
        assert loader.get_source("footer")[0] == "f"

    def test_none_match(self):
        loader = ChoiceLoader([DictLoader({}), DictLoader({})])
        with pytest.raises(TemplateNotFoundError, match="any of 2 loaders"):
            loader.get_source("x")

    def test_list_templates_merged(self):
        loader = ChoiceLoader(
            [DictLoader({"a": ""}), FunctionLoader(lambda name: None), DictLoader({"a": "", "b": ""})]
        )
        assert loader.list_templates() == ["a", "b"]


class TestFunctionLoader:
    def test_string_result(self):
        loader = FunctionLoader(lambda name: f"source of {name}")
        assert loader.get_source("x") == ("source of x", "<function>")

    def test_tuple_result(self):
        loader = FunctionLoader(lambda name: ("src", "/virtual/" + name))
        assert loader.get_source("x") == ("src", "/virtual/x")

    def test_none_result(self):
        loader = FunctionLoader(lambda name: None)
        with pytest.raises(TemplateNotFoundError):
            loader.get_source("x")


class TestLoaderProtocol:
    @pytest.mark.parametrize(
        "loader",
        [
            DictLoader({}),
            FileSystemLoader("."),
            ChoiceLoader([]),
            FunctionLoader(lambda name: None),
        ],
    )
    def test_builtin_loaders_satisfy_protocol(self, loader):
        assert isinstance(loader, Loader)

    def test_custom_loader(self):
        class UpperLoader:
            def get_source(self, name):
                return name.upper(), None

        env = Environment(loader=UpperLoader())
        assert isinstance(env.loader, Loader)
        assert env.get_template("hello").render() == "HELLO.MUSTACHE"
