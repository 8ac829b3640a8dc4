"""Template loaders for the stache environment.

Loaders provide template and partial source to the Environment. They
implement ``get_source(name)`` returning ``(source, filename)``, where
``name`` already carries the template extension (``"header.mustache"``).

Built-in Loaders:
- ``FileSystemLoader``: Load from filesystem directories
- ``DictLoader``: Load from in-memory dictionary (testing/embedded)
- ``ChoiceLoader``: Try multiple loaders in order (theme fallback)
- ``FunctionLoader``: Wrap a callable as a loader (quick one-offs)

Custom Loaders:
Implement the ``Loader`` protocol:
    ```python
    class DatabaseLoader:
        def get_source(self, name: str) -> tuple[str, str | None]:
            row = db.query("SELECT source FROM templates WHERE name = ?", name)
            if not row:
                raise TemplateNotFoundError(f"Template '{name}' not found")
            return row.source, f"db://{name}"
    ```

Thread-Safety:
Loaders should be thread-safe for concurrent ``get_source()`` calls.
All built-in loaders are (FileSystemLoader reads files atomically,
DictLoader only reads its mapping, ChoiceLoader delegates).

"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from difflib import get_close_matches
from pathlib import Path
from typing import Protocol, runtime_checkable

from stache.environment.exceptions import TemplateNotFoundError


@runtime_checkable
class Loader(Protocol):
    """Anything that can turn a template name into source."""

    def get_source(self, name: str) -> tuple[str, str | None]:
        """Return ``(source, filename)`` or raise ``TemplateNotFoundError``."""
        ...


class FileSystemLoader:
    """Load templates from filesystem directories.

    Directories are searched in order, first match wins:

        >>> loader = FileSystemLoader(["themes/custom/", "themes/default/"])
        >>> source, filename = loader.get_source("page.mustache")
        >>> filename
        'themes/custom/page.mustache'

    Names that would escape a search directory (``../secret``) are never
    found.

    Raises:
        TemplateNotFoundError: If template not found in any search path

    """

    __slots__ = ("_encoding", "_paths")

    def __init__(
        self,
        paths: str | Path | Sequence[str | Path],
        encoding: str = "utf-8",
    ):
        if isinstance(paths, (str, Path)):
            paths = [paths]
        self._paths = [Path(p) for p in paths]
        self._encoding = encoding

    @property
    def paths(self) -> list[Path]:
        return list(self._paths)

    def get_source(self, name: str) -> tuple[str, str]:
        """Load template source from filesystem."""
        if ".." not in Path(name).parts:
            for base in self._paths:
                path = base / name
                if path.is_file():
                    return path.read_text(self._encoding), str(path)

        raise TemplateNotFoundError(
            f"Template '{name}' not found in: {', '.join(str(p) for p in self._paths)}"
        )

    def list_templates(self, extension: str | None = None) -> list[str]:
        """List template names in all search paths, optionally by extension."""
        pattern = f"*.{extension.lstrip('.')}" if extension else "*"
        templates: set[str] = set()
        for base in self._paths:
            if base.is_dir():
                for path in base.rglob(pattern):
                    if path.is_file():
                        templates.add(path.relative_to(base).as_posix())
        return sorted(templates)


class DictLoader:
    """Load templates from an in-memory dictionary.

    Returns ``None`` as filename since templates are not file-backed.

    Example:
            >>> loader = DictLoader({
            ...     "page.mustache": "<h1>{{title}}</h1>{{>footer}}",
            ...     "footer.mustache": "<footer>{{year}}</footer>",
            ... })
            >>> env = Environment(loader=loader)
            >>> env.get_template("page").render(title="Hi", year=2024)
            '<h1>Hi</h1><footer>2024</footer>'

    Raises:
        TemplateNotFoundError: If template name not in mapping

    """

    __slots__ = ("_mapping",)

    def __init__(self, mapping: Mapping[str, str]):
        self._mapping = mapping

    def get_source(self, name: str) -> tuple[str, None]:
        if name not in self._mapping:
            available = sorted(self._mapping)
            msg = f"Template '{name}' not found"
            matches = get_close_matches(name, available, n=1, cutoff=0.6)
            if matches:
                msg += f". Did you mean '{matches[0]}'?"
            elif available:
                msg += f". Available: {', '.join(available[:10])}"
                if len(available) > 10:
                    msg += f" ... ({len(available)} total)"
            raise TemplateNotFoundError(msg)
        return self._mapping[name], None

    def list_templates(self) -> list[str]:
        return sorted(self._mapping)


class ChoiceLoader:
    """Try multiple loaders in order, returning the first match.

    Example:
            >>> custom = DictLoader({"nav.mustache": "<nav>Custom</nav>"})
            >>> default = DictLoader({
            ...     "nav.mustache": "<nav>Default</nav>",
            ...     "footer.mustache": "<footer>Default</footer>",
            ... })
            >>> env = Environment(loader=ChoiceLoader([custom, default]))
            >>> env.get_template("nav").render()     # from custom
            '<nav>Custom</nav>'
            >>> env.get_template("footer").render()  # from default
            '<footer>Default</footer>'

    Raises:
        TemplateNotFoundError: If no loader can find the template
    """

    __slots__ = ("_loaders",)

    def __init__(self, loaders: Sequence[Loader]):
        self._loaders = list(loaders)

    def get_source(self, name: str) -> tuple[str, str | None]:
        """Try each loader in order, return first match."""
        for loader in self._loaders:
            try:
                return loader.get_source(name)
            except TemplateNotFoundError:
                continue
        raise TemplateNotFoundError(
            f"Template '{name}' not found in any of {len(self._loaders)} loaders"
        )

    def list_templates(self) -> list[str]:
        """Merge template lists from all loaders (deduplicated, sorted)."""
        templates: set[str] = set()
        for loader in self._loaders:
            if hasattr(loader, "list_templates"):
                templates.update(loader.list_templates())
        return sorted(templates)


class FunctionLoader:
    """Wrap a callable as a template loader.

    The function takes a template name and returns the source, a
    ``(source, filename)`` tuple, or ``None`` when it has no such template.

    Example:
            >>> def load(name):
            ...     if name == "greeting.mustache":
            ...         return "Hello, {{name}}!"
            ...     return None
            >>> env = Environment(loader=FunctionLoader(load))
            >>> env.get_template("greeting").render(name="World")
            'Hello, World!'

    Raises:
        TemplateNotFoundError: If ``load_func`` returns ``None``
    """

    __slots__ = ("_load_func",)

    def __init__(
        self,
        load_func: Callable[[str], str | tuple[str, str | None] | None],
    ):
        self._load_func = load_func

    def get_source(self, name: str) -> tuple[str, str | None]:
        """Call the load function and normalize the result."""
        result = self._load_func(name)

        if result is None:
            raise TemplateNotFoundError(f"Template '{name}' not found")

        if isinstance(result, str):
            return result, "<function>"

        return result
