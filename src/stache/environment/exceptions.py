"""Exceptions for the stache template system.

Exception Hierarchy:
TemplateError (base)
├── TemplateNotFoundError            # Template not found by loader
│   └── UnknownPartialError          # {{>name}} with no partial available
├── TemplateSyntaxError              # Parse-time syntax error
│   ├── UnclosedSectionError         # {{#name}} without {{/name}}
│   ├── UnexpectedCloseSectionError  # {{/name}} without {{#name}}
│   ├── UnknownPragmaError           # {{%NAME}} not implemented
│   └── DelimiterError               # malformed {{=open close=}}
├── TemplateRuntimeError             # Render-time error with context
│   └── RecursionLimitError          # section/partial nesting too deep
└── UndefinedError                   # Unknown variable (strict_variables)

Error Messages:
All exceptions carry an ``ErrorCode`` and, where known, the template name
and line. ``format_compact()`` renders a terminal-friendly diagnostic:

    ```
    S-RUN-001: Undefined variable 'titl' in article.mustache:5. Did you mean 'title'?
       |
      4 | <main>
    >  5 | <h1>{{titl}}</h1>
       |     ^
       |
    ```

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from stache.environment import terminal


class ErrorCode(Enum):
    """Searchable error codes for stache errors.

    Format: S-{CATEGORY}-{NUMBER}
    Categories: PAR (parser), RUN (runtime), TPL (template loading)
    """

    # Parser errors (S-PAR-xxx)
    SYNTAX_ERROR = "S-PAR-000"
    UNCLOSED_SECTION = "S-PAR-001"
    UNEXPECTED_CLOSE_SECTION = "S-PAR-002"
    UNKNOWN_PRAGMA = "S-PAR-003"
    INVALID_DELIMITER = "S-PAR-004"

    # Runtime errors (S-RUN-xxx)
    RUNTIME_ERROR = "S-RUN-000"
    UNDEFINED_VARIABLE = "S-RUN-001"
    RECURSION_LIMIT = "S-RUN-002"

    # Template loading errors (S-TPL-xxx)
    TEMPLATE_NOT_FOUND = "S-TPL-001"
    UNKNOWN_PARTIAL = "S-TPL-002"

    @property
    def category(self) -> str:
        """Error category ('parser', 'runtime' or 'template')."""
        prefix = self.value.split("-")[1]
        return {
            "PAR": "parser",
            "RUN": "runtime",
            "TPL": "template",
        }.get(prefix, "unknown")


# ---------------------------------------------------------------------------
# Source snippets
# ---------------------------------------------------------------------------


def format_template_stack(stack: list[tuple[str, int]] | None) -> str:
    """Format the partial inclusion chain for error messages.

    Example:
        >>> print(format_template_stack([("page", 3), ("card", 1)]))
        Template stack:
          • page:3
          • card:1
    """
    if not stack:
        return ""

    lines = [terminal.dim_text("Template stack:")]
    for template_name, line_num in stack:
        lines.append(f"  • {terminal.location(f'{template_name}:{line_num}')}")
    return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class SourceSnippet:
    """Template source context around an error line.

    Attributes:
        lines: Tuple of (line_number, line_content) pairs around the error.
        error_line: The 1-based line number where the error occurred.
        column: Optional column offset for caret pointer.
    """

    lines: tuple[tuple[int, str], ...]
    error_line: int
    column: int | None = None

    def format(self) -> str:
        """Format the snippet with line numbers, highlighting the error line."""
        parts: list[str] = [terminal.dim_text("   |")]
        for lineno, content in self.lines:
            parts.append(
                terminal.format_source_line(lineno, content, is_error=lineno == self.error_line)
            )
        if self.column is not None:
            caret = " " * self.column + "^"
            parts.append(f"{terminal.dim_text('   |')} {terminal.error_line(caret)}")
        parts.append(terminal.dim_text("   |"))
        return "\n".join(parts)


def build_source_snippet(
    source: str,
    error_line: int,
    *,
    context_lines: int = 2,
    column: int | None = None,
) -> SourceSnippet:
    """Build a SourceSnippet from template source.

    Args:
        source: Full template source text.
        error_line: 1-based line number of the error.
        context_lines: Number of lines to show before/after the error line.
        column: Optional column offset for caret pointer.
    """
    all_lines = source.splitlines()
    start = max(0, error_line - 1 - context_lines)
    end = min(len(all_lines), error_line + context_lines)
    lines = tuple((i + 1, all_lines[i]) for i in range(start, end))
    return SourceSnippet(lines=lines, error_line=error_line, column=column)


def _location(name: str | None, lineno: int | None) -> str:
    loc = name or "<template>"
    if lineno:
        loc += f":{lineno}"
    return loc


class TemplateError(Exception):
    """Base exception for all stache template errors.

    Enables broad handling of anything that can abort a render:

        >>> try:
        ...     env.render(source, view)
        ... except TemplateError as e:
        ...     log.error("Template error: %s", e)

    Attributes:
        code: ErrorCode identifying the failure.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Format the error as a short terminal diagnostic prefixed with its code."""
        header = str(self)
        if self.code and self.code.value not in header:
            header = terminal.format_error_header(self.code.value, header)
        return header


class TemplateNotFoundError(TemplateError):
    """Template not found by any configured loader.

    Example:
        >>> env.get_template("missing")
        TemplateNotFoundError: Template 'missing.mustache' not found in: templates

    """

    code: ErrorCode | None = ErrorCode.TEMPLATE_NOT_FOUND


class UnknownPartialError(TemplateNotFoundError):
    """A ``{{>name}}`` tag names a partial that neither the explicit partials
    nor the loader provide.

    Raised only when ``strict_partials`` is enabled; otherwise the tag
    renders as an empty string.
    """

    code: ErrorCode | None = ErrorCode.UNKNOWN_PARTIAL

    def __init__(self, name: str, template_name: str | None = None, lineno: int | None = None):
        self.name = name
        self.template_name = template_name
        self.lineno = lineno
        super().__init__(
            f"Unknown partial '{name}' in {terminal.location(_location(template_name, lineno))}"
        )


class TemplateSyntaxError(TemplateError):
    """Parse-time syntax error in template source.

    When ``source`` and ``lineno`` are provided, the message includes the
    offending line; with ``col_offset`` a caret points at the exact column.
    """

    code: ErrorCode | None = ErrorCode.SYNTAX_ERROR

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        name: str | None = None,
        source: str | None = None,
        col_offset: int | None = None,
    ):
        self.message = message
        self.lineno = lineno
        self.name = name
        self.source = source
        self.col_offset = col_offset
        super().__init__(self._format_message())

    def _snippet_lines(self) -> list[str]:
        if not (self.source and self.lineno):
            return []
        lines = self.source.splitlines()
        if not 0 < self.lineno <= len(lines):
            return []
        snippet = ["   |", f"{self.lineno:>3} | {lines[self.lineno - 1]}"]
        if self.col_offset is not None:
            snippet.append(f"   | {' ' * self.col_offset}^")
        return snippet

    def _format_message(self) -> str:
        location = _location(self.name, self.lineno)
        if self.lineno and self.col_offset is not None:
            location += f":{self.col_offset}"
        return "\n".join([f"Syntax Error: {self.message}", f"  --> {location}", *self._snippet_lines()])

    def format_compact(self) -> str:
        """Format syntax error as structured terminal diagnostic."""
        parts = [
            terminal.format_error_header(self.code.value if self.code else None, self.message),
            f"  --> {terminal.location(_location(self.name, self.lineno))}",
        ]
        snippet = self._snippet_lines()
        if snippet:
            parts.extend(snippet)
            parts.append("   |")
        return "\n".join(parts)


class UnclosedSectionError(TemplateSyntaxError):
    """``{{#name}}`` or ``{{^name}}`` has no matching ``{{/name}}``."""

    code: ErrorCode | None = ErrorCode.UNCLOSED_SECTION

    def __init__(self, section: str, **kwargs: Any):
        self.section = section
        super().__init__(f"Unclosed section: {section}", **kwargs)


class UnexpectedCloseSectionError(TemplateSyntaxError):
    """``{{/name}}`` closes a section that was never opened."""

    code: ErrorCode | None = ErrorCode.UNEXPECTED_CLOSE_SECTION

    def __init__(self, section: str, **kwargs: Any):
        self.section = section
        super().__init__(f"Unexpected close section: {section}", **kwargs)


class UnknownPragmaError(TemplateSyntaxError):
    """``{{%NAME}}`` names a pragma this engine does not implement.

    Always raised, independent of the environment's error policy.
    """

    code: ErrorCode | None = ErrorCode.UNKNOWN_PRAGMA

    def __init__(self, pragma: str, **kwargs: Any):
        self.pragma = pragma
        super().__init__(f"Unknown pragma: {pragma}", **kwargs)


class DelimiterError(TemplateSyntaxError):
    """``{{=...=}}`` does not contain exactly two delimiter tokens."""

    code: ErrorCode | None = ErrorCode.INVALID_DELIMITER


class TemplateRuntimeError(TemplateError):
    """Render-time error with debugging context.

    Output Format:
            ```
            Runtime Error: Maximum nesting depth exceeded (100)
              Location: page.mustache:4
              Template stack:
                • page:4
                • row:1
              Suggestion: Check for partials that include themselves
            ```

    Attributes:
        message: Error description
        template_name: Name of the template
        lineno: Line number in template source
        suggestion: Actionable fix suggestion
        template_stack: (template_name, line) pairs of the partial chain
    """

    code: ErrorCode | None = ErrorCode.RUNTIME_ERROR

    def __init__(
        self,
        message: str,
        *,
        template_name: str | None = None,
        lineno: int | None = None,
        suggestion: str | None = None,
        source_snippet: SourceSnippet | None = None,
        template_stack: list[tuple[str, int]] | None = None,
    ):
        self.message = message
        self.template_name = template_name
        self.lineno = lineno
        self.suggestion = suggestion
        self.source_snippet = source_snippet
        self.template_stack = template_stack or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [f"Runtime Error: {self.message}"]
        if self.template_name or self.lineno:
            parts.append(f"  Location: {terminal.location(_location(self.template_name, self.lineno))}")
        if self.source_snippet:
            parts.append(self.source_snippet.format())
        if self.template_stack:
            parts.append(format_template_stack(self.template_stack))
        if self.suggestion:
            parts.append(f"  {terminal.hint('Suggestion:')} {self.suggestion}")
        return "\n".join(parts)


class RecursionLimitError(TemplateRuntimeError):
    """Section/partial nesting exceeded ``Environment.max_depth``."""

    code: ErrorCode | None = ErrorCode.RECURSION_LIMIT

    def __init__(self, max_depth: int, name: str, **kwargs: Any):
        self.max_depth = max_depth
        super().__init__(
            f"Maximum nesting depth exceeded ({max_depth}) at '{name}'",
            suggestion="Check for partials that include themselves",
            **kwargs,
        )


class UndefinedError(TemplateError):
    """Raised for a variable that no scope of the context stack defines.

    Only raised when ``strict_variables`` is enabled; by default unknown
    variables render as an empty string.

    If ``available_names`` is provided, a "Did you mean?" suggestion is
    included when a close match is found (``difflib.get_close_matches``).

    Example:
            >>> env = Environment(strict_variables=True)
            >>> env.render("{{nmae}}", {"name": "x"})
        UndefinedError: Undefined variable 'nmae' in <template>:1. Did you mean 'name'?

    """

    code: ErrorCode | None = ErrorCode.UNDEFINED_VARIABLE

    def __init__(
        self,
        name: str,
        template: str | None = None,
        lineno: int | None = None,
        available_names: frozenset[str] | None = None,
        source_snippet: SourceSnippet | None = None,
        template_stack: list[tuple[str, int]] | None = None,
    ):
        self.name = name
        self.template = template or "<template>"
        self.lineno = lineno
        self._available_names = available_names
        self.source_snippet = source_snippet
        self.template_stack = template_stack or []
        super().__init__(self._format_message())

    def _suggestion(self) -> str | None:
        if not self._available_names:
            return None
        from difflib import get_close_matches

        matches = get_close_matches(self.name, sorted(self._available_names), n=1, cutoff=0.6)
        return matches[0] if matches else None

    def _format_message(self) -> str:
        msg = f"Undefined variable '{self.name}' in {terminal.location(_location(self.template, self.lineno))}"

        suggested = self._suggestion()
        if suggested:
            msg += f". Did you mean '{terminal.suggestion(suggested)}'?"

        if self.source_snippet:
            msg += "\n" + self.source_snippet.format()

        if self.template_stack:
            msg += "\n\n" + format_template_stack(self.template_stack)
        return msg

    def format_compact(self) -> str:
        """Format undefined variable error as structured terminal diagnostic."""
        return terminal.format_error_header(
            self.code.value if self.code else None, self._format_message()
        )
