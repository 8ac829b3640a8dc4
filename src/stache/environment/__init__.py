"""Stache environment package: configuration, loaders and errors."""

from stache.environment.core import Environment
from stache.environment.exceptions import (
    DelimiterError,
    ErrorCode,
    RecursionLimitError,
    SourceSnippet,
    TemplateError,
    TemplateNotFoundError,
    TemplateRuntimeError,
    TemplateSyntaxError,
    UnclosedSectionError,
    UndefinedError,
    UnexpectedCloseSectionError,
    UnknownPartialError,
    UnknownPragmaError,
)
from stache.environment.loaders import (
    ChoiceLoader,
    DictLoader,
    FileSystemLoader,
    FunctionLoader,
    Loader,
)

__all__ = [
    "ChoiceLoader",
    "DelimiterError",
    "DictLoader",
    "Environment",
    "ErrorCode",
    "FileSystemLoader",
    "FunctionLoader",
    "Loader",
    "RecursionLimitError",
    "SourceSnippet",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateRuntimeError",
    "TemplateSyntaxError",
    "UnclosedSectionError",
    "UndefinedError",
    "UnexpectedCloseSectionError",
    "UnknownPartialError",
    "UnknownPragmaError",
]
