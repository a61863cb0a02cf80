"""Core components for Obsidian to Rich."""

from obsidian_to_rich.core.models import (
    ConfigError,
    ConversionError,
    Document,
    InlineReport,
    ProcessingOptions,
    SourceDecodeError,
    SourceNotFoundError,
    UnknownThemeError,
    load_options,
)
from obsidian_to_rich.core.renderer import MarkdownRenderer, render
from obsidian_to_rich.core.pipeline import Converter, convert_markdown

__all__ = [
    "ConfigError",
    "ConversionError",
    "Document",
    "InlineReport",
    "ProcessingOptions",
    "SourceDecodeError",
    "SourceNotFoundError",
    "UnknownThemeError",
    "load_options",
    "MarkdownRenderer",
    "render",
    "Converter",
    "convert_markdown",
]
