"""
Obsidian to Rich - Convert Obsidian notes to rich-text HTML

Turns Obsidian-flavored Markdown into self-contained HTML that survives
pasting into rich-text editors such as the WeChat article editor:
- Frontmatter and title stripping
- Wikilink image conversion
- Paragraph spacing for single-newline paragraphs
- Base64 inlining of local images
- Themes applied as inline styles
"""

__version__ = "0.1.0"

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
from obsidian_to_rich.images.inliner import AssetInliner, inline_local_images
from obsidian_to_rich.themes.catalog import Theme, get_theme, list_themes
from obsidian_to_rich.themes.styler import apply_theme
from obsidian_to_rich.transforms.preprocess import preprocess
from obsidian_to_rich.transforms.sanitize import sanitize

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
    "AssetInliner",
    "inline_local_images",
    "Theme",
    "get_theme",
    "list_themes",
    "apply_theme",
    "preprocess",
    "sanitize",
]
