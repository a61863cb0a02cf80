"""Conversion pipeline for turning Obsidian notes into rich-text HTML."""

from pathlib import Path
from typing import Optional, Union

from obsidian_to_rich.core.models import Document, ProcessingOptions
from obsidian_to_rich.core.renderer import MarkdownRenderer
from obsidian_to_rich.images.inliner import AssetInliner
from obsidian_to_rich.themes.catalog import get_theme
from obsidian_to_rich.themes.styler import apply_theme
from obsidian_to_rich.transforms.preprocess import build_preprocessor
from obsidian_to_rich.transforms.sanitize import sanitize


class Converter:
    """Converts Obsidian Markdown documents to styled HTML.

    Stages run strictly in order:
    - Obsidian syntax preprocessing
    - Markdown rendering
    - Local image inlining
    - Theme styling (standalone document or inline fragment)
    - Sanitizing, when enabled
    """

    def __init__(self, options: Optional[ProcessingOptions] = None):
        """Initialize Converter.

        Args:
            options: Processing options (defaults if omitted)

        Raises:
            UnknownThemeError: If options.theme is not in the catalog
        """
        self.options = options or ProcessingOptions()
        # Fail before any file is read or written
        get_theme(self.options.theme)

    @property
    def mode(self) -> str:
        return 'inline' if self.options.inline_only else 'document'

    def convert(self, document: Document, title: str = "Article") -> str:
        """Run the full pipeline over a document.

        Args:
            document: Source text and the directory its images resolve against
            title: Page title for document mode

        Returns:
            Final HTML string
        """
        preprocess = build_preprocessor(self.options)
        content = preprocess(document.source)

        # Fresh renderer per call, no parser state survives between documents
        content = MarkdownRenderer().render(content)

        inliner = AssetInliner(document.base_dir)
        content = inliner.inline(content)

        content = apply_theme(content, self.options.theme, self.mode, title=title)

        if self.options.sanitize:
            content = sanitize(content)

        return content

    def convert_file(self, path: Union[str, Path]) -> str:
        """Read a Markdown file and convert it.

        Raises:
            SourceNotFoundError: If the file does not exist
        """
        document = Document.from_path(path)
        return self.convert(document, title=Path(path).stem)


def convert_markdown(
    source: str,
    base_dir: Union[str, Path] = ".",
    options: Optional[ProcessingOptions] = None,
) -> str:
    """Convert a Markdown string with images resolved against base_dir."""
    return Converter(options).convert(Document(source=source, base_dir=Path(base_dir)))
