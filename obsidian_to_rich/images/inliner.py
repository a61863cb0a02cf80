"""Embed local images into HTML as base64 data URIs."""

import base64
import html
import re
from pathlib import Path
from typing import Optional, Union
from urllib.parse import unquote

from obsidian_to_rich.core.models import InlineReport

# <img ... src="..." ...>, src may be preceded or followed by any attributes
IMG_TAG_PATTERN = re.compile(
    r'<img\b(?P<before>[^>]*?\s)src=(?P<quote>["\'])(?P<src>.*?)(?P=quote)(?P<after>[^>]*)>',
    re.IGNORECASE | re.DOTALL,
)

REMOTE_PREFIXES = ('http://', 'https://', 'data:')

MIME_TYPES = {
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.png': 'image/png',
    '.gif': 'image/gif',
    '.svg': 'image/svg+xml',
    '.webp': 'image/webp',
    '.bmp': 'image/bmp',
    '.ico': 'image/x-icon',
    '.avif': 'image/avif',
}

DEFAULT_MIME_TYPE = 'image/png'


def is_local_image(src: str) -> bool:
    """Check whether an image src points at the filesystem."""
    return not src.lower().startswith(REMOTE_PREFIXES)


def mime_type_for(path: Union[str, Path]) -> str:
    """Look up an image MIME type by file extension."""
    return MIME_TYPES.get(Path(path).suffix.lower(), DEFAULT_MIME_TYPE)


class AssetInliner:
    """Replaces local <img> sources with data URIs read from disk.

    Inlining is best effort: a missing or unreadable file is reported as a
    warning and its tag is left exactly as it was.
    """

    def __init__(self, base_dir: Union[str, Path]):
        """Initialize AssetInliner.

        Args:
            base_dir: Directory relative image paths are resolved against,
                      normally the directory of the Markdown source
        """
        self.base_dir = Path(base_dir)
        self.report = InlineReport()

    def resolve(self, src: str) -> Path:
        """Map an <img> src value to a filesystem path."""
        path = Path(unquote(html.unescape(src)))
        if path.is_absolute():
            return path
        return self.base_dir / path

    def to_data_uri(self, src: str) -> Optional[str]:
        """Read the image behind src and encode it.

        Returns:
            A data: URI, or None if the file cannot be read
        """
        path = self.resolve(src)
        try:
            if not path.is_file():
                print(f"Warning: Image file not found: {path}")
                return None
            data = path.read_bytes()
        except OSError as e:
            print(f"Warning: Failed to read image {path}: {e}")
            return None

        encoded = base64.b64encode(data).decode('ascii')
        return f"data:{mime_type_for(path)};base64,{encoded}"

    def inline(self, content: str) -> str:
        """Inline every local image in an HTML string."""

        def replace_img(match: re.Match) -> str:
            src = match.group('src')
            if not is_local_image(src):
                return match.group(0)

            data_uri = self.to_data_uri(src)
            if data_uri is None:
                self.report.missing.append(src)
                return match.group(0)

            self.report.inlined.append(src)
            print(f"Converted image to base64: {src}")
            quote = match.group('quote')
            return f"<img{match.group('before')}src={quote}{data_uri}{quote}{match.group('after')}>"

        result = IMG_TAG_PATTERN.sub(replace_img, content)

        if self.report.count:
            print(f"Total images converted: {self.report.count}")

        return result


def inline_local_images(content: str, base_dir: Union[str, Path]) -> str:
    """Inline local images in content, resolving paths against base_dir."""
    return AssetInliner(base_dir).inline(content)
