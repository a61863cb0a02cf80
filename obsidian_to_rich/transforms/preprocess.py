"""Preprocessing transforms for Obsidian to Rich.

These transforms rewrite Obsidian-specific source text into standard
Markdown before it reaches the renderer. Each one is a plain str -> str
function; build_preprocessor() picks and chains them from the options.
"""

import re
from pathlib import PurePosixPath
from typing import Callable, List, TYPE_CHECKING
from urllib.parse import quote

if TYPE_CHECKING:
    from obsidian_to_rich.core.models import ProcessingOptions

TextTransform = Callable[[str], str]

FRONTMATTER_PATTERN = re.compile(
    r'\A---[ \t]*\r?\n(?:.*?\r?\n)??---[ \t]*(?:\r?\n|\Z)(?:[ \t]*(?:\r?\n|\Z))*',
    re.DOTALL,
)

LEADING_TITLE_PATTERN = re.compile(
    r'\A(?:[ \t]*\r?\n)*#[ \t]+[^\r\n]*\S[^\r\n]*(?:\r?\n|\Z)(?:[ \t]*(?:\r?\n|\Z))*'
)

# Pattern for image embeds: ![[image.png]] or ![[image.png|alt]]
EMBED_PATTERN = re.compile(r'!\[\[([^\[\]]+)\]\]')

IMAGE_EXTENSION_PATTERN = re.compile(r'\.(?:png|jpe?g|gif|svg|webp|bmp|ico|avif)$', re.IGNORECASE)

EXTERNAL_TARGET_PATTERN = re.compile(r'^(?:https?://|data:|/)', re.IGNORECASE)

# Obsidian resize syntax: ![[img.png|400]] or ![[img.png|400x300]]
SIZE_ALIAS_PATTERN = re.compile(r'^\d+(?:x\d+)?$', re.IGNORECASE)

# encodeURI's safe set without parentheses
URI_SAFE_CHARS = ";,/?:@&=+$-_.!~*'#"

FENCE_PATTERN = re.compile(r'^\s*(`{3,}|~{3,})')

BLOCK_SYNTAX_PATTERN = re.compile(
    r'^(?:#{1,6}\s|[-*+]\s|\d+[.)]\s|>|```|~~~|\||([-*_])(?:\s*\1){2,}\s*$)'
)


def strip_frontmatter(text: str) -> str:
    """Remove a leading ---/--- metadata block and the blank lines after it."""
    return FRONTMATTER_PATTERN.sub('', text, count=1)


def strip_leading_title(text: str) -> str:
    """Remove a first-level heading that is the first non-blank content."""
    return LEADING_TITLE_PATTERN.sub('', text, count=1)


def _escape_alt(text: str) -> str:
    return text.replace(']', '\\]')


def convert_image_embeds(text: str, attachments_dir: str = "attachments") -> str:
    """Convert Obsidian image embeds to standard Markdown images.

    Bare filenames are placed under attachments_dir. Targets that are not
    images (note embeds) are left as they are.

    Args:
        text: Markdown source
        attachments_dir: Directory bare image names live in, relative to the note

    Returns:
        Markdown with ![[...]] image embeds replaced by ![alt](path)
    """
    attachments_dir = attachments_dir.strip().rstrip('/')

    def replace_embed(match: re.Match) -> str:
        parts = match.group(1).split('|')
        target = parts[0].strip()
        alias = parts[1].strip() if len(parts) > 1 else ''

        if not target or not IMAGE_EXTENSION_PATTERN.search(target):
            return match.group(0)

        src = target
        if attachments_dir and '/' not in target and not EXTERNAL_TARGET_PATTERN.match(target):
            src = f"{attachments_dir}/{target}"

        if alias and not SIZE_ALIAS_PATTERN.match(alias):
            alt = alias
        else:
            alt = PurePosixPath(target).stem

        return f"![{_escape_alt(alt)}]({quote(src, safe=URI_SAFE_CHARS)})"

    return EMBED_PATTERN.sub(replace_embed, text)


def is_block_syntax_line(line: str) -> bool:
    """Check whether a line starts a Markdown block construct."""
    trimmed = line.strip()
    if not trimmed:
        return False
    return BLOCK_SYNTAX_PATTERN.match(trimmed) is not None


def _needs_blank_line(current: str, following: str) -> bool:
    if not current.strip() or not following.strip():
        return False
    return not (is_block_syntax_line(current) or is_block_syntax_line(following))


def add_paragraph_spacing(text: str) -> str:
    """Insert a blank line between consecutive plain text lines.

    Lines inside fenced code blocks are never touched. A fence only closes
    on a delimiter made of the same character that opened it.
    """
    lines = re.split(r'\r?\n', text)
    result: List[str] = []
    fence_char = ''

    for i, line in enumerate(lines):
        result.append(line)

        fence = FENCE_PATTERN.match(line)
        if fence:
            char = fence.group(1)[0]
            if not fence_char:
                fence_char = char
            elif char == fence_char:
                fence_char = ''
            continue

        if fence_char or i + 1 >= len(lines):
            continue

        if _needs_blank_line(line, lines[i + 1]):
            result.append('')

    return '\n'.join(result)


def compose(*transforms: TextTransform) -> TextTransform:
    """Chain text transforms, applied left to right."""
    def transform(text: str) -> str:
        for t in transforms:
            text = t(text)
        return text
    return transform


def build_preprocessor(options: "ProcessingOptions") -> TextTransform:
    """Create the preprocessing transform for a set of options.

    Order: frontmatter, title, image embeds, paragraph spacing.
    """
    steps: List[TextTransform] = []
    if options.strip_frontmatter:
        steps.append(strip_frontmatter)
    if options.strip_title:
        steps.append(strip_leading_title)

    attachments_dir = options.attachments_dir
    steps.append(lambda text: convert_image_embeds(text, attachments_dir))

    if options.paragraph_spacing:
        steps.append(add_paragraph_spacing)
    return compose(*steps)


def preprocess(source: str, options: "ProcessingOptions") -> str:
    """Rewrite Obsidian Markdown into standard Markdown."""
    return build_preprocessor(options)(source)
