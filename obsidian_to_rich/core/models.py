"""Data models for Obsidian to Rich."""

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml


class ConversionError(Exception):
    """Base class for failures that stop a conversion."""


class SourceNotFoundError(ConversionError, FileNotFoundError):
    """The Markdown source file does not exist."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"Input file not found: {self.path}")


class SourceDecodeError(ConversionError, ValueError):
    """The Markdown source file is not valid UTF-8."""

    def __init__(self, path: Union[str, Path], reason: str = ""):
        self.path = Path(path)
        message = f"Input file is not valid UTF-8: {self.path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class UnknownThemeError(ConversionError, KeyError):
    """The requested theme is not in the theme catalog."""

    def __init__(self, theme_name: str, available: Optional[List[str]] = None):
        self.theme_name = theme_name
        self.available = list(available or [])
        super().__init__(theme_name)

    def __str__(self) -> str:
        message = f"Unknown theme: {self.theme_name}"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        return message


class ConfigError(ConversionError, ValueError):
    """A configuration file could not be used."""


@dataclass(frozen=True)
class Document:
    """Markdown source text and the directory its assets resolve against."""
    source: str
    base_dir: Path = field(default_factory=Path.cwd)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "Document":
        """Read a UTF-8 Markdown file once.

        Args:
            path: Path to the Markdown file

        Returns:
            Document whose base_dir is the file's absolute parent directory

        Raises:
            SourceNotFoundError: If the file does not exist
            SourceDecodeError: If the file is not valid UTF-8
        """
        path = Path(path)
        if not path.is_file():
            raise SourceNotFoundError(path)
        try:
            source = path.read_text(encoding='utf-8')
        except UnicodeDecodeError as e:
            raise SourceDecodeError(path, e.reason) from e
        return cls(
            source=source,
            base_dir=path.resolve().parent,
        )


@dataclass(frozen=True)
class ProcessingOptions:
    """Options for a single conversion. Immutable per invocation."""
    strip_frontmatter: bool = True
    strip_title: bool = True
    paragraph_spacing: bool = True
    attachments_dir: str = "attachments"
    theme: str = "wechat-default"
    inline_only: bool = False
    sanitize: bool = False

    @classmethod
    def from_flags(
        cls,
        theme: str = "wechat-default",
        inline_only: bool = False,
        sanitize: bool = False,
        attachments_dir: str = "attachments",
        keep_frontmatter: bool = False,
        keep_title: bool = False,
        paragraph_spacing: bool = True,
    ) -> "ProcessingOptions":
        """Build options from the command line's keep-style flags."""
        return cls(
            strip_frontmatter=not keep_frontmatter,
            strip_title=not keep_title,
            paragraph_spacing=paragraph_spacing,
            attachments_dir=attachments_dir,
            theme=theme,
            inline_only=inline_only,
            sanitize=sanitize,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProcessingOptions":
        """Build options from a mapping such as a parsed config file.

        Keys may use hyphens or underscores. keep_frontmatter and
        keep_title are accepted as the inverse of the strip flags.

        Raises:
            ConfigError: On unknown keys or values of the wrong type
        """
        known = {f.name: f for f in fields(cls)}
        values: Dict[str, Any] = {}

        for raw_key, value in data.items():
            key = str(raw_key).replace('-', '_')
            if key in ('keep_frontmatter', 'keep_title'):
                key = key.replace('keep_', 'strip_')
                value = not value if isinstance(value, bool) else value
            if key not in known:
                raise ConfigError(f"Unknown option: {raw_key}")
            expected = bool if known[key].type in (bool, 'bool') else str
            if not isinstance(value, expected):
                raise ConfigError(
                    f"Option {raw_key} must be {expected.__name__}, got {type(value).__name__}"
                )
            values[key] = value

        return cls(**values)

    def replace(self, **changes: Any) -> "ProcessingOptions":
        """Return a copy with some fields changed."""
        return replace(self, **changes)


def load_options(path: Union[str, Path]) -> ProcessingOptions:
    """Load ProcessingOptions from a YAML config file.

    An empty file yields the defaults.

    Raises:
        ConfigError: If the file is missing, not valid YAML, or not a mapping
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding='utf-8'))
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML in {path.name}: {e}") from e

    if data is None:
        return ProcessingOptions()
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path.name} must contain a mapping")

    return ProcessingOptions.from_dict(data)


@dataclass
class InlineReport:
    """What the asset inliner did with each local image reference."""
    inlined: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.inlined)
