"""Theme catalog for Obsidian to Rich.

Themes are YAML files bundled in the data/ directory of this package. The
catalog is read once per process and never modified afterwards.
"""

from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

import yaml

from obsidian_to_rich.core.models import UnknownThemeError

DEFAULT_THEME = "wechat-default"


@dataclass(frozen=True)
class StyleRule:
    """A CSS selector and its declarations, in declaration order."""
    selector: str
    declarations: Tuple[Tuple[str, str], ...]

    def to_css(self) -> str:
        body = '\n'.join(f"  {prop}: {value};" for prop, value in self.declarations)
        return f"{self.selector} {{\n{body}\n}}"


@dataclass(frozen=True)
class Theme:
    """Named, ordered set of style rules. Later rules win on conflicts."""
    name: str
    description: str
    rules: Tuple[StyleRule, ...]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Theme":
        """Build a theme from its parsed YAML definition."""
        rules = []
        for rule in data.get('rules') or []:
            style = rule.get('style') or {}
            declarations = tuple((str(k), str(v)) for k, v in style.items())
            rules.append(StyleRule(selector=str(rule['selector']), declarations=declarations))

        return cls(
            name=str(data['name']),
            description=str(data.get('description', '')),
            rules=tuple(rules),
        )

    def to_css(self) -> str:
        """Render the theme as stylesheet text."""
        return '\n\n'.join(rule.to_css() for rule in self.rules)


@lru_cache(maxsize=None)
def load_catalog() -> Mapping[str, Theme]:
    """Load every bundled theme, keyed by name."""
    themes: Dict[str, Theme] = {}
    data_dir = resources.files('obsidian_to_rich.themes') / 'data'

    for entry in sorted(data_dir.iterdir(), key=lambda e: e.name):
        if not entry.name.endswith('.yaml'):
            continue
        theme = Theme.from_dict(yaml.safe_load(entry.read_text(encoding='utf-8')))
        themes[theme.name] = theme

    return MappingProxyType(themes)


def list_themes() -> List[str]:
    """Return the names of all available themes, sorted."""
    return sorted(load_catalog())


def has_theme(name: str) -> bool:
    return name in load_catalog()


def get_theme(name: str) -> Theme:
    """Look up a theme by name.

    Raises:
        UnknownThemeError: If no theme has this name
    """
    catalog = load_catalog()
    if name not in catalog:
        raise UnknownThemeError(name, sorted(catalog))
    return catalog[name]
