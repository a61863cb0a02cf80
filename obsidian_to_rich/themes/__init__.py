"""Themes and styling for Obsidian to Rich."""

from obsidian_to_rich.themes.catalog import DEFAULT_THEME, StyleRule, Theme, get_theme, has_theme, list_themes
from obsidian_to_rich.themes.styler import apply_theme

__all__ = [
    "DEFAULT_THEME",
    "StyleRule",
    "Theme",
    "get_theme",
    "has_theme",
    "list_themes",
    "apply_theme",
]
