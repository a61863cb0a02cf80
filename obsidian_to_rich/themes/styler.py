"""Apply a theme to rendered HTML.

Paste targets such as the WeChat editor throw away <style> blocks, so the
theme's rules are resolved per element and written into style attributes.
Document mode additionally wraps the fragment in a standalone page.
"""

from html import escape
from typing import Dict, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag

from obsidian_to_rich.themes.catalog import Theme, get_theme

MODES = ('document', 'inline')

DOCUMENT_TEMPLATE = """<!DOCTYPE html>
<html lang="zh-CN">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{title}</title>
<style>
body {{
  max-width: 720px;
  margin: 0 auto;
  padding: 20px;
  background-color: #ffffff;
}}

{css}
</style>
</head>
<body>
{body}
</body>
</html>
"""


def parse_style(style: str) -> Dict[str, str]:
    """Parse a style attribute into an ordered property -> value dict."""
    declarations: Dict[str, str] = {}
    for declaration in style.split(';'):
        prop, sep, value = declaration.partition(':')
        prop = prop.strip().lower()
        if sep and prop:
            declarations[prop] = value.strip()
    return declarations


def format_style(declarations: Dict[str, str]) -> str:
    return ' '.join(f"{prop}: {value};" for prop, value in declarations.items())


def inline_styles(html: str, theme: Theme) -> str:
    """Attach the theme's resolved declarations to every matching element.

    Rules are applied in theme order, so a later rule overrides an earlier
    one on the same property. A style attribute already on the element
    overrides the theme.

    Args:
        html: HTML fragment
        theme: Theme to apply

    Returns:
        The fragment with style attributes added
    """
    soup = BeautifulSoup(html, 'html.parser')
    matched: Dict[int, Tuple[Tag, Dict[str, str]]] = {}

    for rule in theme.rules:
        for element in soup.select(rule.selector):
            _, declarations = matched.setdefault(id(element), (element, {}))
            declarations.update(rule.declarations)

    for element, declarations in matched.values():
        existing = element.get('style')
        if existing:
            declarations.update(parse_style(str(existing)))
        element['style'] = format_style(declarations)

    return soup.decode(formatter='html')


def build_document(body: str, theme: Theme, title: str = "Article") -> str:
    """Wrap an HTML fragment in a complete page with the theme stylesheet."""
    return DOCUMENT_TEMPLATE.format(
        title=escape(title),
        css=theme.to_css(),
        body=body,
    )


def apply_theme(html: str, theme_name: str, mode: str = 'document', title: str = "Article") -> str:
    """Style rendered HTML with a named theme.

    Args:
        html: Rendered HTML fragment
        theme_name: Name of a theme in the catalog
        mode: 'document' for a standalone page, 'inline' for the styled fragment only
        title: Page title used in document mode

    Returns:
        Styled HTML

    Raises:
        UnknownThemeError: If theme_name is not in the catalog
        ValueError: If mode is not recognized
    """
    if mode not in MODES:
        raise ValueError(f"Unknown mode: {mode} (expected one of: {', '.join(MODES)})")

    theme = get_theme(theme_name)
    styled = inline_styles(html, theme)

    if mode == 'inline':
        return styled
    return build_document(styled, theme, title)
