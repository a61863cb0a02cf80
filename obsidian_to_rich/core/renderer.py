"""Markdown to HTML rendering tuned for rich-text paste targets."""

import re
from typing import Any, Sequence

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml
from markdown_it.token import Token
from markdown_it.utils import OptionsDict
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

ROOT_CLASS = "markdown-body"
CODE_WRAPPER_CLASS = "code-wrapper"
TABLE_WRAPPER_CLASS = "table-wrapper"
CODE_LINE_STYLE = "margin: 0; padding: 0;"

CODE_ELEMENT_PATTERN = re.compile(r'<code([^>]*)>(.*?)</code>', re.DOTALL)
LEADING_SPACES_PATTERN = re.compile(r'^ +')
SPACE_RUN_PATTERN = re.compile(r' {2,}')


def _nbsp(match: re.Match) -> str:
    return '&nbsp;' * len(match.group(0))


def wrap_code_lines(code: str) -> str:
    """Wrap each line of escaped code in its own block container.

    Paste targets drop <br> and white-space: pre, so every line becomes a
    <div> and significant spaces become &nbsp;.

    Args:
        code: HTML-escaped contents of a <code> element

    Returns:
        The lines joined as <div> elements, with no newlines left
    """
    lines = code.split('\n')
    if lines and not lines[-1].strip():
        lines = lines[:-1]

    wrapped = []
    for line in lines:
        if not line.strip():
            display = '&nbsp;'
        else:
            display = LEADING_SPACES_PATTERN.sub(_nbsp, line)
            display = SPACE_RUN_PATTERN.sub(_nbsp, display)
        wrapped.append(f'<div style="{CODE_LINE_STYLE}">{display}</div>')
    return ''.join(wrapped)


def _wrap_code_block(html: str) -> str:
    def replace_code(match: re.Match) -> str:
        return f"<code{match.group(1)}>{wrap_code_lines(match.group(2))}</code>"

    fixed = CODE_ELEMENT_PATTERN.sub(replace_code, html)
    return f'<section class="{CODE_WRAPPER_CLASS}">{fixed.rstrip()}</section>\n'


def _render_fence(self, tokens: Sequence[Token], idx: int, options: OptionsDict, env: Any) -> str:
    return _wrap_code_block(self.fence(tokens, idx, options, env))


def _render_code_block(self, tokens: Sequence[Token], idx: int, options: OptionsDict, env: Any) -> str:
    return _wrap_code_block(self.code_block(tokens, idx, options, env))


def _render_table_open(self, tokens: Sequence[Token], idx: int, options: OptionsDict, env: Any) -> str:
    return f'<section class="{TABLE_WRAPPER_CLASS}">' + self.renderToken(tokens, idx, options, env)


def _render_table_close(self, tokens: Sequence[Token], idx: int, options: OptionsDict, env: Any) -> str:
    return self.renderToken(tokens, idx, options, env).rstrip() + '</section>\n'


def _render_image(self, tokens: Sequence[Token], idx: int, options: OptionsDict, env: Any) -> str:
    token = tokens[idx]
    src = str(token.attrGet('src') or '')
    alt = self.renderInlineAsText(token.children or [], options, env)
    title = token.attrGet('title')

    html = f'<img src="{escapeHtml(src)}" alt="{escapeHtml(alt)}"'
    if title:
        html += f' title="{escapeHtml(str(title))}"'
    return html + ' />'


def _render_link_open(self, tokens: Sequence[Token], idx: int, options: OptionsDict, env: Any) -> str:
    token = tokens[idx]
    href = str(token.attrGet('href') or '')
    title = token.attrGet('title')

    html = f'<a href="{escapeHtml(href)}"'
    if title:
        html += f' title="{escapeHtml(str(title))}"'
    return html + '>'


class MarkdownRenderer:
    """Renders standard Markdown to an HTML fragment.

    Each instance owns its own MarkdownIt parser, so renderers never share
    configuration.
    """

    def __init__(self, footnotes: bool = True, task_lists: bool = True):
        """Initialize MarkdownRenderer.

        Args:
            footnotes: Enable [^1] footnote syntax
            task_lists: Enable - [ ] / - [x] task list items
        """
        self.md = self._build_parser(footnotes, task_lists)

    @staticmethod
    def _build_parser(footnotes: bool, task_lists: bool) -> MarkdownIt:
        md = MarkdownIt('commonmark', {'html': True, 'breaks': False, 'typographer': False})
        md.enable(['table', 'strikethrough'])
        if footnotes:
            md.use(footnote_plugin)
        if task_lists:
            md.use(tasklists_plugin)

        md.add_render_rule('fence', _render_fence)
        md.add_render_rule('code_block', _render_code_block)
        md.add_render_rule('table_open', _render_table_open)
        md.add_render_rule('table_close', _render_table_close)
        md.add_render_rule('image', _render_image)
        md.add_render_rule('link_open', _render_link_open)
        return md

    def render(self, source: str) -> str:
        """Render Markdown inside the root container element."""
        body = self.md.render(source)
        return f'<div class="{ROOT_CLASS}">{body}</div>'


def render(source: str) -> str:
    """Render Markdown with a freshly configured renderer."""
    return MarkdownRenderer().render(source)
