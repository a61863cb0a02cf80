"""Tests for MarkdownRenderer."""

import pytest

from obsidian_to_rich.core.renderer import MarkdownRenderer, render, wrap_code_lines

LINE = '<div style="margin: 0; padding: 0;">'


class TestWrapCodeLines:
    """Tests for per-line code wrapping."""

    def test_each_line_wrapped(self):
        assert wrap_code_lines("a\nb\n") == f"{LINE}a</div>{LINE}b</div>"

    def test_blank_line_placeholder(self):
        assert wrap_code_lines("a\n\nb\n") == f"{LINE}a</div>{LINE}&nbsp;</div>{LINE}b</div>"

    def test_leading_spaces_become_nbsp(self):
        assert wrap_code_lines("  x\n") == f"{LINE}&nbsp;&nbsp;x</div>"

    def test_interior_space_runs_become_nbsp(self):
        assert wrap_code_lines("x = 1   # c\n") == f"{LINE}x = 1&nbsp;&nbsp;&nbsp;# c</div>"

    def test_single_spaces_kept(self):
        assert wrap_code_lines("a b c") == f"{LINE}a b c</div>"


class TestMarkdownRenderer:
    """Tests for rendering Markdown to HTML."""

    @pytest.fixture
    def renderer(self):
        return MarkdownRenderer()

    def test_root_container(self, renderer):
        html = renderer.render("Hello")
        assert html.startswith('<div class="markdown-body">')
        assert html.endswith('</div>')
        assert "<p>Hello</p>" in html

    def test_paragraph_whitespace_untouched(self, renderer):
        html = renderer.render("Hello  world.")
        assert "Hello  world." in html
        assert "&nbsp;" not in html

    def test_single_newline_is_not_a_break(self, renderer):
        html = renderer.render("first\nsecond")
        assert "<br" not in html

    def test_fenced_code_block(self, renderer):
        html = renderer.render("```python\ndef f():\n    return 1\n```")
        expected = (
            '<section class="code-wrapper"><pre><code class="language-python">'
            f'{LINE}def f():</div>'
            f'{LINE}&nbsp;&nbsp;&nbsp;&nbsp;return 1</div>'
            '</code></pre></section>'
        )
        assert expected in html

    def test_code_block_has_no_newlines_inside(self, renderer):
        html = renderer.render("```\na\n\nb\n```")
        code = html.split("<code>", 1)[1].split("</code>", 1)[0]
        assert "\n" not in code
        assert f"{LINE}&nbsp;</div>" in code

    def test_code_is_escaped(self, renderer):
        html = renderer.render("```\n<b>&</b>\n```")
        assert "&lt;b&gt;&amp;&lt;/b&gt;" in html

    def test_indented_code_block(self, renderer):
        html = renderer.render("Text\n\n    indented code\n")
        assert '<section class="code-wrapper"><pre><code>' in html
        assert f"{LINE}indented code</div>" in html

    def test_inline_code_not_wrapped(self, renderer):
        html = renderer.render("Use `a  b` here")
        assert "<code>a  b</code>" in html
        assert "code-wrapper" not in html

    def test_table_wrapper(self, renderer):
        html = renderer.render("| a | b |\n| --- | --- |\n| 1 | 2 |")
        assert '<section class="table-wrapper"><table>' in html
        assert "</table></section>" in html
        assert "<td>1</td>" in html

    def test_image(self, renderer):
        html = renderer.render("![alt text](pic.png)")
        assert '<img src="pic.png" alt="alt text" />' in html

    def test_image_with_title(self, renderer):
        html = renderer.render('![alt](pic.png "Caption")')
        assert '<img src="pic.png" alt="alt" title="Caption" />' in html

    def test_percent_encoded_image_src_kept(self, renderer):
        html = renderer.render("![my photo](attachments/my%20photo.png)")
        assert 'src="attachments/my%20photo.png"' in html

    def test_link(self, renderer):
        html = renderer.render("[site](https://example.com)")
        assert '<a href="https://example.com">site</a>' in html

    def test_link_with_title(self, renderer):
        html = renderer.render('[site](https://example.com "Example")')
        assert '<a href="https://example.com" title="Example">site</a>' in html

    def test_attribute_values_escaped(self, renderer):
        html = renderer.render('![a "quoted" alt](pic.png)')
        assert 'alt="a &quot;quoted&quot; alt"' in html

    def test_ordered_list_keeps_start(self, renderer):
        html = renderer.render("3. three\n4. four")
        assert '<ol start="3">' in html

    def test_strikethrough(self, renderer):
        assert "<s>gone</s>" in renderer.render("~~gone~~")

    def test_task_list(self, renderer):
        html = renderer.render("- [x] done\n- [ ] todo")
        assert 'type="checkbox"' in html
        assert 'checked="checked"' in html

    def test_raw_html_passes_through(self, renderer):
        html = renderer.render('<span class="note">hi</span>')
        assert '<span class="note">hi</span>' in html

    def test_malformed_markdown_is_literal(self, renderer):
        html = renderer.render("[unclosed](\n\n**bold")
        assert "[unclosed](" in html
        assert "**bold" in html


class TestRenderFunction:
    """Tests for the module level render()."""

    def test_render_matches_renderer(self):
        source = "# Title\n\n- item\n\n```\ncode\n```"
        assert render(source) == MarkdownRenderer().render(source)

    def test_deterministic(self):
        source = "Text with ![img](a.png) and [link](b.html)"
        assert render(source) == render(source)

    def test_renderers_do_not_share_parsers(self):
        assert MarkdownRenderer().md is not MarkdownRenderer().md
