"""Tests for the Converter pipeline."""

import base64
import re

import pytest

from obsidian_to_rich.core.models import Document, ProcessingOptions, SourceNotFoundError, UnknownThemeError
from obsidian_to_rich.core.pipeline import Converter, convert_markdown

PNG_BYTES = b"\x89PNG\r\n\x1a\nnot-really-a-png"


class TestConverter:
    """End-to-end tests for Converter."""

    @pytest.fixture
    def vault(self, tmp_path):
        attachments = tmp_path / "attachments"
        attachments.mkdir()
        (attachments / "diagram one.png").write_bytes(PNG_BYTES)
        return tmp_path

    def _write_note(self, vault, content: str, name: str = "note.md"):
        path = vault / name
        path.write_text(content, encoding="utf-8")
        return path

    def test_default_conversion(self):
        html = convert_markdown("# Title\n\nHello  world.")

        assert html.startswith("<!DOCTYPE html>")
        assert html.count("<html") == 1
        assert "<h1" not in html
        assert "Hello  world." in html
        assert "Hello&nbsp;&nbsp;world." not in html

    def test_frontmatter_and_title_stripped(self):
        source = "---\ntags: [a]\n---\n\n# My Note\n\nBody text"
        html = convert_markdown(source, options=ProcessingOptions(inline_only=True))

        assert "tags" not in html
        assert "My Note" not in html
        assert "Body text" in html

    def test_keep_frontmatter_and_title(self):
        options = ProcessingOptions(strip_frontmatter=False, strip_title=False, inline_only=True)
        html = convert_markdown("---\nkey: v\n---\n\n# My Note\n\nBody", options=options)

        assert "key: v" in html
        assert "My Note</h1>" in html

    def test_paragraph_spacing_splits_lines(self):
        html = convert_markdown("first line\nsecond line", options=ProcessingOptions(inline_only=True))
        assert len(re.findall(r"<p[ >]", html)) == 2

    def test_paragraph_spacing_disabled(self):
        options = ProcessingOptions(inline_only=True, paragraph_spacing=False)
        html = convert_markdown("first line\nsecond line", options=options)
        assert len(re.findall(r"<p[ >]", html)) == 1

    def test_wikilink_image_inlined(self, vault):
        path = self._write_note(vault, "Look:\n\n![[diagram one.png|Figure 1]]\n")

        html = Converter(ProcessingOptions(inline_only=True)).convert_file(path)

        match = re.search(r'src="data:image/png;base64,([^"]+)"', html)
        assert match
        assert base64.b64decode(match.group(1)) == PNG_BYTES
        assert 'alt="Figure 1"' in html

    def test_parenthesised_filename_inlined(self, vault):
        (vault / "attachments" / "shot (1.png").write_bytes(PNG_BYTES)
        path = self._write_note(vault, "![[shot (1.png]]")

        html = Converter(ProcessingOptions(inline_only=True)).convert_file(path)

        match = re.search(r'src="data:image/png;base64,([^"]+)"', html)
        assert match
        assert base64.b64decode(match.group(1)) == PNG_BYTES
        assert "![" not in html

    def test_missing_image_kept(self, vault, capsys):
        path = self._write_note(vault, "![[absent.png]]")

        html = Converter(ProcessingOptions(inline_only=True)).convert_file(path)

        assert 'src="attachments/absent.png"' in html
        assert "Warning: Image file not found" in capsys.readouterr().out

    def test_inline_only_has_no_style_block(self):
        html = convert_markdown("Text", options=ProcessingOptions(inline_only=True))

        assert "<style" not in html
        assert "<html" not in html
        assert html.startswith('<div class="markdown-body" style="')

    def test_document_title_from_file_name(self, vault):
        path = self._write_note(vault, "Body", name="Weekly Report.md")
        html = Converter().convert_file(path)
        assert "<title>Weekly Report</title>" in html

    def test_sanitize_runs_last(self):
        source = "Text\n\n<script>alert(1)</script>\n\n<p onclick=\"x()\">para</p>"
        options = ProcessingOptions(inline_only=True, sanitize=True)

        html = convert_markdown(source, options=options)

        assert "<script" not in html
        assert "onclick" not in html
        assert "para" in html

    def test_sanitize_in_document_mode_keeps_inline_styles(self):
        html = convert_markdown("Text", options=ProcessingOptions(sanitize=True))

        assert "<style" not in html
        assert '<div class="markdown-body" style="' in html

    def test_code_block_lines(self):
        html = convert_markdown("```\nline one\nline two\n```", options=ProcessingOptions(inline_only=True))

        assert '<div style="margin: 0; padding: 0;">line one</div>' in html
        assert '<div style="margin: 0; padding: 0;">line two</div>' in html

    def test_each_theme_converts(self):
        for theme in ("wechat-default", "github", "elegant", "minimal"):
            html = convert_markdown("Text", options=ProcessingOptions(theme=theme, inline_only=True))
            assert "Text" in html

    def test_unknown_theme_fails_on_construction(self):
        with pytest.raises(UnknownThemeError):
            Converter(ProcessingOptions(theme="no-such-theme"))

    def test_missing_source_file(self, tmp_path):
        with pytest.raises(SourceNotFoundError):
            Converter().convert_file(tmp_path / "missing.md")

    def test_convert_document(self, vault):
        document = Document(source="![[diagram one.png]]", base_dir=vault)

        html = Converter(ProcessingOptions(inline_only=True)).convert(document)

        assert "data:image/png;base64," in html

    def test_mode(self):
        assert Converter().mode == "document"
        assert Converter(ProcessingOptions(inline_only=True)).mode == "inline"
