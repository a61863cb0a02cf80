"""Command line entry point for Obsidian to Rich."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from obsidian_to_rich import __version__
from obsidian_to_rich.core.models import ConversionError, ProcessingOptions, load_options
from obsidian_to_rich.core.pipeline import Converter
from obsidian_to_rich.themes.catalog import DEFAULT_THEME, list_themes


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='obsidian-to-rich',
        description='Convert Obsidian Markdown to rich-text HTML',
    )
    parser.add_argument('input', nargs='?', help='Input Obsidian Markdown file path')
    parser.add_argument('-t', '--theme', help=f'Theme name (default: {DEFAULT_THEME})')
    parser.add_argument('-i', '--inline-only', action='store_true',
                        help='Generate inline HTML only (no DOCTYPE/html/body tags)')
    parser.add_argument('-s', '--sanitize', action='store_true',
                        help='Clean HTML for better platform compatibility')
    parser.add_argument('-a', '--attachments-dir',
                        help='Attachments directory relative to input file (default: attachments)')
    parser.add_argument('--keep-frontmatter', action='store_true', help='Keep YAML frontmatter in output')
    parser.add_argument('--keep-title', action='store_true', help='Keep leading H1 title in output')
    parser.add_argument('--no-paragraph-spacing', dest='paragraph_spacing', action='store_false', default=None,
                        help='Do not insert extra blank lines between plain text lines')
    parser.add_argument('-o', '--output-dir', default='outputs', help='Directory for the HTML file (default: outputs)')
    parser.add_argument('-c', '--config', help='YAML file with default options')
    parser.add_argument('-l', '--list-themes', action='store_true', help='List all available themes')
    parser.add_argument('-V', '--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def resolve_options(args: argparse.Namespace) -> ProcessingOptions:
    """Combine config file options with explicit command line flags.

    Flags given on the command line win over the config file.
    """
    options = load_options(args.config) if args.config else ProcessingOptions()

    changes = {}
    if args.theme is not None:
        changes['theme'] = args.theme
    if args.attachments_dir is not None:
        changes['attachments_dir'] = args.attachments_dir
    if args.inline_only:
        changes['inline_only'] = True
    if args.sanitize:
        changes['sanitize'] = True
    if args.keep_frontmatter:
        changes['strip_frontmatter'] = False
    if args.keep_title:
        changes['strip_title'] = False
    if args.paragraph_spacing is False:
        changes['paragraph_spacing'] = False

    return options.replace(**changes)


def print_themes(selected: Optional[str] = None) -> None:
    print("\nAvailable themes:")
    for theme in list_themes():
        marker = '✓' if theme == selected else ' '
        print(f"  {marker} {theme}")
    print("")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        options = resolve_options(args)

        if args.list_themes:
            print_themes(options.theme)
            return 0

        if not args.input:
            print("Error: Input file path is required.", file=sys.stderr)
            print("\nExample: obsidian-to-rich article.md")
            return 1

        converter = Converter(options)

        input_path = Path(args.input)
        print(f"Reading {input_path}...")
        print(f"Applying theme: {options.theme}...")
        html = converter.convert_file(input_path)

        output_dir = Path(args.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path = output_dir / f"{input_path.stem}.html"
        output_path.write_text(html, encoding='utf-8')
    except ConversionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"HTML saved to: {output_path}")
    print("\nHow to use:")
    print(f"  1. Open {output_path} in your browser")
    print("  2. Select all content (Cmd+A / Ctrl+A)")
    print("  3. Copy (Cmd+C / Ctrl+C)")
    print("  4. Paste into WeChat Editor or other rich-text editors")
    return 0


if __name__ == '__main__':
    sys.exit(main())
