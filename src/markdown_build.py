#!/usr/bin/env python3
"""Render a markdown file to HTML, optionally through a page template.

The template receives the rendered HTML at its `{{{markdown}}}` placeholder;
`{{markdown}}` inserts it HTML-escaped, as Handlebars does. With --watch
the page is rebuilt whenever a markdown file next to the source changes.

Usage:
    python src/markdown_build.py
    python src/markdown_build.py --source README.md --dest README.html --template template.html
    python src/markdown_build.py --watch
"""

import argparse
import html
import logging
import re
import sys
import time
from pathlib import Path
from typing import Callable

import markdown

import doc_settings


logger = logging.getLogger(__name__)

GENERATED_BANNER = "<!-- THIS IS A GENERATED FILE - DO NOT EDIT -->"
# Triple braces insert raw HTML, double braces insert it escaped
PLACEHOLDER = re.compile(r"\{\{\{\s*markdown\s*\}\}\}|\{\{\s*markdown\s*\}\}")

# GitHub-flavoured subset
GFM_EXTENSIONS = ["fenced_code", "tables"]


def render_page(markdown_text: str, template: str | None = None) -> str:
    """Render markdown and substitute it into the template, if any."""
    body = markdown.markdown(markdown_text, extensions=GFM_EXTENSIONS)
    if template is None:
        return body

    if not PLACEHOLDER.search(template):
        raise ValueError("Template does not contain a {{{markdown}}} placeholder")

    def substitute(match: re.Match) -> str:
        if match.group(0).startswith("{{{"):
            return body
        return html.escape(body)

    page = PLACEHOLDER.sub(substitute, template)
    return "\n".join([GENERATED_BANNER, page])


def build(source: Path, dest: Path, template_path: Path | None = None) -> Path:
    """Build one page and return the path written."""
    if not source.exists():
        raise FileNotFoundError(f"File not found: {source}")

    template = None
    if template_path is not None:
        if template_path.exists():
            template = template_path.read_text(encoding='utf-8')
        else:
            logger.warning("Template %s not found, writing bare HTML", template_path)

    content = render_page(source.read_text(encoding='utf-8'), template)

    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_text(content, encoding='utf-8')
    logger.info("Built %s from %s", dest, source)
    return dest


def snapshot(directory: Path, pattern: str = "*.md") -> dict[Path, float]:
    """Modification times of the files matching `pattern`.

    Files removed between listing and stat are left out.
    """
    mtimes = {}
    for path in sorted(directory.glob(pattern)):
        try:
            mtimes[path] = path.stat().st_mtime
        except FileNotFoundError:
            continue
    return mtimes


def watch(
    directory: Path,
    rebuild: Callable[[], object],
    interval: float = doc_settings.WATCH_INTERVAL,
    max_cycles: int | None = None,
) -> int:
    """Poll `directory` for markdown changes and call `rebuild` on each.

    Runs until interrupted, or for `max_cycles` polls. Returns the number
    of rebuilds attempted.
    """
    rebuilds = 0
    cycles = 0
    previous = snapshot(directory)

    while max_cycles is None or cycles < max_cycles:
        time.sleep(interval)
        cycles += 1

        current = snapshot(directory)
        if current == previous:
            continue

        changed = sorted((set(current) ^ set(previous)) | {
            path for path in current.keys() & previous.keys()
            if current[path] != previous[path]
        })
        logger.info("Changed: %s", ", ".join(str(path) for path in changed))
        previous = current

        rebuilds += 1
        try:
            rebuild()
        except (OSError, ValueError) as e:
            logger.error("Rebuild failed: %s", e)

    return rebuilds


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        description="Render markdown to HTML",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Build README.html from README.md
    python src/markdown_build.py

    # Use a page template
    python src/markdown_build.py --template template.html

    # Rebuild on every change
    python src/markdown_build.py --watch
        """
    )
    parser.add_argument("--source", type=Path, default=Path(doc_settings.MARKDOWN_SOURCE),
                        help="Markdown file to render")
    parser.add_argument("--dest", type=Path, default=Path(doc_settings.MARKDOWN_DEST),
                        help="Output path for the HTML page")
    parser.add_argument("--template", type=Path, default=Path(doc_settings.MARKDOWN_TEMPLATE),
                        help="HTML template with a {{{markdown}}} placeholder")
    parser.add_argument("--watch", action="store_true",
                        help="Rebuild when markdown files change")
    parser.add_argument("--interval", type=float, default=doc_settings.WATCH_INTERVAL,
                        help="Seconds between change checks in watch mode")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log details to stderr")

    args = parser.parse_args(argv)
    doc_settings.configure_logging("DEBUG" if args.verbose else doc_settings.LOG_LEVEL)

    if not args.source.exists():
        print(f"Error: File not found: {args.source}", file=sys.stderr)
        sys.exit(1)

    dest = build(args.source, args.dest, args.template)
    print(f"Built: {dest}")

    if args.watch:
        print(f"Watching {args.source.parent.resolve()} for changes (Ctrl-C to stop)")
        try:
            watch(
                args.source.parent,
                lambda: print(f"Built: {build(args.source, args.dest, args.template)}"),
                interval=args.interval,
            )
        except KeyboardInterrupt:
            print("\nStopped watching.")


if __name__ == "__main__":
    main()
