#!/usr/bin/env python3
"""Estimate the word count of a markdown document against a length budget.

Prose is counted as whitespace-separated words. Code blocks are not read as
prose; each line of a code block counts as a fixed number of words instead.

Usage:
    python src/word_budget.py < README.md
    python src/word_budget.py --verbose < README.md
"""

import argparse
import copy
import logging
import sys
from dataclasses import dataclass
from typing import IO

import markdown
from bs4 import BeautifulSoup

import doc_settings


logger = logging.getLogger(__name__)

CODE_BLOCK_SELECTOR = "pre > code"


@dataclass(frozen=True)
class WordBudget:
    """Weighted word count of one document."""
    code_words: int
    prose_words: int
    code_blocks: int
    target: int

    @property
    def total(self) -> int:
        return self.code_words + self.prose_words

    @property
    def delta(self) -> int:
        # Negative when the document is under budget
        return self.total - self.target


def read_document(stream: IO) -> str:
    """Read the whole stream; byte streams are decoded as UTF-8."""
    data = stream.read()
    if isinstance(data, bytes):
        data = data.decode("utf-8")
    return data


def render_markdown(text: str) -> str:
    """Render markdown to HTML; fenced code blocks become `pre > code`."""
    return markdown.markdown(text, extensions=["fenced_code"])


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def code_block_lines(inner_html: str) -> int:
    """Count the lines of a code block from its inner HTML.

    The HTML is split as is, without unescaping entities. Trailing empty
    segments are dropped, so the newline that ends a block does not count
    as a line and an empty block has no lines.
    """
    lines = inner_html.split("\n")
    while lines and lines[-1] == "":
        lines.pop()
    return len(lines)


def count_code_words(soup: BeautifulSoup, code_line_weight: int) -> tuple[int, int]:
    """Weigh every code block by its line count.

    Returns (words, blocks). The tree is left untouched.
    """
    words = 0
    blocks = 0
    for code in soup.select(CODE_BLOCK_SELECTOR):
        lines = code_block_lines(code.decode_contents())
        logger.debug("Code block %d: %d lines", blocks + 1, lines)
        words += lines * code_line_weight
        blocks += 1
    return words, blocks


def count_prose_words(soup: BeautifulSoup) -> int:
    """Count whitespace-separated words outside of code blocks."""
    view = copy.copy(soup)
    # Collect first: detaching a block may also detach blocks nested in it
    fenced = [code.parent for code in view.select(CODE_BLOCK_SELECTOR)]
    for node in fenced:
        node.extract()
    return len(view.get_text().split())


def estimate(
    text: str,
    target: int = doc_settings.TARGET_WORDS,
    code_line_weight: int = doc_settings.CODE_LINE_WEIGHT,
) -> WordBudget:
    """Run the whole estimate for one markdown document."""
    soup = parse_html(render_markdown(text))
    code_words, code_blocks = count_code_words(soup, code_line_weight)
    prose_words = count_prose_words(soup)
    logger.debug(
        "%d code blocks weigh %d words, %d prose words",
        code_blocks, code_words, prose_words,
    )
    return WordBudget(
        code_words=code_words,
        prose_words=prose_words,
        code_blocks=code_blocks,
        target=target,
    )


def format_report(budget: WordBudget) -> list[str]:
    return [
        str(budget.total),
        f"You need to cut {budget.delta} words",
    ]


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        description="Estimate the word count of markdown read from stdin"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log details to stderr")

    args = parser.parse_args(argv)
    doc_settings.configure_logging("DEBUG" if args.verbose else doc_settings.LOG_LEVEL)

    stream = getattr(sys.stdin, "buffer", sys.stdin)
    text = read_document(stream)
    budget = estimate(text)

    for line in format_report(budget):
        print(line)


if __name__ == "__main__":
    main()
