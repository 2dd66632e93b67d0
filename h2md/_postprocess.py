"""Markdown post-processing pipeline.

Optional cleanup for renderer artifacts: empty links and images left by
missing attributes, trailing whitespace, and long runs of blank lines.
"""

from __future__ import annotations

import re


def strip_empty_image_links(markdown: str) -> str:
    """Remove empty markdown links like [](url), ![](url) and ![]()."""
    markdown = re.sub(r"!\[\]\([^)]*\)\n?", "", markdown)
    markdown = re.sub(r"(?<!!)\[\]\([^)]*\)", "", markdown)
    return markdown


def strip_trailing_whitespace(markdown: str) -> str:
    """Remove trailing spaces and tabs from every line."""
    return "\n".join(line.rstrip() for line in markdown.split("\n"))


def collapse_blank_lines(markdown: str) -> str:
    """Collapse 3+ consecutive blank lines down to 2."""
    return re.sub(r"\n{4,}", "\n\n\n", markdown)


def clean_markdown(markdown: str) -> str:
    """Run all markdown post-processing fixups.

    Order matters:
    1. Strip empty links/images (may leave blank lines behind)
    2. Strip trailing whitespace (turns whitespace-only lines blank)
    3. Collapse excess blank lines
    """
    if not markdown:
        return markdown

    markdown = strip_empty_image_links(markdown)
    markdown = strip_trailing_whitespace(markdown)
    markdown = collapse_blank_lines(markdown)
    return markdown.strip()
