"""HTML -> markdown driver: detection gate, parse, render, fallback."""

from __future__ import annotations

import logging
from pathlib import Path

from h2md._postprocess import clean_markdown
from h2md.errors import ConversionError
from h2md.parser import parse
from h2md.render import RenderOptions, render
from h2md.tables import HTML_MARKERS

logger = logging.getLogger(__name__)


def looks_like_html(text: str) -> bool:
    """Cheap containment check for common structural tags."""
    return any(marker in text for marker in HTML_MARKERS)


def html_to_markdown(html: str, options: RenderOptions | None = None) -> str:
    """Parse and render without any fallback.

    Pipeline:
    1. parse() builds the tree (ParseError on broken structure)
    2. render() walks it (MissingAttributeError only in strict mode)
    3. clean_markdown() tidies the result if options.clean

    Raises:
        ConversionError: from either stage.
    """
    options = options or RenderOptions()
    markdown = render(parse(html), options)
    if options.clean:
        markdown = clean_markdown(markdown)
    return markdown


def convert_html_to_markdown(html: str, options: RenderOptions | None = None) -> str:
    """Convert HTML to markdown, returning the input unchanged on failure.

    Never raises: text that is not HTML, HTML that fails to parse, and
    documents nested too deeply to render come back as-is so callers can
    compare output with input.
    """
    if not looks_like_html(html):
        logger.debug("No structural tags found, passing input through")
        return html

    try:
        return html_to_markdown(html, options)
    except ConversionError as e:
        logger.debug("Conversion failed (%s): %s", e.kind.value, e)
        return html
    except RecursionError:
        logger.debug("Document nested too deeply to render, passing input through")
        return html


def convert_file(
    path: str | Path,
    encoding: str = "utf-8",
    options: RenderOptions | None = None,
) -> str:
    """Read an HTML file and convert it with the fail-soft driver."""
    html = Path(path).read_text(encoding=encoding)
    return convert_html_to_markdown(html, options)
