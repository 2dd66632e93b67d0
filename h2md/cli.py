"""h2md CLI - Click command definition and main entry point."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel

from h2md.convert import convert_html_to_markdown, html_to_markdown
from h2md.errors import ConversionError, ParseError
from h2md.output import dump_tree, save_markdown, save_tree
from h2md.parser import parse
from h2md.render import RenderOptions

console = Console(stderr=True)


@click.command()
@click.argument("source")
@click.option("-o", "--output", "output_path", type=click.Path(), default=None,
              help="Output file or directory. Omit for stdout.")
@click.option("--encoding", default="utf-8", help="Input encoding (default: utf-8)")
@click.option("--strict", is_flag=True,
              help="Fail on malformed HTML or missing attributes instead of passing input through")
@click.option("--refs", is_flag=True, help="Render links as numbered references")
@click.option("--clean", is_flag=True, help="Tidy blank lines and empty links")
@click.option("--indent", default=None, type=click.IntRange(0, 16),
              help="Spaces per nested list level (default: one tab)")
@click.option("--tree", is_flag=True, help="Print the parsed tree as JSON instead of markdown")
@click.option("-v", "--verbose", is_flag=True, help="Verbose progress output")
def main(
    source: str,
    output_path: str | None,
    encoding: str,
    strict: bool,
    refs: bool,
    clean: bool,
    indent: int | None,
    tree: bool,
    verbose: bool,
):
    """Convert an HTML file to markdown.

    SOURCE is a file path, or - to read from stdin.

    \b
    Examples:
        h2md page.html                   # markdown to stdout
        h2md page.html -o out/           # save out/page.md
        cat page.html | h2md -           # read stdin
        h2md page.html --refs            # numbered link references
        h2md page.html --strict          # report parse errors
        h2md page.html --tree            # dump the parsed tree
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    html, stem = _read_source(source, encoding)

    if verbose:
        mode_label = "tree" if tree else "markdown"
        if strict:
            mode_label += " [strict]"
        console.print(Panel(
            f"[bold]h2md - HTML to Markdown[/bold]\n{source}\nMode: {mode_label}",
            expand=False,
        ))

    if tree:
        _handle_tree(html, stem, output_path)
        return

    options = RenderOptions(
        strict=strict,
        indent="\t" if indent is None else " " * indent,
        link_style="reference" if refs else "inline",
        clean=clean,
    )

    if strict:
        try:
            markdown = html_to_markdown(html, options)
        except ConversionError as e:
            raise click.ClickException(f"{e.kind.value}: {e}")
    else:
        markdown = convert_html_to_markdown(html, options)
        if verbose and markdown == html:
            console.print(
                "[yellow]Input passed through unchanged (not HTML or failed to parse)[/yellow]",
            )

    if output_path:
        out = _resolve_output(output_path, stem, ".md")
        save_markdown(markdown, out)
        console.print(f"[green]Saved:[/green] {out}")
    else:
        click.echo(markdown)


def _read_source(source: str, encoding: str) -> tuple[str, str]:
    """Return the input text and a filename stem for derived outputs."""
    if source == "-":
        return click.get_text_stream("stdin", encoding=encoding).read(), "stdin"

    source_path = Path(source)
    if not source_path.is_file():
        raise click.ClickException(f"Source must be an existing file or '-': {source}")
    try:
        return source_path.read_text(encoding=encoding), source_path.stem
    except UnicodeDecodeError as e:
        raise click.ClickException(f"Cannot decode {source} as {encoding}: {e}")


def _resolve_output(output_path: str, stem: str, suffix: str) -> Path:
    out = Path(output_path)
    if out.is_dir() or output_path.endswith("/"):
        out.mkdir(parents=True, exist_ok=True)
        out = out / f"{stem}{suffix}"
    return out


def _handle_tree(html: str, stem: str, output_path: str | None) -> None:
    """Dump the parsed tree; a tree only exists for well-formed input."""
    try:
        root = parse(html)
    except ParseError as e:
        raise click.ClickException(f"{e.kind.value}: {e}")

    if output_path:
        out = _resolve_output(output_path, stem, ".json")
        save_tree(root, out)
        console.print(f"[green]Saved:[/green] {out}")
    else:
        click.echo(dump_tree(root).decode())


if __name__ == "__main__":
    main()
