"""Blog CLI - lint, inspect and export blog posts."""

from __future__ import annotations

import re
from pathlib import Path

import click

from blog.collection import export_jsonl, iter_content_files, load_collection, load_document
from blog.config import AppConfig, load_config
from blog.exceptions import FrontMatterError
from blog.lint import extract_links, iter_text_lines, lint_paths
from blog.log_config import setup_logging

_heading_re = re.compile(r"^#{1,6}\s+\S")


def _load(config_path: str | None) -> AppConfig:
    try:
        cfg = load_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        click.echo(f"✗ Configuration error: {e}", err=True)
        raise click.Abort()
    setup_logging(cfg.logging.level)
    return cfg


@click.group()
def cli():
    """Blog CLI - lint, inspect and export blog posts."""
    pass


@cli.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True, path_type=Path))
@click.option("--config", "-c", default=None, help="Configuration file path")
@click.option("--strict", is_flag=True, help="Treat warnings as failures")
def lint(paths: tuple[Path, ...], config: str | None, strict: bool):
    """Check front matter, slugs, links and code fences.

    Args:
        paths: Files or directories to lint (default: configured content roots)
        config: Configuration file path
        strict: Whether warnings fail the run
    """
    cfg = _load(config)
    roots = paths or [Path(root) for root in cfg.content.content_roots]
    files = list(iter_content_files(roots, cfg.content.file_extensions))
    if not files:
        click.echo("✗ No content files found", err=True)
        raise SystemExit(1)

    report = lint_paths(files, cfg.lint)
    report.strict = strict or cfg.lint.strict

    for path, issues in report.results.items():
        for issue in issues:
            click.echo(issue.format(path))

    summary = f"{len(files)} file(s), {report.errors} error(s), {report.warnings} warning(s)"
    if report.ok:
        click.echo(f"✓ {summary}")
    else:
        click.echo(f"✗ {summary}", err=True)
        raise SystemExit(1)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def show(path: Path):
    """Print the front matter and body statistics of a post."""
    try:
        document = load_document(path)
    except FrontMatterError as e:
        click.echo(f"✗ {e}", err=True)
        raise click.Abort()
    except UnicodeDecodeError as e:
        click.echo(f"✗ {path}: file is not valid UTF-8 ({e.reason})", err=True)
        raise click.Abort()

    click.echo(f"Title:    {document.title}")
    click.echo(f"Date:     {document.date.isoformat()}")
    if document.modified:
        click.echo(f"Modified: {document.modified.isoformat()}")
    click.echo(f"Category: {document.category}")
    click.echo(f"Tags:     {', '.join(sorted(document.tags))}")
    click.echo(f"Authors:  {', '.join(document.authors)}")
    click.echo(f"Slug:     {document.slug}")
    if document.series:
        click.echo(f"Series:   {document.series}")
    if document.summary:
        click.echo(f"Summary:  {document.summary}")

    headings = sum(1 for _, line in iter_text_lines(document.body) if _heading_re.match(line))
    click.echo(f"Words:    {len(document.body.split())}")
    click.echo(f"Headings: {headings}")
    click.echo(f"Links:    {len(extract_links(document.body))}")
    click.echo(f"Checksum: {document.checksum}")


@cli.command()
@click.option("--config", "-c", default=None, help="Configuration file path")
@click.option("--output", "-o", default=None, help="Output JSONL path (overrides config)")
def export(config: str | None, output: str | None):
    """Export posts as JSONL for an external site builder."""
    cfg = _load(config)
    documents = load_collection(cfg)
    output_path = output or cfg.output.export_path
    try:
        count = export_jsonl(documents, output_path)
    except ValueError as e:
        click.echo(f"✗ Export failed: {e}", err=True)
        raise SystemExit(1)
    click.echo(f"✓ Exported {count} document(s) to: {output_path}")


@cli.command()
@click.option("--config", "-c", required=True, help="Configuration file path")
def validate(config: str):
    """Validate configuration file.

    Args:
        config: Configuration file path
    """
    cfg = _load(config)

    click.echo("✓ Configuration is valid")
    click.echo(f"  Content roots: {cfg.content.content_roots}")
    click.echo(f"  Required fields: {cfg.lint.required_fields}")
    click.echo(f"  Export path: {cfg.output.export_path}")


def main():
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
