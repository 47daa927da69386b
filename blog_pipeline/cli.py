"""
Command-line interface for the blog pipeline.

Uses Typer to expose the build step and two inspection commands that
exercise the run-time client against a served site:
- build: regenerate articles.json and the content mirror
- list: show the article index served at the configured base URL
- show: fetch and render one article by slug
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from .build.indexer import DuplicateSlugError, build_index
from .client.service import ArticleFetchError, BlogService, IndexFetchError
from .config import AppConfig, load_config, resolve_config_path
from .logging_utils import setup_logging

app = typer.Typer(add_completion=False)
console = Console()


def _load(config: Path | None, log_level: str | None, base_url: str | None = None) -> AppConfig:
    config_path = resolve_config_path(config)
    cfg = load_config(str(config_path) if config_path else None)
    if log_level:
        cfg.logging.level = log_level
    if base_url:
        cfg.client.base_url = base_url
    return cfg


@app.command()
def build(
    config: Path | None = typer.Option(
        None, "--config", "-c", exists=True, help="YAML config (default: ./blog.yaml if present)."
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Regenerate the article index and content mirror.

    Reads every Markdown file under the configured source directory,
    copies the tree into the served output directory and writes
    articles.json sorted newest first.
    """
    cfg = _load(config, log_level)
    logger = setup_logging(cfg.logging, cfg.content.output_path)

    try:
        result = build_index(cfg)
    except (OSError, UnicodeDecodeError, DuplicateSlugError) as exc:
        logger.error("Blog index build failed: %s", exc)
        raise typer.Exit(code=1) from exc

    console.print(f"Blog index written: {result.index_path} ({result.count} article(s))")


@app.command("list")
def list_articles(
    limit: int | None = typer.Option(None, "--limit", "-n", help="Show only the latest N articles."),
    base_url: str | None = typer.Option(None, "--base-url", help="Origin serving the blog (overrides config)."),
    config: Path | None = typer.Option(
        None, "--config", "-c", exists=True, help="YAML config (default: ./blog.yaml if present)."
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Show the article index served at the base URL."""
    cfg = _load(config, log_level, base_url)
    logger = setup_logging(cfg.logging)
    service = BlogService(cfg.client)

    try:
        if limit is None:
            articles = asyncio.run(service.list_articles())
        else:
            articles = asyncio.run(service.list_latest(limit))
    except IndexFetchError as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=1) from exc

    table = Table(title=f"Articles ({len(articles)})")
    table.add_column("Date")
    table.add_column("Slug")
    table.add_column("Title")
    table.add_column("Min", justify="right")
    for article in articles:
        table.add_row(article.date, article.slug, article.title, str(article.reading_minutes))
    console.print(table)


@app.command()
def show(
    slug: str = typer.Argument(..., help="Article slug."),
    markdown: bool = typer.Option(False, "--markdown", help="Print normalized Markdown instead of HTML."),
    base_url: str | None = typer.Option(None, "--base-url", help="Origin serving the blog (overrides config)."),
    config: Path | None = typer.Option(
        None, "--config", "-c", exists=True, help="YAML config (default: ./blog.yaml if present)."
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Fetch and render one article by slug."""
    cfg = _load(config, log_level, base_url)
    logger = setup_logging(cfg.logging)
    service = BlogService(cfg.client)

    try:
        article = asyncio.run(service.get_article_by_slug(slug))
    except (IndexFetchError, ArticleFetchError) as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=1) from exc

    if article is None:
        console.print(f"Article not found: {slug}")
        raise typer.Exit(code=1)

    output = article.markdown if markdown else article.html
    console.print(output, markup=False, highlight=False, emoji=False, soft_wrap=True)


if __name__ == "__main__":
    app()
