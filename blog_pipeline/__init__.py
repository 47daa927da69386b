"""
Blog Pipeline - Markdown article index builder and renderer.

This package turns a directory of author-written Markdown articles into a
served JSON index plus a raw content mirror, and provides the run-time
client that looks articles up by slug and renders them to HTML.

Main entry point is the CLI via `blog-pipeline build`.

Example:
    $ blog-pipeline build
    $ blog-pipeline show my-first-post --base-url http://localhost:4200
"""

__all__ = [
    "__version__",
    "Article",
    "ArticleSummary",
    "BlogService",
    "build_index",
    "render_markdown",
]
__version__ = "0.1.0"

from .build.indexer import build_index
from .client.service import BlogService
from .core.types import Article, ArticleSummary
from .render.markdown import render_markdown
