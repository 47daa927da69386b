"""Run-time index and article client."""

from .normalize import normalize_article_markdown, rewrite_relative_links, strip_leading_title_heading
from .service import ArticleFetchError, BlogService, IndexFetchError

__all__ = [
    "ArticleFetchError",
    "BlogService",
    "IndexFetchError",
    "normalize_article_markdown",
    "rewrite_relative_links",
    "strip_leading_title_heading",
]
