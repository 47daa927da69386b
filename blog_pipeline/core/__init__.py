"""Core parsing and derivation for Markdown articles."""

from .descriptor import build_summary
from .front_matter import parse_front_matter, strip_front_matter
from .text import estimate_reading_minutes, slugify, strip_markdown
from .types import Article, ArticleSummary

__all__ = [
    "Article",
    "ArticleSummary",
    "build_summary",
    "estimate_reading_minutes",
    "parse_front_matter",
    "slugify",
    "strip_front_matter",
    "strip_markdown",
]
