"""
Core data types for the blog pipeline.

This module defines the records that flow through the pipeline:
- ArticleSummary: One entry of the persisted article index
- Article: A summary merged with its normalized Markdown and rendered HTML

The persisted index keeps camelCase keys (readingMinutes, markdownPath,
sourcePath) so the served JSON matches what listing views consume.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any


@dataclass(frozen=True)
class ArticleSummary:
    """Index entry describing one Markdown article.

    Attributes:
        slug: URL-safe identifier, from metadata or the filename
        title: Display title, from metadata, the first level-1 heading or the filename
        date: ISO calendar date (YYYY-MM-DD)
        summary: Plain-text summary of at most the configured length
        reading_minutes: Estimated reading time, always at least 1
        markdown_path: Absolute served path of the raw Markdown asset
        source_path: Path relative to the content root, with forward slashes
    """
    slug: str
    title: str
    date: str
    summary: str
    reading_minutes: int
    markdown_path: str
    source_path: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "slug": self.slug,
            "title": self.title,
            "date": self.date,
            "summary": self.summary,
            "readingMinutes": self.reading_minutes,
            "markdownPath": self.markdown_path,
            "sourcePath": self.source_path,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ArticleSummary:
        return cls(
            slug=str(data["slug"]),
            title=str(data.get("title") or ""),
            date=str(data.get("date") or ""),
            summary=str(data.get("summary") or ""),
            reading_minutes=max(1, int(data.get("readingMinutes") or 1)),
            markdown_path=str(data["markdownPath"]),
            source_path=str(data.get("sourcePath") or ""),
        )


@dataclass(frozen=True)
class Article(ArticleSummary):
    """A fetched, normalized and rendered article.

    Carries every summary field plus the normalized Markdown and its HTML.
    Created per request and never persisted.
    """
    markdown: str
    html: str

    @classmethod
    def from_summary(cls, summary: ArticleSummary, markdown: str, html: str) -> Article:
        base = {f.name: getattr(summary, f.name) for f in fields(ArticleSummary)}
        return cls(**base, markdown=markdown, html=html)

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["markdown"] = self.markdown
        payload["html"] = self.html
        return payload


def index_document(articles: list[ArticleSummary]) -> dict[str, Any]:
    """Build the serializable index document."""
    return {"articles": [article.to_dict() for article in articles]}
