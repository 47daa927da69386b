"""Tests for the run-time index and article client."""

from __future__ import annotations

import asyncio

import httpx
import pytest
from bs4 import BeautifulSoup

from blog_pipeline.client.service import ArticleFetchError, BlogService, IndexFetchError
from blog_pipeline.config import ClientConfig
from blog_pipeline.core.types import ArticleSummary


def _entry(slug: str, date: str, title: str | None = None, path: str | None = None) -> dict:
    return {
        "slug": slug,
        "title": title or slug.title(),
        "date": date,
        "summary": f"About {slug}",
        "readingMinutes": 2,
        "markdownPath": path or f"/blog/content/{slug}.md",
        "sourcePath": f"{slug}.md",
    }


INDEX = {
    "articles": [
        _entry("foo", "2024-06-01", title="Foo", path="/blog/content/posts/foo.md"),
        _entry("bar", "2024-01-01"),
        _entry("foo", "2023-01-01", title="Shadowed", path="/blog/content/old/foo.md"),
    ]
}

FOO_MARKDOWN = '---\ntitle: "Foo"\n---\n# Foo\n\nBody text with ![pic](img/pic.png).\n'


class FakeSite:
    """Serves an index and Markdown documents, counting requests per path."""

    def __init__(self, index=INDEX, documents=None, index_status: int = 200):
        self.index = index
        self.documents = documents or {"/blog/content/posts/foo.md": FOO_MARKDOWN}
        self.index_status = index_status
        self.calls: dict[str, int] = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.calls[path] = self.calls.get(path, 0) + 1
        if path == "/blog/articles.json":
            if self.index_status != 200:
                return httpx.Response(self.index_status, text="boom")
            if isinstance(self.index, str):
                return httpx.Response(200, text=self.index)
            return httpx.Response(200, json=self.index)
        if path in self.documents:
            return httpx.Response(200, text=self.documents[path])
        return httpx.Response(404, text="not found")

    def service(self) -> BlogService:
        cfg = ClientConfig(base_url="http://blog.test")
        return BlogService(cfg, transport=httpx.MockTransport(self.handler))


def test_concurrent_index_requests_share_one_fetch():
    site = FakeSite()

    async def main():
        service = site.service()
        first, second, latest = await asyncio.gather(
            service.list_articles(), service.list_articles(), service.list_latest(1)
        )
        again = await service.list_articles()
        return first, second, latest, again

    first, second, latest, again = asyncio.run(main())

    assert site.calls["/blog/articles.json"] == 1
    assert [a.slug for a in first] == ["foo", "bar", "foo"]
    assert first == second == again
    assert [a.slug for a in latest] == ["foo"]


def test_list_latest_defaults_to_configured_limit():
    site = FakeSite()
    articles = asyncio.run(site.service().list_latest())
    assert len(articles) == 3
    assert articles[1].reading_minutes == 2


def test_index_failure_reaches_every_waiter_then_refetches():
    site = FakeSite(index_status=500)

    async def main():
        service = site.service()
        results = await asyncio.gather(
            service.list_articles(), service.list_articles(), return_exceptions=True
        )
        calls_after_first = site.calls["/blog/articles.json"]
        site.index_status = 200
        articles = await service.list_articles()
        return results, calls_after_first, articles

    results, calls_after_first, articles = asyncio.run(main())

    assert calls_after_first == 1
    assert all(isinstance(result, IndexFetchError) for result in results)
    assert len(articles) == 3
    assert site.calls["/blog/articles.json"] == 2


def test_invalid_index_json_is_a_fetch_error():
    site = FakeSite(index="not json")
    with pytest.raises(IndexFetchError):
        asyncio.run(site.service().list_articles())


def test_index_without_articles_is_empty():
    site = FakeSite(index={"articles": None})
    assert asyncio.run(site.service().list_articles()) == []


def test_get_article_normalizes_and_renders():
    site = FakeSite()

    article = asyncio.run(site.service().get_article_by_slug("foo"))

    assert article is not None
    assert article.title == "Foo"
    assert article.markdown.startswith("Body text")
    assert "/blog/content/posts/img/pic.png" in article.markdown
    soup = BeautifulSoup(article.html, "html.parser")
    assert soup.find("h1") is None
    assert soup.find("p").get_text().startswith("Body text")
    assert soup.find("img")["src"] == "/blog/content/posts/img/pic.png"
    assert article.to_dict()["markdownPath"] == "/blog/content/posts/foo.md"


def test_unknown_slug_is_not_found_without_fetching_markdown():
    site = FakeSite()

    article = asyncio.run(site.service().get_article_by_slug("missing"))

    assert article is None
    assert list(site.calls) == ["/blog/articles.json"]


def test_duplicate_slug_first_match_wins():
    site = FakeSite()

    article = asyncio.run(site.service().get_article_by_slug("foo"))

    assert article.markdown_path == "/blog/content/posts/foo.md"
    assert "/blog/content/old/foo.md" not in site.calls


def test_missing_markdown_raises_article_fetch_error():
    site = FakeSite()
    with pytest.raises(ArticleFetchError):
        asyncio.run(site.service().get_article_by_slug("bar"))


def test_article_carries_every_summary_field():
    site = FakeSite()

    article = asyncio.run(site.service().get_article_by_slug("foo"))

    assert isinstance(article, ArticleSummary)
    assert article.date == "2024-06-01"
    assert article.reading_minutes == 2
    assert article.summary == "About foo"
    assert article.source_path == "foo.md"
    payload = article.to_dict()
    assert payload["readingMinutes"] == 2
    assert payload["markdown"] == article.markdown
    assert payload["html"] == article.html
