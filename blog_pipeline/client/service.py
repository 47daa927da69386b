"""
Run-time access to the article index and individual articles.

BlogService fetches the index document once per instance and shares the
result with every caller: concurrent callers that arrive before the fetch
completes await the same in-flight task, and a successful result is never
refetched. A failed fetch is reported to all of its waiters and then
forgotten, so the next call starts a new fetch.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
import logging
from typing import Any, AsyncIterator

import httpx

from ..config import ClientConfig
from ..core.types import Article, ArticleSummary
from ..logging_utils import log_event
from ..render.markdown import render_markdown
from .normalize import normalize_article_markdown


logger = logging.getLogger(__name__)


class IndexFetchError(RuntimeError):
    """The index document could not be fetched or parsed."""


class ArticleFetchError(RuntimeError):
    """An article's raw Markdown could not be fetched."""


def parse_index(data: Any) -> list[ArticleSummary]:
    """Turn a decoded index document into summaries, keeping document order."""
    if not isinstance(data, dict):
        raise IndexFetchError("Article index must be a JSON object")
    raw_articles = data.get("articles") or []
    if not isinstance(raw_articles, list):
        raise IndexFetchError("Article index 'articles' must be a list")
    try:
        return [ArticleSummary.from_dict(item) for item in raw_articles]
    except (KeyError, TypeError, ValueError) as exc:
        raise IndexFetchError(f"Malformed article index entry: {exc}") from exc


class BlogService:
    """Index and article client scoped to one long-lived instance.

    Args:
        cfg: Client settings (base URL, index path, timeouts)
        client: Optional shared httpx.AsyncClient; when omitted a client is
            opened per request from cfg
        transport: Optional httpx transport for per-request clients
    """

    def __init__(
        self,
        cfg: ClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.cfg = cfg or ClientConfig()
        self._client = client
        self._transport = transport
        self._index_task: asyncio.Task[list[ArticleSummary]] | None = None

    @asynccontextmanager
    async def _http(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(
            base_url=self.cfg.base_url,
            timeout=self.cfg.timeout_seconds,
            trust_env=self.cfg.trust_env,
            transport=self._transport,
        ) as client:
            yield client

    async def _load_index(self) -> list[ArticleSummary]:
        path = self.cfg.index_path
        try:
            async with self._http() as client:
                resp = await client.get(path)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as exc:
            raise IndexFetchError(f"Failed to fetch article index {path}: {exc}") from exc
        except ValueError as exc:
            raise IndexFetchError(f"Article index {path} is not valid JSON: {exc}") from exc

        articles = parse_index(data)
        log_event(
            logger,
            f"Loaded article index ({len(articles)} article(s))",
            event="index_fetched",
            count=len(articles),
        )
        return articles

    def _forget_failed_index(self, task: asyncio.Task[list[ArticleSummary]]) -> None:
        if task is not self._index_task:
            return
        if task.cancelled() or task.exception() is not None:
            self._index_task = None

    async def list_articles(self) -> list[ArticleSummary]:
        """All summaries, newest first, from the shared cached index."""
        if self._index_task is None:
            self._index_task = asyncio.ensure_future(self._load_index())
            self._index_task.add_done_callback(self._forget_failed_index)
        articles = await asyncio.shield(self._index_task)
        return list(articles)

    async def list_latest(self, limit: int | None = None) -> list[ArticleSummary]:
        """The first `limit` summaries of the cached index."""
        if limit is None:
            limit = self.cfg.latest_limit
        articles = await self.list_articles()
        return articles[: max(0, limit)]

    async def find_summary(self, slug: str) -> ArticleSummary | None:
        for article in await self.list_articles():
            if article.slug == slug:
                return article
        return None

    async def fetch_markdown(self, markdown_path: str) -> str:
        try:
            async with self._http() as client:
                resp = await client.get(markdown_path)
                resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise ArticleFetchError(f"Failed to fetch article {markdown_path}: {exc}") from exc
        log_event(
            logger,
            f"Fetched {markdown_path}",
            level=logging.DEBUG,
            event="article_fetched",
            path=markdown_path,
        )
        return resp.text

    async def get_article_by_slug(self, slug: str) -> Article | None:
        """Fetch, normalize and render one article; None when the slug is unknown."""
        summary = await self.find_summary(slug)
        if summary is None:
            return None
        raw = await self.fetch_markdown(summary.markdown_path)
        markdown = normalize_article_markdown(raw, summary.title, summary.markdown_path)
        return Article.from_summary(summary, markdown, render_markdown(markdown))
