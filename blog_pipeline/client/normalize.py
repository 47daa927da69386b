"""Client-side Markdown normalization before rendering."""

from __future__ import annotations

import re

from ..core.front_matter import strip_front_matter


_LEADING_H1_RE = re.compile(r"^\s*#[ \t]+(.+?)[ \t]*(?:\r?\n)+")
_CLOSING_HASHES_RE = re.compile(r"\s+#+\s*$")
_LINK_TARGET_RE = re.compile(r"(!?\[[^\]]*\]\()([^)]+)(\))")
_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


def strip_leading_title_heading(markdown: str, title: str) -> str:
    """Remove an opening level-1 heading that repeats the article title.

    The heading and the blank lines after it are dropped only when its text
    matches title case-insensitively.
    """
    match = _LEADING_H1_RE.match(markdown)
    if not match:
        return markdown
    heading = _CLOSING_HASHES_RE.sub("", match.group(1)).strip()
    if heading.lower() != title.strip().lower():
        return markdown
    return markdown[match.end():]


def base_path(markdown_path: str) -> str:
    """Directory part of a served path, keeping the trailing slash."""
    return markdown_path[: markdown_path.rfind("/") + 1]


def resolve_url(url: str, base: str) -> str:
    if _SCHEME_RE.match(url) or url.startswith(("/", "#")):
        return url
    if url.startswith("./"):
        url = url[2:]
    return f"{base}{url}"


def rewrite_relative_links(markdown: str, markdown_path: str) -> str:
    """Prefix relative link and image targets with the article's own directory."""
    base = base_path(markdown_path)

    def repl(match: re.Match[str]) -> str:
        return f"{match.group(1)}{resolve_url(match.group(2), base)}{match.group(3)}"

    return _LINK_TARGET_RE.sub(repl, markdown)


def normalize_article_markdown(raw: str, title: str, markdown_path: str) -> str:
    """Front matter removed, duplicate title dropped, relative targets rewritten."""
    markdown = strip_front_matter(raw)
    markdown = strip_leading_title_heading(markdown, title)
    return rewrite_relative_links(markdown, markdown_path)
