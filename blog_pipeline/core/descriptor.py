"""Build one ArticleSummary from a Markdown source file."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
import re

from ..config import SummaryConfig
from .front_matter import parse_front_matter
from .text import estimate_reading_minutes, slugify, strip_markdown, title_from_filename, truncate_summary
from .types import ArticleSummary


_H1_RE = re.compile(r"^# +(.*)$")


def first_heading(body: str) -> str | None:
    """Return the text of the first level-1 heading line, if any.

    Only the first "# " line counts; when it is empty the caller falls back
    to the filename.
    """
    for line in body.split("\n"):
        match = _H1_RE.match(line)
        if match:
            return match.group(1).strip() or None
    return None


def format_mtime(mtime: float) -> str:
    return datetime.fromtimestamp(mtime, tz=timezone.utc).strftime("%Y-%m-%d")


def markdown_url(url_prefix: str, source_path: str) -> str:
    return f"{url_prefix.rstrip('/')}/{source_path}"


def build_summary(
    raw: str,
    source_path: str,
    mtime: float,
    url_prefix: str,
    cfg: SummaryConfig | None = None,
) -> ArticleSummary:
    """Derive the index entry for one document.

    Args:
        raw: Full document text, including any front matter
        source_path: Path relative to the content root, forward slashes
        mtime: File modification time, used when no date is declared
        url_prefix: Served prefix of the content mirror
        cfg: Summary settings (defaults when omitted)

    Returns:
        The ArticleSummary for the document
    """
    cfg = cfg or SummaryConfig()
    meta, body = parse_front_matter(raw)
    stem = Path(source_path).stem
    plain = strip_markdown(body)

    title = meta.get("title") or first_heading(body) or title_from_filename(stem)
    date = meta.get("date") or format_mtime(mtime)
    summary = meta.get("summary") or truncate_summary(plain, cfg.max_chars, cfg.word_boundary)
    slug = meta.get("slug") or slugify(stem)

    return ArticleSummary(
        slug=slug,
        title=title,
        date=date,
        summary=summary,
        reading_minutes=estimate_reading_minutes(plain, cfg.words_per_minute),
        markdown_path=markdown_url(url_prefix, source_path),
        source_path=source_path,
    )
