"""
Build-time article index generation.

Walks the Markdown content tree, derives one ArticleSummary per file,
mirrors the raw tree into the served output directory and writes the
index document:
1. Ensure the output directory exists
2. Remove the previous content mirror, then copy the source tree verbatim
3. Describe every Markdown file
4. Sort by date, newest first
5. Write articles.json atomically
"""

from __future__ import annotations

from dataclasses import dataclass, field
import json
import logging
import os
from pathlib import Path
import shutil
import tempfile

from ..config import AppConfig
from ..core.descriptor import build_summary
from ..core.types import ArticleSummary, index_document
from ..logging_utils import log_event


logger = logging.getLogger(__name__)


class DuplicateSlugError(ValueError):
    """Raised when two source files resolve to the same slug and duplicates are fatal."""

    def __init__(self, duplicates: dict[str, list[str]]):
        self.duplicates = duplicates
        details = "; ".join(f"{slug}: {', '.join(paths)}" for slug, paths in duplicates.items())
        super().__init__(f"Duplicate article slugs: {details}")


@dataclass
class BuildResult:
    """Outcome of one index build.

    Attributes:
        index_path: Location of the written index document
        mirror_path: Location of the content mirror (may not exist for an empty site)
        articles: Summaries in index order
        duplicates: Slugs shared by more than one source file, with their source paths
    """
    index_path: Path
    mirror_path: Path
    articles: list[ArticleSummary] = field(default_factory=list)
    duplicates: dict[str, list[str]] = field(default_factory=dict)

    @property
    def count(self) -> int:
        return len(self.articles)


def find_markdown_files(root: Path, extensions: list[str] | None = None) -> list[Path]:
    """Recursively list Markdown files under root, in sorted traversal order."""
    suffixes = {ext.lower() for ext in (extensions or [".md"])}
    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for name in sorted(filenames):
            path = Path(dirpath) / name
            if path.suffix.lower() in suffixes and path.is_file():
                files.append(path)
    return files


def describe_file(path: Path, root: Path, cfg: AppConfig) -> ArticleSummary:
    """Read one source file and derive its summary; read errors propagate."""
    raw = path.read_text(encoding="utf-8")
    source_path = path.relative_to(root).as_posix()
    mtime = path.stat().st_mtime
    return build_summary(raw, source_path, mtime, cfg.content.url_prefix, cfg.summary)


def sort_articles(articles: list[ArticleSummary]) -> list[ArticleSummary]:
    # Zero-padded ISO dates sort correctly as strings; sorted() keeps ties stable.
    return sorted(articles, key=lambda article: article.date, reverse=True)


def find_duplicate_slugs(articles: list[ArticleSummary]) -> dict[str, list[str]]:
    seen: dict[str, list[str]] = {}
    for article in articles:
        seen.setdefault(article.slug, []).append(article.source_path)
    return {slug: paths for slug, paths in seen.items() if len(paths) > 1}


def mirror_content(source: Path, mirror: Path) -> None:
    """Replace the served mirror with a verbatim copy of the source tree."""
    if mirror.exists():
        shutil.rmtree(mirror)
    shutil.copytree(source, mirror)


def write_index(index_path: Path, articles: list[ArticleSummary]) -> None:
    """Write the index document atomically (temp file in place, then rename)."""
    index_path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(index_document(articles), ensure_ascii=False, indent=2) + "\n"
    fd, tmp_name = tempfile.mkstemp(
        dir=index_path.parent, prefix=f".{index_path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(payload)
        os.replace(tmp_name, index_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def build_index(cfg: AppConfig) -> BuildResult:
    """Regenerate the index document and content mirror from the source tree.

    A missing source directory yields an empty index. Unreadable files
    raise, since a partial index would misrepresent the content set.

    Args:
        cfg: Application configuration

    Returns:
        BuildResult describing what was written

    Raises:
        OSError: A source file or output location could not be read or written
        UnicodeDecodeError: A source file is not valid UTF-8
        DuplicateSlugError: Duplicate slugs found and fail_on_duplicate_slugs is set
    """
    content = cfg.content
    source = content.source_path
    output = content.output_path
    result = BuildResult(index_path=content.index_path, mirror_path=content.mirror_path)

    log_event(logger, "Build start", event="build_start", source=str(source), output=str(output))
    output.mkdir(parents=True, exist_ok=True)

    if not source.is_dir():
        write_index(result.index_path, [])
        log_event(
            logger,
            f"No content directory at {source}; wrote empty blog index",
            event="index_written",
            path=str(result.index_path),
            count=0,
        )
        return result

    mirror_content(source, result.mirror_path)
    log_event(logger, "Content mirror copied", event="mirror_copied", path=str(result.mirror_path))

    articles: list[ArticleSummary] = []
    for path in find_markdown_files(source, content.extensions):
        summary = describe_file(path, source, cfg)
        log_event(
            logger,
            f"Indexed {summary.source_path}",
            level=logging.DEBUG,
            event="article_indexed",
            slug=summary.slug,
            date=summary.date,
        )
        articles.append(summary)

    result.articles = sort_articles(articles)
    result.duplicates = find_duplicate_slugs(result.articles)
    for slug, paths in result.duplicates.items():
        log_event(
            logger,
            f"Duplicate slug '{slug}' in {', '.join(paths)}; first entry wins lookups",
            level=logging.WARNING,
            event="duplicate_slug",
            slug=slug,
            paths=paths,
        )
    if result.duplicates and content.fail_on_duplicate_slugs:
        raise DuplicateSlugError(result.duplicates)

    write_index(result.index_path, result.articles)
    log_event(
        logger,
        f"Generated blog index with {result.count} article(s)",
        event="index_written",
        path=str(result.index_path),
        count=result.count,
    )
    return result
