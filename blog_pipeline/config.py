"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- ContentConfig: Source tree, output locations and served URL prefix
- SummaryConfig: Summary truncation and reading time settings
- ClientConfig: Run-time HTTP client settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


DEFAULT_CONFIG_FILENAME = "blog.yaml"


@dataclass
class ContentConfig:
    """Configuration for the build-time content tree.

    Attributes:
        source_dir: Directory holding the author-written Markdown articles
        output_dir: Served blog directory receiving the index and the mirror
        content_dirname: Name of the mirror directory inside output_dir
        index_filename: Name of the index JSON document inside output_dir
        url_prefix: Served path prefix of the mirror (used for markdownPath)
        extensions: Markdown file extensions, matched case-insensitively
        fail_on_duplicate_slugs: Abort the build instead of warning on duplicate slugs
    """

    source_dir: str = "content/articles"
    output_dir: str = "public/blog"
    content_dirname: str = "content"
    index_filename: str = "articles.json"
    url_prefix: str = "/blog/content"
    extensions: list[str] = field(default_factory=lambda: [".md"])
    fail_on_duplicate_slugs: bool = False

    @property
    def source_path(self) -> Path:
        return Path(self.source_dir)

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir)

    @property
    def mirror_path(self) -> Path:
        return Path(self.output_dir) / self.content_dirname

    @property
    def index_path(self) -> Path:
        return Path(self.output_dir) / self.index_filename


@dataclass
class SummaryConfig:
    """Configuration for derived summary fields.

    Attributes:
        max_chars: Maximum characters of a body-derived summary
        words_per_minute: Reading speed used for readingMinutes
        word_boundary: Cut truncated summaries back to the last whole word
    """

    max_chars: int = 180
    words_per_minute: int = 220
    word_boundary: bool = False


@dataclass
class ClientConfig:
    """Configuration for the run-time index/article client.

    Attributes:
        base_url: Origin serving the index document and the content mirror
        index_path: Served path of the index document
        timeout_seconds: HTTP request timeout
        trust_env: Whether to respect system proxy settings
        latest_limit: Default number of articles returned by list_latest
    """

    base_url: str = "http://localhost:4200"
    index_path: str = "/blog/articles.json"
    timeout_seconds: float = 10.0
    trust_env: bool = True
    latest_limit: int = 3


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file, written inside the output directory
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "build.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    content: ContentConfig = field(default_factory=ContentConfig)
    summary: SummaryConfig = field(default_factory=SummaryConfig)
    client: ClientConfig = field(default_factory=ClientConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def resolve_config_path(path: Path | None) -> Path | None:
    """Return the explicit config path, or blog.yaml from the working directory if present."""
    if path is not None:
        return path
    candidate = Path.cwd() / DEFAULT_CONFIG_FILENAME
    if candidate.is_file():
        return candidate
    return None


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update({k: v for k, v in value.items() if k in data[key]})
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "content": {
            "source_dir": cfg.content.source_dir,
            "output_dir": cfg.content.output_dir,
            "content_dirname": cfg.content.content_dirname,
            "index_filename": cfg.content.index_filename,
            "url_prefix": cfg.content.url_prefix,
            "extensions": list(cfg.content.extensions),
            "fail_on_duplicate_slugs": cfg.content.fail_on_duplicate_slugs,
        },
        "summary": {
            "max_chars": cfg.summary.max_chars,
            "words_per_minute": cfg.summary.words_per_minute,
            "word_boundary": cfg.summary.word_boundary,
        },
        "client": {
            "base_url": cfg.client.base_url,
            "index_path": cfg.client.index_path,
            "timeout_seconds": cfg.client.timeout_seconds,
            "trust_env": cfg.client.trust_env,
            "latest_limit": cfg.client.latest_limit,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        content=ContentConfig(**data["content"]),
        summary=SummaryConfig(**data["summary"]),
        client=ClientConfig(**data["client"]),
        logging=LoggingConfig(**data["logging"]),
    )
