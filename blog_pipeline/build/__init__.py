"""Build-time index generation."""

from .indexer import BuildResult, DuplicateSlugError, build_index, find_markdown_files

__all__ = ["BuildResult", "DuplicateSlugError", "build_index", "find_markdown_files"]
