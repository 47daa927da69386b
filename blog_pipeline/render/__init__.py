"""HTML rendering of article Markdown."""

from .markdown import highlight_css, normalize_fence_language, render_markdown

__all__ = ["highlight_css", "normalize_fence_language", "render_markdown"]
