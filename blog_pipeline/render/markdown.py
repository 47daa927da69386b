"""
Markdown to HTML rendering for blog articles.

Uses mistune with tables, bare-URL autolinks and strikethrough enabled.
Raw HTML in the source is escaped. Fenced code blocks are dispatched on
their normalized language:
- mermaid: escaped source in a diagram container, rendered later by the page
- language with a Pygments lexer: highlighted, language-tagged code block
- language without a lexer: escaped, language-tagged code block
- no language: plain escaped code block
"""

from __future__ import annotations

from html import escape

import mistune
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound


MARKUP_LANGUAGES = {"xml", "html", "svg"}
SHELL_LANGUAGES = {"shell", "sh", "zsh"}
DIAGRAM_LANGUAGE = "mermaid"

# Class names follow the site's conventions; Pygments knows some under other aliases.
LEXER_ALIASES = {"markup": "html"}

_FORMATTER = HtmlFormatter(nowrap=True)


def normalize_fence_language(info: str | None) -> str | None:
    """Map a fence info string to the language used for classes and lexers."""
    if not info or not info.strip():
        return None
    language = info.strip().split(None, 1)[0].lower()
    if language in MARKUP_LANGUAGES:
        return "markup"
    if language in SHELL_LANGUAGES:
        return "bash"
    return language


def highlight_code(code: str, language: str) -> str | None:
    """Return Pygments token HTML for code, or None when no lexer exists."""
    try:
        lexer = get_lexer_by_name(LEXER_ALIASES.get(language, language))
    except ClassNotFound:
        return None
    return highlight(code, lexer, _FORMATTER)


def format_code_block(code: str, info: str | None) -> str:
    language = normalize_fence_language(info)
    if language is None:
        return f"<pre><code>{escape(code)}</code></pre>\n"

    if language == DIAGRAM_LANGUAGE:
        return f'<div class="mermaid">{escape(code)}</div>\n'

    css_class = f"language-{escape(language, quote=True)}"
    highlighted = highlight_code(code, language)
    if highlighted is None:
        return f'<pre><code class="{css_class}">{escape(code)}</code></pre>\n'
    return f'<pre><code class="{css_class}">{highlighted}</code></pre>\n'


class BlogRenderer(mistune.HTMLRenderer):
    """HTML renderer that routes fenced code through format_code_block."""

    def block_code(self, code: str, info: str | None = None) -> str:
        return format_code_block(code, info)


def create_markdown() -> mistune.Markdown:
    return mistune.create_markdown(
        escape=True,
        hard_wrap=False,
        renderer=BlogRenderer(escape=True),
        plugins=["table", "url", "strikethrough"],
    )


_markdown = create_markdown()


def render_markdown(markdown: str) -> str:
    """Convert normalized article Markdown to HTML."""
    return _markdown(markdown)


def highlight_css(style: str = "default", selector: str = "pre code") -> str:
    """Stylesheet for the token classes emitted by highlighted code blocks."""
    return HtmlFormatter(style=style).get_style_defs(selector)
