"""Plain-text reduction of Markdown and the fields derived from it."""

from __future__ import annotations

import re


WORDS_PER_MINUTE = 220
SUMMARY_MAX_CHARS = 180

# Applied in order; earlier patterns must run before later ones consume
# their delimiters (images before links, fences before inline code).
_REDUCTIONS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"```.*?```", re.DOTALL), " "),
    (re.compile(r"`([^`]+)`"), r"\1"),
    (re.compile(r"!\[[^\]]*\]\([^)]*\)"), " "),
    (re.compile(r"\[([^\]]+)\]\([^)]*\)"), r"\1"),
    (re.compile(r"^#{1,6}\s+", re.MULTILINE), ""),
    (re.compile(r"^>\s?", re.MULTILINE), ""),
    (re.compile(r"^[-*+]\s+", re.MULTILINE), ""),
    (re.compile(r"^\d+\.\s+", re.MULTILINE), ""),
    (re.compile(r"[*_~]"), ""),
    (re.compile(r"\n+"), " "),
    (re.compile(r"\s+"), " "),
]


def strip_markdown(markdown: str) -> str:
    """Reduce Markdown to a single line of readable plain text.

    Lossy: code fences and images disappear, links keep their label and
    formatting markers are dropped.
    """
    text = markdown
    for pattern, replacement in _REDUCTIONS:
        text = pattern.sub(replacement, text)
    return text.strip()


def count_words(text: str) -> int:
    return len(text.split())


def estimate_reading_minutes(text: str, words_per_minute: int = WORDS_PER_MINUTE) -> int:
    """Word count divided by reading speed, rounded half up, never below 1."""
    words = count_words(text)
    return max(1, int(words / words_per_minute + 0.5))


def truncate_summary(text: str, max_chars: int = SUMMARY_MAX_CHARS, word_boundary: bool = False) -> str:
    if len(text) <= max_chars:
        return text.strip()
    cut = text[:max_chars]
    if word_boundary and not text[max_chars].isspace():
        head, sep, _ = cut.rpartition(" ")
        if sep:
            cut = head
    return cut.strip()


def slugify(value: str) -> str:
    """Lowercase, collapse non-alphanumeric runs to one hyphen, trim hyphens."""
    slug = value.lower()
    slug = re.sub(r"[^a-z0-9]+", "-", slug)
    return slug.strip("-")


def title_from_filename(stem: str) -> str:
    return re.sub(r"[-_]+", " ", stem)
