"""Front-matter splitting for Markdown documents.

A document carries front matter when its first line is exactly ``---`` and a
later line is exactly ``---``. Everything between them is read as
``key: value`` lines. Anything else is treated as plain body text; malformed
front matter never raises.
"""

from __future__ import annotations

DELIMITER = "---"


def _find_block(raw: str) -> tuple[list[str], int] | None:
    """Return the metadata lines and the offset where the body starts, or None."""
    # Only "\n" separates lines; other Unicode line breaks belong to values.
    lines = raw.split("\n")
    if lines[0].rstrip("\r") != DELIMITER:
        return None

    offset = len(lines[0]) + 1
    head: list[str] = []
    for line in lines[1:]:
        offset += len(line) + 1
        if line.rstrip("\r") == DELIMITER:
            return head, min(offset, len(raw))
        head.append(line.rstrip("\r"))
    return None


def parse_meta_line(line: str) -> tuple[str, str] | None:
    if ":" not in line:
        return None
    key, value = line.split(":", 1)
    key = key.strip()
    value = value.strip()
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        value = value[1:-1]
    if not key:
        return None
    return key, value


def parse_front_matter(raw: str) -> tuple[dict[str, str], str]:
    """Split a document into (metadata, body).

    Returns empty metadata and the untouched input when no complete front
    matter block opens the document.
    """
    block = _find_block(raw)
    if block is None:
        return {}, raw

    head, body_start = block
    meta: dict[str, str] = {}
    for line in head:
        parsed = parse_meta_line(line)
        if parsed is None:
            continue
        key, value = parsed
        meta[key] = value
    return meta, raw[body_start:]


def strip_front_matter(raw: str) -> str:
    """Drop a leading front matter block, discarding its metadata."""
    block = _find_block(raw)
    if block is None:
        return raw
    return raw[block[1]:]
