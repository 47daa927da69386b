"""Tests for front matter splitting."""

from blog_pipeline.core.front_matter import parse_front_matter, strip_front_matter


def test_parse_front_matter_extracts_keys_and_body():
    raw = '---\ntitle: "Hello World"\ndate: 2024-01-01\nslug: hello\n---\n# Hello\nBody'

    meta, body = parse_front_matter(raw)

    assert meta == {"title": "Hello World", "date": "2024-01-01", "slug": "hello"}
    assert body == "# Hello\nBody"


def test_missing_opening_delimiter_is_all_body():
    raw = "title: nope\n---\nBody"
    assert parse_front_matter(raw) == ({}, raw)


def test_unclosed_front_matter_degrades_to_body():
    raw = "---\ntitle: Broken\nBody without closing delimiter"
    assert parse_front_matter(raw) == ({}, raw)


def test_value_splits_on_first_colon_and_lines_without_colon_are_ignored():
    raw = "---\nsource: https://example.com/a\njust some words\n: no key\n---\nBody"

    meta, body = parse_front_matter(raw)

    assert meta == {"source": "https://example.com/a"}
    assert body == "Body"


def test_quotes_stripped_only_when_both_present():
    raw = '---\na: "quoted"\nb: "left only\nc: right only"\n---\n'

    meta, _ = parse_front_matter(raw)

    assert meta == {"a": "quoted", "b": '"left only', "c": 'right only"'}


def test_crlf_documents_are_supported():
    meta, body = parse_front_matter("---\r\ntitle: Windows\r\n---\r\nBody\r\n")
    assert meta == {"title": "Windows"}
    assert body == "Body\r\n"


def test_reserializing_extracted_keys_recovers_each_key_once():
    raw = "---\ntitle: One\nsummary: Two: three\ndate: 2024-02-03\n---\nBody"
    meta, _ = parse_front_matter(raw)

    rebuilt = "---\n" + "".join(f"{k}: {v}\n" for k, v in meta.items()) + "---\n"
    again, body = parse_front_matter(rebuilt)

    assert again == meta
    assert sorted(again) == ["date", "summary", "title"]
    assert body == ""


def test_strip_front_matter():
    assert strip_front_matter("---\ntitle: x\n---\n# Foo\n") == "# Foo\n"
    assert strip_front_matter("# No front matter\n") == "# No front matter\n"


def test_only_newlines_split_metadata_lines():
    meta, body = parse_front_matter("---\ntitle: Part A\u2028Part B\n---\nBody")
    assert meta == {"title": "Part A\u2028Part B"}
    assert body == "Body"

    meta, body = parse_front_matter("---\ntitle: x\fy\nnote: a\x85b\n---\nBody")
    assert meta == {"title": "x\fy", "note": "a\x85b"}
    assert body == "Body"


def test_form_feed_before_dashes_is_not_a_closing_delimiter():
    raw = "---\ntitle: x\f---\nBody"
    assert parse_front_matter(raw) == ({}, raw)


def test_closing_delimiter_on_last_line():
    assert parse_front_matter("---\ntitle: End\n---") == ({"title": "End"}, "")
