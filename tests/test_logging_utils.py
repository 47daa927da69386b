"""Tests for structured logging helpers."""

import json
import logging

from blog_pipeline.config import LoggingConfig
from blog_pipeline.logging_utils import JsonlFormatter, log_event, setup_logging


def test_jsonl_formatter_includes_extra_fields():
    record = logging.LogRecord("blog_pipeline.test", logging.INFO, __file__, 1, "hello", None, None)
    record.event = "index_written"
    record.count = 3

    payload = json.loads(JsonlFormatter().format(record))

    assert payload["message"] == "hello"
    assert payload["level"] == "INFO"
    assert payload["event"] == "index_written"
    assert payload["count"] == 3


def test_setup_logging_writes_jsonl_file(tmp_path):
    cfg = LoggingConfig(console=False, file=True, filename="build.jsonl")

    logger = setup_logging(cfg, tmp_path)
    log_event(logging.getLogger("blog_pipeline.build.indexer"), "Indexed", event="article_indexed", slug="a")
    for handler in logger.handlers:
        handler.flush()
        handler.close()
    logger.handlers = []

    lines = (tmp_path / "build.jsonl").read_text(encoding="utf-8").splitlines()
    payload = json.loads(lines[-1])
    assert payload["logger"] == "blog_pipeline.build.indexer"
    assert payload["event"] == "article_indexed"
    assert payload["slug"] == "a"


def test_log_event_ignores_missing_logger():
    log_event(None, "nothing happens", event="noop")
