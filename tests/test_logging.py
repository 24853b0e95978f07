"""Tests for logging configuration."""

import logging

import pytest

from wgraph.config.models import LoggingConfig
from wgraph.logging import (
    ComponentFormatter,
    configure_logging,
    configure_logging_from_config,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def _record(name: str) -> logging.LogRecord:
    return logging.LogRecord(name, logging.INFO, __file__, 1, "hello", None, None)


class TestComponentFormatter:
    def test_extracts_wgraph_component(self):
        formatter = ComponentFormatter("%(component)s | %(message)s")
        assert formatter.format(_record("wgraph.store")) == "store | hello"
        assert formatter.format(_record("wgraph.config.loader")) == "config | hello"

    def test_other_loggers_use_first_segment(self):
        formatter = ComponentFormatter("%(component)s | %(message)s")
        assert formatter.format(_record("yaml.reader")) == "yaml | hello"


class TestConfigureLogging:
    def test_explicit_level(self):
        configure_logging(level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)

    def test_env_level(self, monkeypatch):
        monkeypatch.setenv("WGRAPH_LOG_LEVEL", "warning")
        configure_logging()
        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self, monkeypatch):
        monkeypatch.setenv("WGRAPH_LOG_LEVEL", "verbose")
        configure_logging()
        assert logging.getLogger().level == logging.INFO

    def test_rich_handler(self):
        from rich.logging import RichHandler

        configure_logging(level="INFO", use_rich=True)
        handler = logging.getLogger().handlers[0]
        assert isinstance(handler, RichHandler)
        assert isinstance(handler.formatter, ComponentFormatter)

    def test_from_config(self):
        configure_logging_from_config(LoggingConfig(level="ERROR"))
        assert logging.getLogger().level == logging.ERROR

    def test_store_mutations_log_at_debug(self, caplog):
        from wgraph.store import GraphStore
        from wgraph.types import Node

        store = GraphStore("g")
        with caplog.at_level(logging.DEBUG, logger="wgraph.store"):
            store.add_node(Node.create("a"))
            store.delete_node("a")
        assert "Added node a to graph 'g'" in caplog.text
        assert "Deleted node a from graph 'g' (0 adjacency entries purged)" in caplog.text
