"""Tests for structlog configuration."""

from __future__ import annotations

import io
import json

import pytest
import structlog

from storefront.core.logging import LogContext, bind_context, configure_logging, get_logger


@pytest.fixture
def stream():
    buf = io.StringIO()
    configure_logging(level="INFO", json_format=True, stream=buf, cache_loggers=False)
    yield buf
    structlog.contextvars.clear_contextvars()


def _lines(buf: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in buf.getvalue().splitlines() if line.strip()]


class TestConfigureLogging:
    def test_json_fields(self, stream):
        get_logger("storefront.test").info("seed_completed", products=8)
        (record,) = _lines(stream)
        assert record["event"] == "seed_completed"
        assert record["products"] == 8
        assert record["log.level"] == "info"
        assert record["service.name"] == "storefront"
        assert record["log.logger"] == "storefront.test"
        assert "@timestamp" in record

    def test_level_filtering(self, stream):
        get_logger().debug("hidden")
        assert _lines(stream) == []

    def test_bound_context(self, stream):
        bind_context(request_id="abc")
        get_logger().info("page_served")
        assert _lines(stream)[0]["request_id"] == "abc"

    def test_log_context_unbinds(self, stream):
        with LogContext(route="/"):
            get_logger().info("inside")
        get_logger().info("outside")
        inside, outside = _lines(stream)
        assert inside["route"] == "/"
        assert "route" not in outside


class TestModuleLevelLogger:
    def test_named_logger_created_before_configuration(self):
        logger = get_logger("storefront.ops.seed")
        buf = io.StringIO()
        configure_logging(level="WARNING", json_format=True, stream=buf, cache_loggers=False)

        logger.info("filtered_out")
        logger.warning("seed_rejected", error="bad category")

        (record,) = _lines(buf)
        assert record["event"] == "seed_rejected"
        assert record["log.logger"] == "storefront.ops.seed"

    def test_console_stream_is_honoured(self):
        buf = io.StringIO()
        configure_logging(level="INFO", json_format=False, stream=buf, cache_loggers=False)
        get_logger("storefront.cli").info("site_built", pages=9)
        assert "site_built" in buf.getvalue()
