"""Tests for logging setup and request logging."""

import json
import logging

import pytest

from tinylink.common.logging_config import JsonFormatter, setup_logging
from web_app.middleware.logging import ACCESS_LOGGER


class TestSetupLogging:
    """Test logger configuration."""

    def test_reconfigure_does_not_stack_handlers(self):
        setup_logging(level="INFO")
        logger = setup_logging(level="WARNING")

        assert logger.name == "tinylink"
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1

    def test_log_file_handler(self, tmp_path):
        log_file = tmp_path / "tinylink.log"
        logger = setup_logging(level="INFO", log_file=str(log_file))

        logger.getChild("service").info("created abc123")
        for handler in logger.handlers:
            handler.flush()

        assert "created abc123" in log_file.read_text()
        setup_logging(level="DEBUG")

    def test_json_formatter_escapes_message(self):
        record = logging.LogRecord(
            name="tinylink.service",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg='Created short link: abc -> https://example.com/?q="x"',
            args=None,
            exc_info=None,
        )
        record.http_status = 201

        payload = json.loads(JsonFormatter().format(record))

        assert payload["level"] == "INFO"
        assert payload["logger"] == "tinylink.service"
        assert payload["message"].endswith('q="x"')
        assert payload["status"] == 201


@pytest.mark.asyncio
class TestAccessLogging:
    """Test one access line per request."""

    async def test_request_logged_with_status(self, client, caplog):
        with caplog.at_level(logging.DEBUG, logger=ACCESS_LOGGER):
            await client.get("/healthz")

        records = [r for r in caplog.records if r.name == ACCESS_LOGGER]
        assert len(records) == 1
        assert records[0].levelno == logging.INFO
        assert records[0].http_path == "/healthz"
        assert records[0].http_status == 200

    async def test_server_error_logged_as_warning(self, client, store, caplog):
        await store.close()

        with caplog.at_level(logging.DEBUG, logger=ACCESS_LOGGER):
            response = await client.get("/healthz")

        assert response.status_code == 500
        records = [r for r in caplog.records if r.name == ACCESS_LOGGER]
        assert records[0].levelno == logging.WARNING

    async def test_redirect_logged_at_debug(self, client, service, caplog):
        await service.shorten("example.com", custom_code="log1")

        with caplog.at_level(logging.DEBUG, logger=ACCESS_LOGGER):
            await client.get("/log1", follow_redirects=False)

        records = [r for r in caplog.records if r.name == ACCESS_LOGGER]
        assert records[0].levelno == logging.DEBUG
        assert records[0].http_status == 302
