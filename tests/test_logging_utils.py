"""Tests for logging utilities and sensitive data redaction."""

from __future__ import annotations

import json
import logging

import pytest

from shoplist.logging_utils import REDACTED, configure_logging, redact


@pytest.mark.parametrize("fmt", ["plain", "json"])
def test_configured_handler_redacts_tokens(fmt):
    secret = "top-secret-token"
    configure_logging("INFO", fmt, [secret])

    handler = logging.getLogger().handlers[0]
    record = logging.LogRecord(
        name="shoplist.test.redaction",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg="Authorization header Bearer %s",
        args=(secret,),
        exc_info=None,
    )

    for filter_ in handler.filters:
        filter_.filter(record)

    formatted = handler.format(record)
    assert secret not in formatted
    assert REDACTED in formatted


def test_json_formatter_includes_context_fields():
    configure_logging("DEBUG", "json", [])
    handler = logging.getLogger().handlers[0]
    record = logging.LogRecord(
        name="shoplist.access",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg="HTTP GET /lists/%s",
        args=(3,),
        exc_info=None,
    )
    record.request_id = "abc123"
    record.list_id = 3

    payload = json.loads(handler.format(record))

    assert payload["message"] == "HTTP GET /lists/3"
    assert payload["request_id"] == "abc123"
    assert payload["list_id"] == 3
    assert "item_id" not in payload


def test_redact_masks_query_tokens_without_secrets():
    assert redact("GET /lists?api_token=abc&x=1") == f"GET /lists?api_token={REDACTED}&x=1"
