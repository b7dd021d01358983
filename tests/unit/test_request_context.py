"""Request id sanitizing and log correlation."""

import logging

from inventory_console.middleware.request_id import sanitize_request_id
from inventory_console.shared.context import get_request_id, reset_request_id, set_request_id
from inventory_console.shared.telemetry import RequestIdFilter


def test_sanitize_keeps_safe_ids() -> None:
    assert sanitize_request_id("  abc_123-x ") == "abc_123-x"


def test_sanitize_replaces_unsafe_or_missing_ids() -> None:
    for raw in (None, "", "a b", "x" * 65, "id\nforged"):
        assert len(sanitize_request_id(raw)) == 32


def test_request_id_is_scoped_to_context() -> None:
    token = set_request_id("req-1")
    try:
        assert get_request_id() == "req-1"
    finally:
        reset_request_id(token)
    assert get_request_id() is None


def test_log_records_carry_request_id() -> None:
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    token = set_request_id("req-2")
    try:
        RequestIdFilter().filter(record)
    finally:
        reset_request_id(token)
    assert record.request_id == "req-2"

    RequestIdFilter().filter(record)
    assert record.request_id == "-"
