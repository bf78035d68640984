"""Tests for request-id log correlation."""

import logging

from tenant_intake.logging_context import (
    RequestIdFilter,
    get_request_id,
    install_request_id_filter,
    set_request_id,
)


class TestRequestId:
    def test_explicit_id(self):
        assert set_request_id("SM123") == "SM123"
        assert get_request_id() == "SM123"

    def test_generated_id(self):
        request_id = set_request_id(None)
        assert request_id.startswith("REQ-")
        assert get_request_id() == request_id

    def test_filter_stamps_records(self):
        set_request_id("SM999")
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        assert RequestIdFilter().filter(record) is True
        assert record.request_id == "SM999"

    def test_install_is_idempotent(self):
        handler = logging.StreamHandler()
        root = logging.getLogger()
        root.addHandler(handler)
        try:
            install_request_id_filter()
            install_request_id_filter()
            assert sum(isinstance(f, RequestIdFilter) for f in handler.filters) == 1
        finally:
            root.removeHandler(handler)
