"""Tests for error handling."""

import logging

import pytest

from te_gene_db.error_handler import (
    EmptyExport, ErrorHandler, ErrorSeverity, ErrorType, InvalidInput, LoadFailure,
    get_error_handler, setup_error_handler,
)


class TestErrorHandler:
    """Test cases for error classification and history."""

    @pytest.fixture
    def handler(self):
        return ErrorHandler()

    def test_invalid_input_is_value_error(self):
        assert issubclass(InvalidInput, ValueError)

    def test_load_failure_attributes(self):
        cause = OSError("missing")
        error = LoadFailure("Could not read", source="data.json", cause=cause)

        assert error.source == "data.json"
        assert error.cause is cause

    @pytest.mark.parametrize("error, expected", [
        (LoadFailure("bad"), ErrorType.LOAD_FAILURE),
        (InvalidInput("short"), ErrorType.INVALID_INPUT),
        (EmptyExport("none"), ErrorType.EMPTY_EXPORT),
        (PermissionError("denied"), ErrorType.FILE_IO_ERROR),
        (RuntimeError("boom"), ErrorType.UNKNOWN),
    ])
    def test_classification(self, handler, error, expected):
        assert handler.handle_error(error, operation="test").error_type == expected

    def test_only_load_failure_blocks(self, handler):
        assert handler.handle_error(LoadFailure("bad"), "load").is_blocking
        assert not handler.handle_error(InvalidInput("short"), "primers").is_blocking
        assert not handler.handle_error(EmptyExport("none"), "export").is_blocking

    def test_severity_and_suggestion(self, handler):
        context = handler.handle_error(EmptyExport("none"), "export", item_id="apoe")

        assert context.severity == ErrorSeverity.WARNING
        assert context.item_id == "apoe"
        assert "perform a search" in context.suggestion

    def test_logging(self, handler, caplog):
        with caplog.at_level(logging.WARNING, logger='te_gene_db'):
            handler.handle_error(InvalidInput("Sequence too short"), "design_primers", item_id="39 bp")

        assert "design_primers - invalid_input: Sequence too short (item: 39 bp)" in caplog.text

    def test_error_summary(self, handler):
        handler.handle_error(InvalidInput("a"), "op1")
        handler.handle_error(InvalidInput("b"), "op2")
        handler.handle_error(LoadFailure("c"), "load")

        summary = handler.get_error_summary()

        assert summary['total_errors'] == 3
        assert summary['by_type'] == {'invalid_input': 2, 'load_failure': 1}
        assert summary['by_severity'] == {'warning': 2, 'critical': 1}
        assert summary['recent_errors'][-1]['operation'] == "load"

    def test_empty_summary(self, handler):
        assert handler.get_error_summary()['total_errors'] == 0

    def test_global_handler(self):
        handler = setup_error_handler()
        assert get_error_handler() is handler
