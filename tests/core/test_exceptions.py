"""Unit tests for domain exceptions."""

import pytest

from src.core.exceptions import (
    ConfigurationError,
    FuelReportError,
    LocationNotConfiguredError,
    RenderError,
    RowSourceError,
    RowSourceUnavailableError,
    TooManyRowsError,
    ValidationError,
)


class TestFuelReportError:
    """Tests for base FuelReportError exception."""

    def test_basic_initialization(self):
        error = FuelReportError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.code == "FuelReportError"
        assert error.details == {}

    def test_with_custom_code(self):
        error = FuelReportError("Error message", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"

    def test_to_dict(self):
        error = FuelReportError("Test error", code="TEST_CODE", details={"extra": "info"})
        assert error.to_dict() == {
            "error": "TEST_CODE",
            "message": "Test error",
            "details": {"extra": "info"},
        }


class TestValidationErrors:
    def test_validation_error(self):
        error = ValidationError("reference_date", "must be a date", "ontem")
        assert error.code == "VALIDATION_ERROR"
        assert "reference_date" in error.message
        assert error.details["value"] == "ontem"

    def test_too_many_rows(self):
        error = TooManyRowsError(60_000, 50_000)
        assert isinstance(error, ValidationError)
        assert error.code == "TOO_MANY_ROWS"
        assert error.details == {"count": 60_000, "limit": 50_000}


class TestRowSourceErrors:
    def test_row_source_error(self):
        error = RowSourceError("EstoqueCanteiro01", "HTTP 500")
        assert error.code == "ROW_SOURCE_ERROR"
        assert "EstoqueCanteiro01" in error.message

    def test_unavailable_is_row_source_error(self):
        error = RowSourceUnavailableError("EstoqueComboio01", "timeout")
        assert isinstance(error, RowSourceError)
        assert error.code == "ROW_SOURCE_UNAVAILABLE"
        assert error.details["reason"] == "timeout"


@pytest.mark.parametrize(
    "error,code",
    [
        (LocationNotConfiguredError("Comboio 09"), "LOCATION_NOT_CONFIGURED"),
        (RenderError("pdf", "boom"), "RENDER_ERROR"),
        (ConfigurationError("bad font"), "ConfigurationError"),
    ],
)
def test_codes(error, code):
    assert isinstance(error, FuelReportError)
    assert error.code == code
