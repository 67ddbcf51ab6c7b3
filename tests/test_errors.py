"""
Tests for custom exception hierarchy.
"""

import pytest

from geointerchange.core.errors import (
    ConfigurationError,
    EmptyInputError,
    FormatError,
    GeoInterchangeError,
    GeometryError,
    NestingDepthError,
    UnsupportedGeometryError,
    ValidationError,
)


class TestGeoInterchangeError:
    """Tests for base GeoInterchangeError class."""

    def test_basic_exception(self):
        """Test basic exception creation."""
        exc = GeoInterchangeError(message="Test error", error_code="TEST_ERROR")

        assert str(exc) == "TEST_ERROR: Test error"
        assert exc.message == "Test error"
        assert exc.error_code == "TEST_ERROR"
        assert exc.details == {}
        assert exc.suggestions == []

    def test_exception_with_details(self):
        """Test exception with details and suggestions."""
        exc = GeoInterchangeError(
            message="Test error with details",
            error_code="TEST_ERROR",
            details={"field": "test", "value": 123},
            suggestions=["Try this", "Or that"],
        )

        assert exc.details == {"field": "test", "value": 123}
        assert exc.suggestions == ["Try this", "Or that"]

    def test_to_dict(self):
        """Test conversion to dictionary."""
        exc = GeoInterchangeError(
            message="Test error",
            error_code="TEST_ERROR",
            details={"key": "value"},
            suggestions=["suggestion"],
        )

        assert exc.to_dict() == {
            "error_code": "TEST_ERROR",
            "message": "Test error",
            "details": {"key": "value"},
            "suggestions": ["suggestion"],
        }

    def test_repr(self):
        """Test debugging representation."""
        exc = GeoInterchangeError(message="Oops", error_code="TEST_ERROR")
        assert repr(exc) == "GeoInterchangeError(error_code='TEST_ERROR', message='Oops')"


class TestFormatError:
    """Tests for FormatError and EmptyInputError."""

    def test_format_error(self):
        """Test the failing input and format are kept."""
        exc = FormatError("Invalid KML", text="<Point>", format_name="KML")

        assert exc.error_code == "FORMAT_ERROR"
        assert exc.text == "<Point>"
        assert exc.format_name == "KML"
        assert exc.details["format"] == "KML"
        assert len(exc.suggestions) > 0
        assert isinstance(exc, GeoInterchangeError)

    def test_format_error_without_text(self):
        """Test text is optional."""
        exc = FormatError("Bad coordinates")
        assert exc.text is None
        assert "format" not in exc.details

    def test_empty_input_is_format_error(self):
        """Test EmptyInputError can be caught as FormatError."""
        with pytest.raises(FormatError):
            raise EmptyInputError()

    def test_empty_input_defaults(self):
        """Test the default message and code."""
        exc = EmptyInputError(text="<feed/>", format_name="GeoRSS")

        assert exc.message == "No geometries to reduce"
        assert exc.error_code == "EMPTY_INPUT"
        assert exc.text == "<feed/>"
        assert exc.details["format"] == "GeoRSS"


class TestOtherErrors:
    """Tests for the remaining error types."""

    def test_geometry_error(self):
        """Test geometry error keeps the geometry type."""
        exc = GeometryError("Invalid ring", geometry_type="Polygon")

        assert exc.error_code == "GEOMETRY_ERROR"
        assert exc.details["geometry_type"] == "Polygon"

    def test_unsupported_geometry_error(self):
        """Test the offending type name is kept."""
        exc = UnsupportedGeometryError("Cannot write dict", type_name="dict")

        assert exc.error_code == "UNSUPPORTED_GEOMETRY"
        assert exc.details["type"] == "dict"

    def test_nesting_depth_error(self):
        """Test the limit is part of message and details."""
        exc = NestingDepthError(64)

        assert exc.error_code == "NESTING_DEPTH_EXCEEDED"
        assert exc.max_depth == 64
        assert exc.details["max_depth"] == 64
        assert "64 levels" in exc.message

    def test_validation_error(self):
        """Test validation error keeps the field."""
        exc = ValidationError("Unsupported format: wkt", field="format_name")

        assert exc.error_code == "VALIDATION_ERROR"
        assert exc.details["field"] == "format_name"

    def test_configuration_error(self):
        """Test configuration error keeps the key."""
        exc = ConfigurationError("Engine disabled", config_key="use_geos")

        assert exc.error_code == "CONFIGURATION_ERROR"
        assert exc.details["config_key"] == "use_geos"
        assert any("GEOINTERCHANGE_" in s for s in exc.suggestions)

    @pytest.mark.parametrize(
        "exc",
        [
            FormatError("x"),
            EmptyInputError(),
            GeometryError("x"),
            UnsupportedGeometryError("x"),
            NestingDepthError(1),
            ValidationError("x"),
            ConfigurationError("x"),
        ],
    )
    def test_hierarchy(self, exc):
        """Test every error derives from GeoInterchangeError."""
        assert isinstance(exc, GeoInterchangeError)
