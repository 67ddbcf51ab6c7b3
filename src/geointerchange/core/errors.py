"""
Exception hierarchy for geointerchange.

Every error raised by the library derives from GeoInterchangeError so callers
can catch library failures in one place, while the subclasses keep malformed
input, degenerate input and programming mistakes apart.
"""

from typing import Any, Dict, List, Optional, Union


class GeoInterchangeError(Exception):
    """
    Base exception for all geointerchange errors.

    Attributes:
        error_code: String identifier for the error type
        message: Human readable error message
        details: Technical details for logging/debugging
        suggestions: Optional list of resolution suggestions
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize GeoInterchangeError.

        Args:
            message: Human readable error message
            error_code: String identifier for the error type
            details: Technical details for logging
            suggestions: List of suggestions for resolution
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.suggestions = suggestions or []

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to a dictionary.

        Returns:
            Dictionary representation of the error
        """
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "suggestions": self.suggestions,
        }

    def __str__(self) -> str:
        """String representation of the exception."""
        return f"{self.error_code}: {self.message}"

    def __repr__(self) -> str:
        """Detailed string representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"error_code='{self.error_code}', "
            f"message='{self.message}')"
        )


class FormatError(GeoInterchangeError):
    """
    Raised when input text cannot be decoded.

    Used for malformed markup, unparseable coordinates, or a required
    sub-element missing where the format defines no empty fallback.
    The offending input is kept on ``text`` for diagnostics.
    """

    error_code = "FORMAT_ERROR"

    def __init__(
        self,
        message: str,
        text: Optional[Union[str, bytes]] = None,
        format_name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize FormatError.

        Args:
            message: Human readable error message
            text: The original input that failed to decode
            format_name: Name of the format being decoded (e.g. 'KML')
            details: Technical details about the failure
            suggestions: List of suggestions for fixing the input
        """
        error_details = details or {}
        if format_name:
            error_details["format"] = format_name

        default_suggestions = [
            "Check the input for XML syntax errors",
            "Verify coordinates are numeric",
        ]

        super().__init__(
            message=message,
            error_code=self.error_code,
            details=error_details,
            suggestions=suggestions or default_suggestions,
        )
        self.text = text
        self.format_name = format_name


class EmptyInputError(FormatError):
    """
    Raised when decoding or reduction produces no geometry at all.

    Distinct from a malformed document: the input was readable but held
    nothing to build a geometry from.
    """

    error_code = "EMPTY_INPUT"

    def __init__(
        self,
        message: str = "No geometries to reduce",
        text: Optional[Union[str, bytes]] = None,
        format_name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            text=text,
            format_name=format_name,
            details=details,
            suggestions=["Make sure the input contains at least one geometry element"],
        )


class GeometryError(GeoInterchangeError):
    """
    Raised when a geometry cannot be built.

    Used for structural invariant violations in the object model and for
    failures converting to or from the external geometry engine.
    """

    def __init__(
        self,
        message: str,
        geometry_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize GeometryError.

        Args:
            message: Human readable error message
            geometry_type: Type of geometry that caused the error
            details: Technical details about the geometry error
            suggestions: List of suggestions for fixing the geometry
        """
        error_details = details or {}
        if geometry_type:
            error_details["geometry_type"] = geometry_type

        super().__init__(
            message=message,
            error_code="GEOMETRY_ERROR",
            details=error_details,
            suggestions=suggestions or ["Check the components passed to the constructor"],
        )


class UnsupportedGeometryError(GeoInterchangeError):
    """Raised when asked to serialize something outside the geometry model."""

    def __init__(
        self,
        message: str,
        type_name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        error_details = details or {}
        if type_name:
            error_details["type"] = type_name

        super().__init__(
            message=message,
            error_code="UNSUPPORTED_GEOMETRY",
            details=error_details,
            suggestions=["Pass one of the geointerchange geometry types"],
        )


class NestingDepthError(GeoInterchangeError):
    """Raised when collections nest deeper than the configured limit."""

    def __init__(self, max_depth: int, details: Optional[Dict[str, Any]] = None):
        error_details = details or {}
        error_details["max_depth"] = max_depth

        super().__init__(
            message=f"Geometry nesting exceeds the limit of {max_depth} levels",
            error_code="NESTING_DEPTH_EXCEEDED",
            details=error_details,
            suggestions=["Raise GEOINTERCHANGE_MAX_NESTING_DEPTH if the input is trusted"],
        )
        self.max_depth = max_depth


class ValidationError(GeoInterchangeError):
    """
    Raised when an argument passed to the library is invalid.

    Used for unknown format names and similar caller mistakes.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize ValidationError.

        Args:
            message: Human readable error message
            field: Name of the argument that failed validation
            details: Technical details about the validation failure
            suggestions: List of suggestions for fixing the call
        """
        error_details = details or {}
        if field:
            error_details["field"] = field

        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details=error_details,
            suggestions=suggestions or ["Check the arguments and try again"],
        )


class ConfigurationError(GeoInterchangeError):
    """
    Raised when library configuration prevents an operation.

    Used for invalid settings or a disabled geometry engine.
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize ConfigurationError.

        Args:
            message: Human readable error message
            config_key: Configuration key involved
            details: Technical details about the configuration error
            suggestions: List of suggestions for resolution
        """
        error_details = details or {}
        if config_key:
            error_details["config_key"] = config_key

        default_suggestions = [
            "Check GEOINTERCHANGE_* environment variables",
            "Verify the .env file syntax",
        ]

        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            details=error_details,
            suggestions=suggestions or default_suggestions,
        )
