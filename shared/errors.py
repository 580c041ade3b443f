"""
Shared error handling for the GraphQL query gateway.
"""

from typing import Dict, Any, Optional, Mapping
from pydantic import BaseModel
from opentelemetry import trace


class ErrorResponse(BaseModel):
    """Standard error response format."""

    trace_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = {}


class GatewayException(Exception):
    """Base exception for gateway errors raised by this package."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        # Get trace ID from current span
        trace_id = None
        current_span = trace.get_current_span()
        if current_span and current_span.is_recording():
            span_context = current_span.get_span_context()
            if span_context.trace_id != 0:
                trace_id = f"{span_context.trace_id:032x}"

        return ErrorResponse(
            trace_id=trace_id,
            code=self.code,
            message=self.message,
            details=self.details
        )


class ConfigurationError(GatewayException):
    """Missing or invalid construction options."""

    def __init__(self, message: str = "Invalid configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)


class NoDataError(GatewayException):
    """A well-formed response that carries no ``data`` field."""

    def __init__(self, message: str = "No data", details: Optional[Dict[str, Any]] = None):
        super().__init__("NO_DATA", message, details)

    @classmethod
    def from_response(cls, response: Any) -> "NoDataError":
        """Build the error from the offending response payload."""
        if not isinstance(response, Mapping):
            return cls(details={"response_type": type(response).__name__})

        details: Dict[str, Any] = {"response_keys": sorted(str(key) for key in response)}
        if response.get("errors"):
            details["errors"] = response["errors"]
        return cls(details=details)
