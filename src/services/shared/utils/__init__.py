from .http_response import (
    ErrorResponse,
    api_response,
    bad_request_response,
    error_response,
    internal_error_response,
    status_code_for,
    validation_error_response,
)
from .validators import to_decimal

__all__ = [
    "ErrorResponse",
    "api_response",
    "bad_request_response",
    "error_response",
    "internal_error_response",
    "status_code_for",
    "validation_error_response",
    "to_decimal",
]
