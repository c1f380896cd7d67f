"""Structured error model.

- ErrorType: Closed error categories (custom integers allowed)
- Error: Immutable structured error with per-category factories
- ErrorOrException and subclasses: raised on container misuse
"""

from .errors import Error, ErrorOrException, ErrorType, InvalidAccessError, InvalidOperationError
from .types import JsonDict, JsonValue

__all__ = [
    # Error model
    "Error", "ErrorType",
    # Misuse exceptions
    "ErrorOrException", "InvalidOperationError", "InvalidAccessError",
    # Metadata aliases
    "JsonDict", "JsonValue",
]
