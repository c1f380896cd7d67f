"""ErrorOr container and its combinator algebra.

Example:
    >>> from erroror import Err, Error, Ok
    >>>
    >>> def parse_age(raw: str) -> ErrorOr[int]:
    ...     if not raw.isdigit():
    ...         return Err(Error.validation(code="Age.NotANumber"))
    ...     return Ok(int(raw))
    >>>
    >>> parse_age("41").then(lambda age: age + 1).value
    42
    >>> parse_age("x").else_value(0).value
    0
"""

from .result import Err, ErrorOr, Errors, Ok, to_error_or
from .task import ErrorOrTask
from .types import Created, Deleted, Result, Success, Updated

__all__ = [
    # Core types
    "ErrorOr", "ErrorOrTask", "Errors",
    # Constructors
    "Ok", "Err", "to_error_or",
    # Markers
    "Result", "Success", "Created", "Updated", "Deleted",
]
