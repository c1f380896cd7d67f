"""ErrorOr - a value or a list of structured errors, without exceptions.

Expected failures travel inside the container as Error values and are
propagated, substituted or consumed by a small fluent combinator algebra
with matching asyncio counterparts.

Quick Start:
    >>> from erroror import Err, Error, ErrorOr, Ok
    >>>
    >>> def create_user(name: str) -> ErrorOr[str]:
    ...     errors = []
    ...     if not name:
    ...         errors.append(Error.validation(code="User.Name", description="Name is required"))
    ...     if name == "admin":
    ...         errors.append(Error.conflict(code="User.Exists"))
    ...     return Err(errors) if errors else Ok(name)
    >>>
    >>> create_user("amichai").match(
    ...     lambda name: f"created {name}",
    ...     lambda errors: f"{len(errors)} error(s)",
    ... )
    'created amichai'

Async chains:
    >>> await (
    ...     Ok(user_id)
    ...     .then_async(load_user)
    ...     .switch_first_async(greet, report)
    ... )

Configuration (environment, ERROROR_ prefix):
    >>> from erroror import configure_from_settings
    >>> configure_from_settings()  # honours ERROROR_LOG_LEVEL / ERROROR_LOG_FORMAT
"""

from __future__ import annotations

__version__ = "0.1.0"

# Errors
from .errors import Error, ErrorOrException, ErrorType, InvalidAccessError, InvalidOperationError

# Container
from .monads import (
    Created,
    Deleted,
    Err,
    ErrorOr,
    ErrorOrTask,
    Errors,
    Ok,
    Result,
    Success,
    Updated,
    to_error_or,
)

# Settings
from .config import ErrorOrSettings, LoggingSettings, clear_settings_cache, get_settings

# Logging
from .observability import configure_from_settings, configure_logging, get_logger

__all__ = [
    "__version__",
    # Errors
    "Error", "ErrorType", "ErrorOrException", "InvalidOperationError", "InvalidAccessError",
    # Container
    "ErrorOr", "ErrorOrTask", "Errors", "Ok", "Err", "to_error_or",
    # Markers
    "Result", "Success", "Created", "Updated", "Deleted",
    # Settings
    "ErrorOrSettings", "LoggingSettings", "get_settings", "clear_settings_cache",
    # Logging
    "configure_logging", "configure_from_settings", "get_logger",
]
