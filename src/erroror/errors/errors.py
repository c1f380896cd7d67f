"""Structured error model for ErrorOr containers.

Provides error categories, the immutable Error value and the exceptions
raised when a container is misused. Uses Pydantic for validation with
frozen models so errors can be shared freely.
"""

from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType
from typing import Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_serializer,
    field_validator,
)

from .types import JsonDict, JsonMapping


class ErrorType(IntEnum):
    """Closed set of error categories.

    Categories are semantic only; mapping them to status codes or exit
    codes is left to callers. Integers outside this set are custom categories.
    """
    FAILURE = 0
    UNEXPECTED = 1
    VALIDATION = 2
    CONFLICT = 3
    NOT_FOUND = 4
    UNAUTHORIZED = 5
    FORBIDDEN = 6


# Default (code, description) per category
_DEFAULTS: dict[ErrorType, tuple[str, str]] = {
    ErrorType.FAILURE: ("General.Failure", "A failure has occurred."),
    ErrorType.UNEXPECTED: ("General.Unexpected", "An unexpected error has occurred."),
    ErrorType.VALIDATION: ("General.Validation", "A validation error has occurred."),
    ErrorType.CONFLICT: ("General.Conflict", "A conflict error has occurred."),
    ErrorType.NOT_FOUND: ("General.NotFound", "A 'Not Found' error has occurred."),
    ErrorType.UNAUTHORIZED: ("General.Unauthorized", "An 'Unauthorized' error has occurred."),
    ErrorType.FORBIDDEN: ("General.Forbidden", "A 'Forbidden' error has occurred."),
}


class Error(BaseModel):
    """Immutable structured error.

    Attributes:
        type: Category, an ErrorType member or a custom integer
        code: Machine-readable error code
        description: Human-readable description
        metadata: Optional extra key/value context, read-only once set

    Two errors are equal when all fields are equal.

    Example:
        >>> err = Error.not_found(code="User.NotFound", description="No such user")
        >>> str(err)
        "[NOT_FOUND] User.NotFound: No such user"
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        revalidate_instances="never",
        json_schema_extra={
            "title": "Error",
            "examples": [{"type": 2, "code": "User.Name", "description": "Name is required"}],
        },
    )

    type: ErrorType | int = Field(description="Error category")
    code: str = Field(description="Machine-readable error code")
    description: str = Field(description="Human-readable description")
    metadata: JsonMapping | None = Field(default=None, repr=False)

    @field_validator("type", mode="after")
    @classmethod
    def _normalize_type(cls, v: int) -> ErrorType | int:
        """Known integers become ErrorType members, others stay custom."""
        try:
            return ErrorType(v)
        except ValueError:
            return v

    @field_validator("metadata", mode="after")
    @classmethod
    def _freeze_metadata(cls, v: JsonMapping | None) -> JsonMapping | None:
        return None if v is None else MappingProxyType(dict(v))

    @field_serializer("metadata")
    def _dump_metadata(self, v: JsonMapping | None) -> JsonDict | None:
        return None if v is None else dict(v)

    @computed_field
    @property
    def numeric_type(self) -> int:
        """Category as a plain integer."""
        return int(self.type)

    def __hash__(self) -> int:
        """Hash on scalar fields; metadata values may be unhashable."""
        return hash((int(self.type), self.code, self.description))

    def __str__(self) -> str:
        name = self.type.name if isinstance(self.type, ErrorType) else f"Custom({self.type})"
        return f"[{name}] {self.code}: {self.description}"

    # ─────────────────────────────────────────────────────────────────
    # Factories
    # ─────────────────────────────────────────────────────────────────

    @classmethod
    def _of(
        cls,
        type_: ErrorType,
        code: str | None,
        description: str | None,
        metadata: JsonDict | None,
    ) -> Self:
        default_code, default_description = _DEFAULTS[type_]
        return cls(
            type=type_,
            code=default_code if code is None else code,
            description=default_description if description is None else description,
            metadata=metadata,
        )

    @classmethod
    def failure(
        cls, code: str | None = None, description: str | None = None, metadata: JsonDict | None = None,
    ) -> Self:
        """Create a general failure error."""
        return cls._of(ErrorType.FAILURE, code, description, metadata)

    @classmethod
    def unexpected(
        cls, code: str | None = None, description: str | None = None, metadata: JsonDict | None = None,
    ) -> Self:
        """Create an unexpected error."""
        return cls._of(ErrorType.UNEXPECTED, code, description, metadata)

    @classmethod
    def validation(
        cls, code: str | None = None, description: str | None = None, metadata: JsonDict | None = None,
    ) -> Self:
        """Create a validation error."""
        return cls._of(ErrorType.VALIDATION, code, description, metadata)

    @classmethod
    def conflict(
        cls, code: str | None = None, description: str | None = None, metadata: JsonDict | None = None,
    ) -> Self:
        """Create a conflict error."""
        return cls._of(ErrorType.CONFLICT, code, description, metadata)

    @classmethod
    def not_found(
        cls, code: str | None = None, description: str | None = None, metadata: JsonDict | None = None,
    ) -> Self:
        """Create a not-found error."""
        return cls._of(ErrorType.NOT_FOUND, code, description, metadata)

    @classmethod
    def unauthorized(
        cls, code: str | None = None, description: str | None = None, metadata: JsonDict | None = None,
    ) -> Self:
        """Create an unauthorized error."""
        return cls._of(ErrorType.UNAUTHORIZED, code, description, metadata)

    @classmethod
    def forbidden(
        cls, code: str | None = None, description: str | None = None, metadata: JsonDict | None = None,
    ) -> Self:
        """Create a forbidden error."""
        return cls._of(ErrorType.FORBIDDEN, code, description, metadata)

    @classmethod
    def custom(
        cls, type: int, code: str, description: str, metadata: JsonDict | None = None,  # noqa: A002
    ) -> Self:
        """Create an error with an arbitrary numeric category.

        Integers inside the closed set map back onto their ErrorType member.
        """
        return cls(type=type, code=code, description=description, metadata=metadata)


# ═════════════════════════════════════════════════════════════════════════════
# Exceptions
# ═════════════════════════════════════════════════════════════════════════════


class ErrorOrException(Exception):
    """Base for exceptions raised on container misuse.

    These signal programmer errors, never expected failures; expected
    failures travel inside the container as Error values.
    """


class InvalidOperationError(ErrorOrException, ValueError):
    """Raised when a failure container is built from an empty error sequence."""


class InvalidAccessError(ErrorOrException, RuntimeError):
    """Raised when an accessor is read in the wrong state.

    `value` on a failure container and `first_error` on a success
    container both raise this. Check `is_error` first.
    """

    __slots__ = ("errors",)

    def __init__(self, message: str, errors: tuple[Error, ...] = ()) -> None:
        self.errors = errors
        super().__init__(message)
