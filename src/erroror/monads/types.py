"""Marker values for operations that succeed without producing data.

Use them as the value type of commands:

    >>> def delete_user(user_id: int) -> ErrorOr[Deleted]:
    ...     if user_id not in users:
    ...         return Err(Error.not_found())
    ...     del users[user_id]
    ...     return Ok(Result.deleted)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Success:
    """Operation completed."""


@dataclass(frozen=True, slots=True)
class Created:
    """Resource created."""


@dataclass(frozen=True, slots=True)
class Updated:
    """Resource updated."""


@dataclass(frozen=True, slots=True)
class Deleted:
    """Resource deleted."""


class Result:
    """Shared marker instances."""

    __slots__ = ()

    success = Success()
    created = Created()
    updated = Updated()
    deleted = Deleted()
