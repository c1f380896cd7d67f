"""Type aliases for error metadata.

Metadata is an open mapping attached to an Error. Callers pass a plain
dict; the Error keeps a read-only view over its own copy.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Union

JsonPrimitive = Union[str, int, float, bool, None]
JsonValue = Union[JsonPrimitive, list[Any], dict[str, Any]]  # Any for recursive slots
JsonDict = dict[str, Any]
JsonMapping = Mapping[str, Any]
