"""Base model for rosterwatch input and output types.

Every model inherits from :class:`RosterBaseModel` which provides:

* ``alias_generator=to_camel`` so camelCase snapshot keys
  (``isOnline``, ``spawnTime``, ``leaderId``) map to snake_case fields.
* ``populate_by_name`` so Python callers can use the field names directly.
* Immutability, so a record handed to the roster cannot change under it.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def coerce_identifier(value: Any) -> Any:
    """Normalise an upstream identifier to a stripped string.

    Numeric ids (e.g. 64-bit platform account ids) arrive as ints in some
    payloads and as strings in others; both map to the same key.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value.strip()
    return value


class RosterBaseModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )
