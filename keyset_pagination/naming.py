"""Model field name to storage column name conversion."""

import re
from collections.abc import Mapping
from typing import Any

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


def to_snake_case(name: str) -> str:
    """Convert a field name to snake_case.

    Examples:
        ID -> id, CreatedAt -> created_at, userID -> user_id,
        HTTPStatus -> http_status, created_at -> created_at

    Digits stay attached to the word before them: Field1Name -> field1_name
    and Address2 -> address2, not field_1_name or address_2. Columns whose
    storage names split digits out need a snake_case key instead.
    """
    name = name.replace("-", "_").replace(" ", "_")
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _WORD_BOUNDARY.sub(r"\1_\2", name)
    return name.lower()


def read_field(entity: Any, name: str) -> Any:
    """Read a field from a mapping or object.

    The name is tried as given, then in snake_case.

    Raises:
        KeyError: If the entity has no such field
    """
    for candidate in dict.fromkeys((name, to_snake_case(name))):
        if isinstance(entity, Mapping):
            if candidate in entity:
                return entity[candidate]
        elif hasattr(entity, candidate):
            return getattr(entity, candidate)
    raise KeyError(f"{type(entity).__name__} has no field {name!r}")
