"""Cursor token encoding and decoding.

A cursor token is the URL-safe base64 encoding (padding stripped) of a JSON
array holding a row's sort-key values, in key order.
"""

import base64
import binascii
import json
from typing import Any, Dict, List, Optional, Sequence, get_type_hints

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import to_jsonable_python

from ..errors.problem_details import InvalidCursorError
from ..naming import read_field, to_snake_case


class CursorEncoder:
    """Encodes an entity's key-field values into a cursor token."""

    def __init__(self, keys: Sequence[str]):
        self.keys = list(keys)

    def encode(self, entity: Any) -> str:
        """Encode pagination cursor.

        Args:
            entity: Row to encode, a model, object or mapping

        Returns:
            Base64 encoded cursor string

        Raises:
            ValueError: If a key is missing or a value is not serializable
        """
        try:
            values = [read_field(entity, key) for key in self.keys]
            cursor_json = json.dumps(to_jsonable_python(values), separators=(",", ":"))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Failed to encode cursor: {e}") from e

        encoded = base64.urlsafe_b64encode(cursor_json.encode("utf-8")).decode("ascii")
        return encoded.rstrip("=")


class CursorDecoder:
    """Decodes cursor tokens back into ordered key-field values.

    When ``model`` is an annotated class (a pydantic model, a dataclass or a
    plain class with annotations), each value is validated to the annotated
    type of the matching field, so timestamps and UUIDs come back typed
    instead of as JSON strings.
    """

    def __init__(self, model: Optional[type], keys: Sequence[str]):
        self.keys = list(keys)
        hints = self._field_types(model)
        self._adapters = [self._adapter_for(hints, key) for key in self.keys]

    @staticmethod
    def _field_types(model: Optional[type]) -> Dict[str, Any]:
        if not isinstance(model, type):
            return {}
        if issubclass(model, BaseModel):
            # get_type_hints would also walk BaseModel's own annotations
            return {
                name: field.annotation
                for name, field in model.model_fields.items()
                if field.annotation is not None
            }
        return get_type_hints(model)

    @staticmethod
    def _adapter_for(hints: Dict[str, Any], key: str) -> Optional[TypeAdapter]:
        for name in (key, to_snake_case(key)):
            if name in hints:
                return TypeAdapter(hints[name])
        return None

    def decode(self, cursor: Optional[str]) -> List[Any]:
        """Decode pagination cursor.

        Args:
            cursor: Cursor token; empty or None yields no values

        Returns:
            Key-field values in key order

        Raises:
            InvalidCursorError: If the cursor is malformed or has the wrong arity
        """
        if not cursor:
            return []

        try:
            padded = cursor + "=" * (-len(cursor) % 4)
            cursor_json = base64.urlsafe_b64decode(padded.encode("ascii")).decode("utf-8")
            values = json.loads(cursor_json)
        except (ValueError, binascii.Error, UnicodeError) as e:
            raise InvalidCursorError(f"Invalid cursor format: {e}", cursor=cursor)

        if not isinstance(values, list) or len(values) != len(self.keys):
            raise InvalidCursorError(
                f"Cursor must hold {len(self.keys)} value(s) for keys {self.keys}",
                cursor=cursor
            )

        try:
            return [
                adapter.validate_python(value) if adapter is not None else value
                for adapter, value in zip(self._adapters, values)
            ]
        except ValidationError as e:
            raise InvalidCursorError(f"Invalid cursor value: {e}", cursor=cursor)
