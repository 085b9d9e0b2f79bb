from __future__ import annotations

import binascii
import datetime
import json
import typing
import uuid
from decimal import Decimal

from relay_pagination.exceptions import InvalidCursorError
from relay_pagination.text_utils.base64 import from_base64, to_base64

__all__ = ["CursorStructure", "to_cursor", "from_cursor"]


TYPE_KEY = "$type"

# Values json can not round trip on its own
ENCODERS: typing.Dict[type, typing.Tuple[str, typing.Callable[[typing.Any], str]]] = {
    datetime.datetime: ("datetime", lambda x: x.isoformat()),
    datetime.date: ("date", lambda x: x.isoformat()),
    Decimal: ("decimal", str),
    uuid.UUID: ("uuid", str),
}

DECODERS: typing.Dict[str, typing.Callable[[str], typing.Any]] = {
    "datetime": datetime.datetime.fromisoformat,
    "date": datetime.date.fromisoformat,
    "decimal": Decimal,
    "uuid": uuid.UUID,
}


def _encode_value(value: typing.Any) -> typing.Dict[str, str]:
    # datetime is a subclass of date, check the exact type first
    for value_type in (type(value), *ENCODERS):
        if value_type in ENCODERS and isinstance(value, value_type):
            type_name, encode = ENCODERS[value_type]
            return {TYPE_KEY: type_name, "value": encode(value)}
    raise TypeError(f"Object of type {type(value).__name__} can not be stored in a cursor")


def _decode_value(contents: typing.Dict[str, typing.Any]) -> typing.Any:
    type_name = contents.get(TYPE_KEY)
    if type_name is None:
        return contents
    try:
        return DECODERS[type_name](contents["value"])
    except (KeyError, ValueError, ArithmeticError) as exc:
        raise InvalidCursorError(f"Invalid cursor value of type {type_name}") from exc


class CursorStructure(typing.NamedTuple):
    """Position in an ordering: the ordering column values of one node"""

    values: typing.Dict[str, typing.Any]

    @classmethod
    def from_dict(cls, contents: typing.Dict) -> CursorStructure:
        values = contents["values"]
        if not isinstance(values, dict):
            raise InvalidCursorError("Invalid cursor contents")
        return cls(values=values)

    def to_dict(self) -> typing.Dict[str, typing.Any]:
        return {"values": self.values}

    def serialize(self) -> str:
        ser = to_base64(json.dumps(self.to_dict(), default=_encode_value, sort_keys=True))
        return ser

    @classmethod
    def deserialize(cls, serialized: str) -> CursorStructure:
        if not isinstance(serialized, str):
            raise InvalidCursorError("Invalid cursor, expected a string")
        try:
            contents = json.loads(from_base64(serialized), object_hook=_decode_value)
            return cls.from_dict(contents)
        except (binascii.Error, UnicodeDecodeError, ValueError, KeyError, TypeError) as exc:
            raise InvalidCursorError(f"Invalid cursor: {serialized!r}") from exc

    def value_for(self, column: str) -> typing.Any:
        try:
            return self.values[column]
        except KeyError:
            raise InvalidCursorError(f"Invalid cursor for ordering, missing column {column}") from None


def to_cursor(values: typing.Dict[str, typing.Any]) -> str:
    return CursorStructure(values=values).serialize()


def from_cursor(cursor: str) -> CursorStructure:
    return CursorStructure.deserialize(cursor)
