# pandora_client/points.py
"""Point codec for the ingestion record format.

A record is an ordered set of ``key=value`` fields separated by tabs and
terminated by a single newline::

    field1=value1\\tfield2=value2\\t...\\tfieldN=valueN\\n

Several records are sent together by concatenating their serialized forms.
"""
from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from datetime import datetime
from typing import Any

from .config import DEFAULT_MAX_POINT_SIZE
from .exceptions import InvalidArgument

log = logging.getLogger("pandora_client.points")

FIELD_SEP = "\t"
RECORD_SEP = "\n"

_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1


@dataclasses.dataclass(frozen=True)
class Field:
    """A single ``key=value`` pair; ``value`` is already in its wire form."""

    key: str
    value: str
    size: int = dataclasses.field(init=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "size", len(str(self).encode("utf-8")))

    def __str__(self) -> str:
        return f"{self.key}={self.value}"


def escape_text(value: str) -> str:
    """Escape the record delimiters so a text value cannot split a record."""
    return value.replace("\n", "\\n").replace("\t", "\\t")


def format_time(value: datetime) -> str:
    """Render ``value`` in the local time zone as ``yyyy-MM-ddTHH:mm:ss.SSS+HH:MM``.

    Naive datetimes are taken to already be local time.
    """
    return value.astimezone().isoformat(timespec="milliseconds")


def _json_default(obj: Any) -> Any:
    if isinstance(obj, datetime):
        return format_time(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def encode_json(value: Any) -> str:
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False, default=_json_default)
    except (TypeError, ValueError) as e:
        raise InvalidArgument(f"cannot encode value as JSON: {e}") from e


def render_value(value: Any) -> str:
    """Turn a typed value into the text stored in a field.

    bool must be checked before int since bool is an int subclass.
    """
    if value is None:
        raise InvalidArgument("field value must not be None")
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise InvalidArgument(f"integer {value} does not fit in a signed 64-bit field")
        return str(value)
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, str):
        return escape_text(value)
    if isinstance(value, datetime):
        return format_time(value)
    if isinstance(value, (list, tuple, Mapping)):
        return encode_json(value)
    raise InvalidArgument(f"unsupported field value type: {type(value).__name__}")


class Point:
    """One record: an ordered list of fields plus its running byte size.

    ``max_size`` is the threshold used by :meth:`is_too_large`. It is advisory;
    appends are never rejected because of it.
    """

    def __init__(self, max_size: int = DEFAULT_MAX_POINT_SIZE):
        if max_size <= 0:
            raise InvalidArgument("max_size must be positive")
        self.max_size = max_size
        self._fields: list[Field] = []
        self._size = 0

    # ------------ parsing ------------
    @classmethod
    def from_string(cls, text: str, *, max_size: int = DEFAULT_MAX_POINT_SIZE) -> "Point":
        return parse_record(text, max_size=max_size)

    @classmethod
    def from_lines(cls, text: str, *, max_size: int = DEFAULT_MAX_POINT_SIZE) -> list["Point"]:
        return parse_records(text, max_size=max_size)

    # ------------ building ------------
    def append(self, key: str, value: Any) -> Field:
        """Append ``value`` under ``key``, rendered according to its type.

        Supported: bool, int (signed 64-bit), float, str, datetime,
        list/tuple and mappings (stored as compact JSON).
        """
        if not isinstance(key, str) or not key.strip():
            raise InvalidArgument("field key must be a non-empty string")
        return self._add(Field(key, render_value(value)))

    def extend(self, items: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> "Point":
        pairs = items.items() if isinstance(items, Mapping) else items
        for key, value in pairs:
            self.append(key, value)
        return self

    def _add(self, f: Field) -> Field:
        self._fields.append(f)
        # the field plus the tab or newline that follows it
        self._size += f.size + 1
        return f

    # ------------ size ------------
    def byte_size(self) -> int:
        return self._size

    @property
    def size(self) -> int:
        return self._size

    def is_too_large(self) -> bool:
        return self._size >= self.max_size

    # ------------ access ------------
    @property
    def fields(self) -> tuple[Field, ...]:
        return tuple(self._fields)

    def keys(self) -> list[str]:
        return [f.key for f in self._fields]

    def __len__(self) -> int:
        return len(self._fields)

    def __iter__(self) -> Iterator[Field]:
        return iter(self._fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self._fields == other._fields

    def __repr__(self) -> str:
        return f"Point(fields={len(self._fields)}, size={self._size})"

    # ------------ serialization ------------
    def serialize(self) -> str:
        if not self._fields:
            return ""
        return FIELD_SEP.join(str(f) for f in self._fields) + RECORD_SEP

    __str__ = serialize


def parse_record(text: str, *, max_size: int = DEFAULT_MAX_POINT_SIZE) -> Point:
    """Parse one ``k=v\\tk=v`` line into a Point.

    Each segment is stripped first, so whitespace around a segment is not
    part of its key or value; whitespace around ``=`` is kept. Malformed
    segments (no ``=``, or an empty key) are dropped. Values are kept
    verbatim as text; they are not escaped.
    """
    p = Point(max_size=max_size)
    stripped = text.strip()
    if not stripped:
        return p
    for part in stripped.split(FIELD_SEP):
        part = part.strip()
        if not part:
            continue
        i = part.find("=")
        if i <= 0:
            log.debug("dropping malformed segment %r", part)
            continue
        p._add(Field(part[:i], part[i + 1:]))
    return p


def parse_records(text: str, *, max_size: int = DEFAULT_MAX_POINT_SIZE) -> list[Point]:
    """Parse newline-separated records, skipping blank lines."""
    if not text or not text.strip():
        return []
    return [
        parse_record(line, max_size=max_size)
        for line in text.strip().split(RECORD_SEP)
        if line.strip()
    ]


def serialize_points(points: Iterable[Point]) -> str:
    return "".join(p.serialize() for p in points)
