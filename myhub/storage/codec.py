"""
Date-Tagged JSON Codec

JSON has no date type, so every datetime is written as a tagged record:

    {"__type": "Date", "value": "2024-05-01T08:30:00.000Z"}

and turned back into an aware UTC datetime on read. The ISO format
(millisecond precision, trailing "Z") matches what a browser's
``Date.toISOString()`` produces, so stores written by the web app decode
unchanged.

The codec is an explicit encode/decode pair over plain Python structures,
separate from JSON text handling, so the storage format can be tested on
its own.
"""

import json
from datetime import date, datetime, time, timezone
from decimal import Decimal
from enum import Enum
from typing import Any

DATE_TAG = "Date"
TYPE_FIELD = "__type"
VALUE_FIELD = "value"


class CodecError(ValueError):
    """Raised when stored text cannot be decoded."""
    pass


def format_timestamp(value: datetime) -> str:
    """Render an ISO-8601 UTC timestamp with millisecond precision."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(text: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware UTC datetime."""
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    value = datetime.fromisoformat(text)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class DateTaggedCodec:
    """
    Encode/decode pair for the tagged-date storage schema.

    SCHEMA_VERSION identifies the layout of tagged records. Version 1 is
    ``{"__type": "Date", "value": <ISO-8601>}``.
    """

    SCHEMA_VERSION = 1

    def encode(self, value: Any) -> Any:
        """Replace dates with tagged records, recursively."""
        if isinstance(value, datetime):
            return {TYPE_FIELD: DATE_TAG, VALUE_FIELD: format_timestamp(value)}
        if isinstance(value, date):
            midnight = datetime.combine(value, time(), tzinfo=timezone.utc)
            return {TYPE_FIELD: DATE_TAG, VALUE_FIELD: format_timestamp(midnight)}
        if isinstance(value, Enum):
            return self.encode(value.value)
        if isinstance(value, Decimal):
            # JSON numbers; integral amounts stay integers
            if value == value.to_integral_value():
                return int(value)
            return float(value)
        if isinstance(value, dict):
            return {str(k): self.encode(v) for k, v in value.items()}
        if isinstance(value, (list, tuple, set)):
            return [self.encode(v) for v in value]
        return value

    def decode(self, value: Any) -> Any:
        """Turn tagged records back into datetimes, recursively."""
        if isinstance(value, dict):
            if self._is_date_tag(value):
                try:
                    return parse_timestamp(value[VALUE_FIELD])
                except ValueError as e:
                    raise CodecError(f"Invalid date value: {value[VALUE_FIELD]!r}") from e
            return {k: self.decode(v) for k, v in value.items()}
        if isinstance(value, list):
            return [self.decode(v) for v in value]
        return value

    def dumps(self, value: Any) -> str:
        """Encode and serialize to JSON text."""
        return json.dumps(self.encode(value), ensure_ascii=False)

    def loads(self, text: str) -> Any:
        """Parse JSON text and decode it."""
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise CodecError(f"Stored value is not valid JSON: {e}") from e
        return self.decode(raw)

    @staticmethod
    def _is_date_tag(value: dict) -> bool:
        return (
            value.get(TYPE_FIELD) == DATE_TAG
            and isinstance(value.get(VALUE_FIELD), str)
            and set(value) == {TYPE_FIELD, VALUE_FIELD}
        )
