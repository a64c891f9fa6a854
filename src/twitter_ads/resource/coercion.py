"""Coercion and wire rendering of typed attribute values.

Values are coerced once, on assignment or when decoded from a server
response, into a single internal representation per semantic type:

- ``boolean``: :class:`bool`
- ``timestamp``: timezone-aware :class:`datetime.datetime` in UTC
- ``opaque``: the value as given

Parsing of booleans and timestamps is delegated to pydantic's lax
validation so the accepted spellings match the rest of the SDK's models.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import TypeAdapter, ValidationError

from ..exceptions import CoercionError
from .schema import Property, PropertyType

_BOOL = TypeAdapter(bool)
_DATETIME = TypeAdapter(datetime)


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    return errors[0]["msg"] if errors else str(exc)


def coerce_boolean(name: str, raw: Any) -> bool:
    """Normalize a boolean or boolean-like value.

    :raises CoercionError: If ``raw`` is not boolean-like
    """
    if isinstance(raw, str):
        raw = raw.strip()
    try:
        return _BOOL.validate_python(raw)
    except ValidationError as e:
        raise CoercionError(name, raw, PropertyType.BOOLEAN.value, _first_error(e)) from e


def coerce_timestamp(name: str, raw: Any) -> datetime:
    """Normalize an ISO-8601 string, epoch number or datetime to UTC.

    Naive values are taken to be UTC already.

    :raises CoercionError: If ``raw`` cannot be read as an instant
    """
    if isinstance(raw, bool):
        raise CoercionError(name, raw, PropertyType.TIMESTAMP.value, "booleans are not instants")
    if isinstance(raw, str):
        raw = raw.strip()
    try:
        value = _DATETIME.validate_python(raw)
    except ValidationError as e:
        raise CoercionError(name, raw, PropertyType.TIMESTAMP.value, _first_error(e)) from e
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def coerce(prop: Property, raw: Any) -> Any:
    """Coerce ``raw`` according to ``prop``'s declared type.

    ``None`` is accepted for every type and kept as an explicit null.

    :param prop: The declared property
    :type prop: Property
    :param raw: Value supplied by a caller or decoded from a response
    :type raw: Any
    :return: The normalized value
    :rtype: Any
    :raises CoercionError: If the value is malformed for the declared type
    """
    if raw is None:
        return None
    if prop.type is PropertyType.BOOLEAN:
        return coerce_boolean(prop.name, raw)
    if prop.type is PropertyType.TIMESTAMP:
        return coerce_timestamp(prop.name, raw)
    return raw


def format_timestamp(value: datetime) -> str:
    """Render an instant as ISO-8601 UTC with a ``Z`` suffix."""
    text = value.astimezone(timezone.utc).replace(tzinfo=None).isoformat()
    return f"{text}Z"


def render(prop: Property, value: Any) -> Any:
    """Render a coerced value in its wire form."""
    if value is None:
        return None
    if prop.type is PropertyType.TIMESTAMP:
        return format_timestamp(value)
    return value
