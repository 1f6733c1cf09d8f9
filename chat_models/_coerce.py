"""Field coercion helpers shared by the model decoders."""
from __future__ import annotations

from typing import Any, Callable, List, Mapping, Optional, TypeVar

T = TypeVar("T")


class SchemaError(ValueError):
    """Raised when a payload does not match the expected record shape."""


def require_mapping(data: Any, record: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise SchemaError(f"{record}: expected an object, got {type(data).__name__}")
    return data


def resolve_identifier(data: Mapping[str, Any], record: str = "record") -> str:
    """Return the canonical id, preferring ``id`` over the legacy ``_id``."""
    for key in ("id", "_id"):
        value = data.get(key)
        if value is None:
            continue
        token = str(value).strip()
        if token:
            return token
    raise SchemaError(f"{record}: missing both 'id' and '_id'")


def require_str(data: Mapping[str, Any], key: str, record: str) -> str:
    value = data.get(key)
    if value is None:
        raise SchemaError(f"{record}: missing required field '{key}'")
    if isinstance(value, (dict, list)):
        raise SchemaError(f"{record}: field '{key}' must be a string")
    return str(value)


def opt_str(data: Mapping[str, Any], key: str, default: Optional[str] = None) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, (dict, list)):
        raise SchemaError(f"field '{key}' must be a string")
    return str(value)


def as_bool(data: Mapping[str, Any], key: str, default: bool = False) -> bool:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def as_int(data: Mapping[str, Any], key: str, default: int = 0) -> int:
    value = data.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise SchemaError(f"field '{key}' must be an integer, got {value!r}") from exc


def opt_int(data: Mapping[str, Any], key: str) -> Optional[int]:
    if data.get(key) is None:
        return None
    return as_int(data, key)


def id_set(data: Mapping[str, Any], key: str) -> frozenset:
    """Decode a list of user ids (plain strings or embedded user objects)."""
    value = data.get(key)
    if value is None:
        return frozenset()
    if not isinstance(value, list):
        raise SchemaError(f"field '{key}' must be a list")
    ids = set()
    for entry in value:
        if isinstance(entry, Mapping):
            ids.add(resolve_identifier(entry, key))
        elif entry is not None and str(entry):
            ids.add(str(entry))
    return frozenset(ids)


def record_list(data: Mapping[str, Any], key: str, decode: Callable[[Any], T], *, required: bool = False) -> List[T]:
    value = data.get(key)
    if value is None:
        if required:
            raise SchemaError(f"missing required list '{key}'")
        return []
    if not isinstance(value, list):
        raise SchemaError(f"field '{key}' must be a list")
    return [decode(entry) for entry in value]


def opt_record(data: Mapping[str, Any], key: str, decode: Callable[[Any], T]) -> Optional[T]:
    value = data.get(key)
    if value is None:
        return None
    return decode(value)


def compact(payload: Mapping[str, Any]) -> dict:
    """Drop ``None`` values so optional request fields are omitted on the wire."""
    return {key: value for key, value in payload.items() if value is not None}


def envelope_list(data: Any, key: str, decode: Callable[[Any], T]) -> List[T]:
    """Decode list envelopes such as ``{"chats": [...]}``."""
    mapping = require_mapping(data, f"{key} envelope")
    return record_list(mapping, key, decode, required=True)
