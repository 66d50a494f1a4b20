# /scholar_track/services/mapping_helpers/coercion.py

"""
Total coercion helpers shared by every field mapper. None of these raise:
bad input collapses to the supplied default.
"""

from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Type

from pydantic import BaseModel


def to_str(value: Any, default: str = "") -> str:
    if value is None:
        return default
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def to_optional_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return to_str(value)


def to_float(value: Any, default: float = 0.0) -> float:
    if value is None or isinstance(value, bool) or str(value).strip() == "":
        return default
    try:
        return float(value)
    except (ValueError, TypeError):
        return default


def to_int(value: Any, default: int = 0) -> int:
    if value is None or isinstance(value, bool) or str(value).strip() == "":
        return default
    try:
        return int(float(value))
    except (ValueError, TypeError, OverflowError):
        return default


def to_number(value: Any, default: float = 0) -> float:
    """Keeps integral values as int, everything else as float."""
    number = to_float(value, default)
    return int(number) if float(number).is_integer() else number


def to_enum_value(value: Any, enum_cls: Type[Enum], default: Enum) -> str:
    """Returns the enum's value for `value`, or the default's for anything unrecognised."""
    raw = to_str(value)
    for member in enum_cls:
        if member.value == raw:
            return member.value
    return default.value


def parse_id_list(value: Any) -> List[int]:
    """
    Parses a comma-joined id string (or an already-split list) into unique
    integer ids, preserving first-seen order and skipping junk entries.
    """
    if value is None:
        return []
    if isinstance(value, str):
        parts: Iterable[Any] = value.split(",")
    elif isinstance(value, (list, tuple, set)):
        parts = value
    else:
        parts = [value]

    ids: List[int] = []
    for part in parts:
        item_id = to_int(part, default=-1)
        if item_id > 0 and item_id not in ids:
            ids.append(item_id)
    return ids


def join_id_list(value: Any) -> str:
    return ",".join(str(item_id) for item_id in parse_id_list(value))


def map_fields(data: Mapping[str, Any], write_fields: Dict[str, Tuple[str, Callable[[Any], Any]]]) -> Dict[str, Any]:
    """
    Reverse-maps the keys present in `data` through a table of
    view field -> (backend field, coercer). Keys outside the table are dropped.
    """
    payload: Dict[str, Any] = {}
    for view_key, (backend_key, coerce) in write_fields.items():
        if view_key in data:
            payload[backend_key] = coerce(data[view_key])
    return payload


def as_input_dict(data: Any) -> Dict[str, Any]:
    """Accepts a plain mapping or a pydantic model; unset optional fields are dropped."""
    if isinstance(data, BaseModel):
        return data.model_dump(exclude_none=True)
    return dict(data or {})
