"""Helpers to read property lists and extract typed values."""

from __future__ import annotations

import os
import plistlib
from datetime import datetime, timezone
from typing import Any
from xml.parsers.expat import ExpatError

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_U64_MAX = 2**64 - 1


def parse_plist(path: str | os.PathLike) -> Any:
    """Load the plist at ``path``; an empty dict when it can't be read."""
    try:
        with open(path, "rb") as fp:
            return plistlib.load(fp)
    except (OSError, ValueError, ExpatError):
        print(f"Error reading plist file {os.fspath(path)!r}")
        return {}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def get_str_value(data: dict, key: str) -> str | None:
    value = data.get(key)
    return value if isinstance(value, str) else None


def get_int_value(data: dict, key: str) -> int | None:
    """Integer value when it fits a signed 64-bit integer."""
    value = data.get(key)
    if _is_int(value) and _I64_MIN <= value <= _I64_MAX:
        return value
    return None


def get_uint_value(data: dict, key: str) -> int | None:
    """Integer value when it fits an unsigned 64-bit integer."""
    value = data.get(key)
    if _is_int(value) and 0 <= value <= _U64_MAX:
        return value
    return None


def get_bool_value(data: dict, key: str) -> bool | None:
    value = data.get(key)
    return value if isinstance(value, bool) else None


def get_dict_value(data: dict, key: str) -> dict | None:
    value = data.get(key)
    return dict(value) if isinstance(value, dict) else None


def get_date_value(data: dict, key: str) -> datetime | None:
    """Date value as an aware UTC datetime."""
    value = data.get(key)
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def get_data_value(data: dict, key: str) -> bytes | None:
    value = data.get(key)
    return bytes(value) if isinstance(value, (bytes, bytearray)) else None


def get_array_value(data: dict, key: str) -> list | None:
    value = data.get(key)
    return list(value) if isinstance(value, list) else None