"""Stable object hashing: a deep textual dump fed to 32-bit FNV-1a."""

from __future__ import annotations

import dataclasses
import enum
import json
from typing import Any

_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619


def _go_name(name: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in name.split("_"))


def _type_name(obj: Any) -> str:
    if obj is None:
        return "interface {}"
    if isinstance(obj, bool):
        return "bool"
    if isinstance(obj, enum.Enum):
        return _type_name(obj.value)
    if isinstance(obj, int):
        return "int"
    if isinstance(obj, float):
        return "float64"
    if isinstance(obj, str):
        return "string"
    if dataclasses.is_dataclass(obj):
        return getattr(obj, "_spew_type", type(obj).__name__)
    if isinstance(obj, (list, tuple)):
        return "[]" + (_type_name(obj[0]) if obj else "interface {}")
    if isinstance(obj, dict):
        if obj:
            k, v = next(iter(obj.items()))
            return f"map[{_type_name(k)}]{_type_name(v)}"
        return "map[string]string"
    return type(obj).__name__


def _body(obj: Any) -> str:
    if obj is None:
        return "<nil>"
    if isinstance(obj, enum.Enum):
        return _body(obj.value)
    if isinstance(obj, bool):
        return "true" if obj else "false"
    if isinstance(obj, (int, float)):
        return str(obj)
    if isinstance(obj, str):
        return json.dumps(obj, ensure_ascii=False)
    if dataclasses.is_dataclass(obj):
        parts = (
            f"{_go_name(f.name)}:{spew_format(getattr(obj, f.name))}"
            for f in dataclasses.fields(obj)
        )
        return "{" + " ".join(parts) + "}"
    if isinstance(obj, (list, tuple)):
        return "[" + " ".join(spew_format(item) for item in obj) + "]"
    if isinstance(obj, dict):
        items = sorted(obj.items(), key=lambda kv: str(kv[0]))
        return "map[" + " ".join(f"{spew_format(k)}:{spew_format(v)}" for k, v in items) + "]"
    return str(obj)


def spew_format(obj: Any) -> str:
    """Render an object as a typed, key-sorted, fully expanded dump."""
    if obj is None:
        return "<nil>"
    return f"({_type_name(obj)}){_body(obj)}"


def hash_object(obj: Any) -> str:
    """Return the decimal FNV-1a 32-bit hash of the object's dump."""
    value = _FNV_OFFSET
    for byte in spew_format(obj).encode("utf-8"):
        value ^= byte
        value = (value * _FNV_PRIME) & 0xFFFFFFFF
    return str(value)