"""Schema-tolerant field access for parsed JSON documents.

A lookup yields one of three outcomes: Present(value), ABSENT, or
WrongType(value). Consumers that only care about usable values treat ABSENT
and WrongType the same way via ``value_or``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Union


class JsonKind(str, Enum):
    STRING = "string"
    BOOLEAN = "boolean"
    NUMBER = "number"
    ARRAY = "array"
    OBJECT = "object"
    NULL = "null"


def kind_of(value: Any) -> JsonKind:
    """Return the JSON kind of a value produced by ``json.loads``."""
    if value is None:
        return JsonKind.NULL
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, list):
        return JsonKind.ARRAY
    if isinstance(value, dict):
        return JsonKind.OBJECT
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


@dataclass(frozen=True)
class Present:
    value: Any

    @property
    def present(self) -> bool:
        return True

    def value_or(self, default: Any = None) -> Any:
        return self.value


@dataclass(frozen=True)
class Absent:
    @property
    def present(self) -> bool:
        return False

    def value_or(self, default: Any = None) -> Any:
        return default


@dataclass(frozen=True)
class WrongType:
    value: Any
    expected: JsonKind

    @property
    def present(self) -> bool:
        return False

    def value_or(self, default: Any = None) -> Any:
        return default


ABSENT = Absent()

FieldValue = Union[Present, Absent, WrongType]


def lookup(node: Any, *path: str) -> FieldValue:
    """Walk object keys from ``node``; any non-object step or missing key is ABSENT."""
    current = node
    for key in path:
        if not isinstance(current, dict) or key not in current:
            return ABSENT
        current = current[key]
    return Present(current)


def typed(field: FieldValue, expected: JsonKind) -> FieldValue:
    """Narrow a lookup result to ``expected``; a mismatch becomes WrongType."""
    if not isinstance(field, Present):
        return field
    if kind_of(field.value) is expected:
        return field
    return WrongType(field.value, expected)


def unique_strings(values: List[Any]) -> List[str]:
    """Collect string elements in first-occurrence order without duplicates."""
    seen: Dict[str, None] = {}
    for value in values:
        if isinstance(value, str):
            seen.setdefault(value, None)
    return list(seen)
