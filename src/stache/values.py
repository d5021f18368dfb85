"""
Value Model for stache

Documents bound to templates are trees of immutable Value objects.

Variants:
    - NullValue    (absent / falsy)
    - BoolValue    (False is falsy, True is present but not iterable)
    - NumberValue  (present, has a text form)
    - StringValue  (present, has a text form)
    - ArrayValue   (ordered, drives repetition)
    - MapValue     (string-keyed, the only variant supporting key lookup)

ARCHITECTURAL RULE:
    Values are read-only once built.
    Scope frames hold references into this tree but never own or mutate it,
    so a single document can be shared by any number of concurrent renders.
"""

from __future__ import annotations

import json
from abc import ABC
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Tuple, Union


class Value(ABC):
    """
    Base class for all document values.

    This is intentionally minimal.
    It exists to provide type-safety for the value hierarchy.

    DO NOT:
        - Add scope lookup here (belongs in resolver)
        - Add repetition rules here (belongs in sections)
        - Add escaping here (belongs in handler)
    """
    pass


@dataclass(frozen=True)
class NullValue(Value):
    """Explicit null. Treated as absent by sections and interpolation."""
    pass


@dataclass(frozen=True)
class BoolValue(Value):
    """
    Boolean flag.

    False skips a section; True renders it exactly once with the
    enclosing context unchanged.
    """

    value: bool


@dataclass(frozen=True)
class NumberValue(Value):
    """Integer or floating point number."""

    value: Union[int, float]


@dataclass(frozen=True)
class StringValue(Value):
    """
    Text value.

    IMPORTANT:
        An empty string is still a present value.
        It emits nothing when interpolated, but a section over it renders once.
    """

    value: str


@dataclass(frozen=True)
class ArrayValue(Value):
    """
    Ordered sequence of values.

    The element count is the repetition count of a section bound to it.
    An empty array is the only present value that repeats zero times.
    """

    items: Tuple[Value, ...] = ()

    def __post_init__(self):
        # Plain Python leaves are converted so every element is a Value
        object.__setattr__(self, "items", tuple(from_python(item) for item in self.items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def get(self, index: int) -> Optional[Value]:
        """
        Element at a zero-based position.

        Returns:
            The element, or None when the index is out of range
        """
        if 0 <= index < len(self.items):
            return self.items[index]
        return None


@dataclass(frozen=True)
class MapValue(Value):
    """
    String-keyed mapping.

    This is the only variant that exposes lookup by key.
    Name resolution matches on this class explicitly instead of probing
    arbitrary values for a getter.
    """

    entries: Mapping[str, Value] = field(default_factory=dict)

    def __post_init__(self):
        # Freeze a private copy so callers cannot mutate the document later
        entries = {}
        for key, item in dict(self.entries).items():
            if not isinstance(key, str):
                raise TypeError(f"Map keys must be strings, got {type(key).__name__}: {key!r}")
            entries[key] = from_python(item)
        object.__setattr__(self, "entries", MappingProxyType(entries))

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.entries.items(), key=lambda kv: kv[0])))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MapValue):
            return NotImplemented
        return dict(self.entries) == dict(other.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: str) -> bool:
        return key in self.entries

    def lookup(self, key: str) -> Optional[Value]:
        """
        Exact-key lookup.

        Args:
            key: Map key (any string, including "")

        Returns:
            The stored value, or None when the key is absent
        """
        return self.entries.get(key)


NULL = NullValue()
TRUE = BoolValue(True)
FALSE = BoolValue(False)


def is_falsy(value: Optional[Value]) -> bool:
    """True for NotFound (None), Null and False."""
    if value is None or isinstance(value, NullValue):
        return True
    return isinstance(value, BoolValue) and not value.value


def from_python(obj: Any) -> Value:
    """
    Build a Value tree from plain Python data.

    Accepts None, bool, int, float, str, list/tuple, dict and existing
    Value objects (returned unchanged).

    Raises:
        TypeError: For unsupported types or non-string map keys
    """
    if isinstance(obj, Value):
        return obj
    if obj is None:
        return NULL
    # bool first: bool is a subclass of int
    if isinstance(obj, bool):
        return TRUE if obj else FALSE
    if isinstance(obj, (int, float)):
        return NumberValue(obj)
    if isinstance(obj, str):
        return StringValue(obj)
    if isinstance(obj, (list, tuple)):
        return ArrayValue(tuple(obj))
    if isinstance(obj, dict):
        return MapValue(obj)
    raise TypeError(f"Unsupported document type: {type(obj)}")


def to_python(value: Value) -> Any:
    """Convert a Value tree back into plain Python data."""
    if isinstance(value, NullValue):
        return None
    if isinstance(value, (BoolValue, NumberValue, StringValue)):
        return value.value
    if isinstance(value, ArrayValue):
        return [to_python(item) for item in value.items]
    if isinstance(value, MapValue):
        return {key: to_python(item) for key, item in value.entries.items()}
    raise TypeError(f"Unsupported Value type: {type(value)}")


def _number_text(number: Union[int, float]) -> str:
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return str(number)


def to_text(value: Value) -> str:
    """
    Text representation used for interpolation.

    Examples:
        NULL                      -> ""
        TRUE                      -> "true"
        NumberValue(3.0)          -> "3"
        StringValue("User 0")     -> "User 0"
        ArrayValue((TRUE,))       -> "[true]"
    """
    if isinstance(value, NullValue):
        return ""
    if isinstance(value, BoolValue):
        return "true" if value.value else "false"
    if isinstance(value, NumberValue):
        return _number_text(value.value)
    if isinstance(value, StringValue):
        return value.value
    if isinstance(value, (ArrayValue, MapValue)):
        return json.dumps(to_python(value), separators=(",", ":"), ensure_ascii=False)
    raise TypeError(f"Unsupported Value type: {type(value)}")
