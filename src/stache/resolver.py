"""
Name Resolver for stache

Resolves a possibly-dotted name against a scope chain in two phases:

    1. Chain walk: the first path segment is looked up in each frame's
       context, innermost first. The nearest map holding the key wins.

    2. Absolute descent: the remaining segments navigate strictly INTO the
       value found by phase 1. No further scope walking happens, so a
       missing nested field never falls back to an unrelated ancestor.

Example:
    Scope chain (innermost first):
        {"item": "inner"}
        {"nested": {"other": 1}, "item": "outer"}

    resolve(frame, "item")         -> "inner"   (shadowing)
    resolve(frame, "nested.other") -> 1
    resolve(frame, "nested.item")  -> None      (no fallback to "inner"/"outer")

A result of None means NotFound. It is never raised as an error.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from stache.scope import ScopeFrame
from stache.values import MapValue, Value


def split_name(name: str) -> Tuple[str, List[str]]:
    """
    Split a name into its head and the dotted tail.

    Empty segments are kept as literal keys.

    Examples:
        "user"        -> ("user", [])
        "user.name"   -> ("user", ["name"])
        "a."          -> ("a", [""])
        ".a"          -> ("", ["a"])
    """
    segments = name.split(".")
    return segments[0], segments[1:]


def find_in_chain(frame: Optional[ScopeFrame], key: str) -> Optional[Value]:
    """
    Phase 1: look a single key up along the scope chain.

    Args:
        frame: Innermost frame to start from
        key: Exact map key (dots are NOT interpreted here)

    Returns:
        Value from the nearest frame whose context is a map holding `key`,
        or None if no frame has it
    """
    while frame is not None:
        context = frame.context
        if isinstance(context, MapValue):
            found = context.lookup(key)
            if found is not None:
                return found
        frame = frame.parent
    return None


def descend(value: Optional[Value], segments: Iterable[str]) -> Optional[Value]:
    """
    Phase 2: navigate into `value` one map key at a time.

    Args:
        value: Local root (usually the result of find_in_chain)
        segments: Keys to follow, in order

    Returns:
        The value reached after all segments, or None when a step meets a
        non-map or a missing key
    """
    for segment in segments:
        if not isinstance(value, MapValue):
            return None
        value = value.lookup(segment)
    return value


def resolve(frame: Optional[ScopeFrame], name: str) -> Optional[Value]:
    """
    Resolve a template name against the scope chain.

    Args:
        frame: Current (innermost) scope frame
        name: Name as written in the tag, e.g. "id" or "nested.item"

    Returns:
        Bound value, or None for NotFound
    """
    head, tail = split_name(name)
    found = find_in_chain(frame, head)
    if found is None or not tail:
        return found
    return descend(found, tail)
