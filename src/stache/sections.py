"""
Section Policy for stache

Decides how many times a section repeats and which value each repetition
sees as its context.

Rules:
    NotFound, Null, False -> 0 repetitions
    Array                 -> one repetition per element (0 if empty)
    anything else         -> 1 repetition, context is the value itself

Callable ("lambda") sections are not interpreted. The callable flag handed
over by executors is accepted and ignored, so such sections behave like any
other truthy value.
"""

from __future__ import annotations

import logging
from typing import Optional

from stache.errors import StructuralError
from stache.resolver import resolve
from stache.scope import ScopeFrame
from stache.values import ArrayValue, Value, is_falsy

logger = logging.getLogger(__name__)


def repetition_count(value: Optional[Value]) -> int:
    """Repetition count for an already resolved value."""
    if is_falsy(value):
        return 0
    if isinstance(value, ArrayValue):
        return len(value)
    return 1


def section_test(frame: ScopeFrame, name: str, is_callable: bool = False) -> int:
    """
    Count the repetitions of section `name`.

    Inverted sections use the same count: they render when it is 0.

    Returns:
        0, the array length, or 1
    """
    count = repetition_count(resolve(frame, name))
    logger.debug("section %r repeats %d time(s)", name, count)
    return count


def section_enter(frame: ScopeFrame, name: str, index: int) -> Value:
    """
    Context for repetition `index` of section `name`.

    The name is resolved again; no result from section_test is cached.

    Returns:
        The array element at `index`, or the value itself for non-arrays

    Raises:
        StructuralError: If the name does not resolve, or the index is past
            the end of the array. Neither can happen right after a positive
            section_test on an unchanged document.
    """
    value = resolve(frame, name)
    if value is None:
        raise StructuralError(f"Section {name!r} could not be resolved on entry")
    if isinstance(value, ArrayValue):
        element = value.get(index)
        if element is None:
            raise StructuralError(
                f"Section {name!r} index {index} out of range (length {len(value)})"
            )
        return element
    return value
