"""
Scope Stack for stache

One frame per open template section, linked innermost-to-root.

Each frame carries the value currently in context at that depth and a link
to its enclosing frame. The chain is walked by the resolver to implement
variable shadowing: the nearest enclosing frame wins.

IMPORTANT:
    Frames reference document values, they never own them.
    Dropping the stack at the end of a render leaves the document untouched.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional

from stache.errors import StructuralError
from stache.values import Value

logger = logging.getLogger(__name__)


class ScopeFrame:
    """
    A single level of the scope chain.

    Properties:
        context:
            The value bound at this depth
        parent:
            Enclosing frame, or None at the root

    A frame is read-only after creation with one exception: a section frame
    is pushed unbound (inheriting its parent's context) and receives its
    per-repetition context exactly once through bind().
    """

    __slots__ = ("_context", "parent", "_bound")

    def __init__(self, context: Value, parent: Optional[ScopeFrame] = None, bound: bool = True):
        self._context = context
        self.parent = parent
        self._bound = bound

    @property
    def context(self) -> Value:
        return self._context

    @property
    def bound(self) -> bool:
        return self._bound

    def bind(self, context: Value) -> None:
        """
        Assign the per-repetition context of a section frame.

        Raises:
            StructuralError: If the frame already has its own context
        """
        if self._bound:
            raise StructuralError("Scope frame context is already bound")
        self._context = context
        self._bound = True

    def chain(self) -> Iterator[ScopeFrame]:
        """Yield this frame and its ancestors, innermost first."""
        frame: Optional[ScopeFrame] = self
        while frame is not None:
            yield frame
            frame = frame.parent

    def __repr__(self) -> str:
        return f"ScopeFrame(context={self._context!r}, bound={self._bound})"


class ScopeStack:
    """
    Ordered chain of frames for a single render.

    The root frame holds the caller's document. Every push adds a frame whose
    parent is the current top; every pop restores the previous top.

    INVARIANT:
        depth == number of open sections
        len(list(stack.chain())) == depth + 1
    """

    def __init__(self, root_context: Value):
        self._frames: List[ScopeFrame] = [ScopeFrame(root_context)]

    @property
    def root(self) -> ScopeFrame:
        return self._frames[0]

    @property
    def top(self) -> ScopeFrame:
        return self._frames[-1]

    @property
    def depth(self) -> int:
        return len(self._frames) - 1

    def push(self, context: Optional[Value] = None) -> ScopeFrame:
        """
        Open a new frame on top of the stack.

        Args:
            context: Value to bind. If omitted, the frame starts unbound and
                inherits its parent's context until bind() is called.

        Returns:
            The new top frame
        """
        parent = self.top
        if context is None:
            frame = ScopeFrame(parent.context, parent, bound=False)
        else:
            frame = ScopeFrame(context, parent)
        self._frames.append(frame)
        logger.debug("push scope frame (depth=%d)", self.depth)
        return frame

    def pop(self) -> ScopeFrame:
        """
        Close the top frame.

        Returns:
            The removed frame

        Raises:
            StructuralError: If only the root frame is left
        """
        if len(self._frames) == 1:
            raise StructuralError("Cannot pop the root scope frame")
        frame = self._frames.pop()
        logger.debug("pop scope frame (depth=%d)", self.depth)
        return frame

    @staticmethod
    def parent_of(frame: ScopeFrame) -> Optional[ScopeFrame]:
        return frame.parent

    def chain(self) -> Iterator[ScopeFrame]:
        """Frames from the top down to the root."""
        return self.top.chain()
