"""
Rendering glue for stache.

Adapts the resolver and the section policy to the callback contract an
instruction executor drives:

    on_text(frame, text)                      plain template text
    on_arg(frame, name, escape)               interpolation tag
    on_section_test(frame, name, is_callable) section open, before entering
    on_section_start(frame, name, index)      once per repetition
    on_error(context)                         unrecoverable failure

Output goes to an append-only TextSink owned by the caller.
"""

from __future__ import annotations

import html
import logging
import warnings
from dataclasses import dataclass
from typing import Any, Callable, List

from stache.resolver import resolve
from stache.scope import ScopeFrame
from stache.sections import section_enter, section_test
from stache.values import to_text

logger = logging.getLogger(__name__)


def html_escape(text: str) -> str:
    """Default escaping gate: HTML special characters, quotes included."""
    return html.escape(text, quote=True)


@dataclass
class RenderOptions:
    """
    Per-render configuration.

    Properties:
        escape:
            Applied to interpolated text when the tag asks for escaping
        warn_on_missing:
            Emit a UserWarning for every interpolated name that does not
            resolve. Off by default: missing names render as nothing.
    """

    escape: Callable[[str], str] = html_escape
    warn_on_missing: bool = False


class TextSink:
    """Append-only text accumulator."""

    def __init__(self, initial: str = ""):
        self._parts: List[str] = [initial] if initial else []

    def write(self, text: str) -> None:
        if text:
            self._parts.append(text)

    def getvalue(self) -> str:
        return "".join(self._parts)

    def __len__(self) -> int:
        return sum(len(part) for part in self._parts)

    def __str__(self) -> str:
        return self.getvalue()


class RenderHandler:
    """
    Callback handler for one render.

    Holds the sink and options; all lookups go through the frame the
    executor passes in, so the handler itself keeps no scope state.
    """

    def __init__(self, sink: TextSink, options: RenderOptions | None = None):
        self.sink = sink
        self.options = options or RenderOptions()

    def on_text(self, frame: ScopeFrame, text: str) -> None:
        self.sink.write(text)

    def on_arg(self, frame: ScopeFrame, name: str, escape: bool = True) -> None:
        """
        Emit the text form of `name`.

        NotFound and values with an empty text form emit nothing.
        """
        value = resolve(frame, name)
        if value is None:
            if self.options.warn_on_missing:
                warnings.warn(f"Unresolved template name: {name!r}", UserWarning)
            return
        text = to_text(value)
        if not text:
            return
        self.sink.write(self.options.escape(text) if escape else text)

    def on_section_test(self, frame: ScopeFrame, name: str, is_callable: bool = False) -> int:
        return section_test(frame, name, is_callable)

    def on_section_start(self, frame: ScopeFrame, name: str, index: int) -> None:
        """
        Bind the context of repetition `index` to the section's frame.

        `frame` is the unbound frame the executor pushed for the section
        body. Raises StructuralError when the section cannot be entered.
        """
        frame.bind(section_enter(frame, name, index))

    def on_error(self, context: Any = None) -> None:
        # Frames own nothing, so there is nothing to release
        logger.debug("render aborted: %r", context)
