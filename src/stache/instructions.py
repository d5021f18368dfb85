"""
Compiled instructions and a reference executor.

Template source is never parsed here. Callers build (or receive from a
parser) a tree of instructions:

    Text("* Users:\\n")
    Section("users", body=(Arg("id"), Text(". "), Arg("name", escape=False)))
    Arg("nested.item")

execute() walks that tree and drives a RenderHandler through the callback
contract, pushing one scope frame per section repetition.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple, Union

from stache.errors import RenderError, StructuralError
from stache.handler import RenderHandler, RenderOptions, TextSink
from stache.scope import ScopeStack
from stache.values import from_python

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Text:
    """Literal template text, emitted verbatim."""

    text: str


@dataclass(frozen=True)
class Arg:
    """
    Interpolation tag.

    Properties:
        name: Possibly dotted name, e.g. "user.name"
        escape: False for triple-mustache / ampersand tags
    """

    name: str
    escape: bool = True


@dataclass(frozen=True)
class Section:
    """
    Section tag with its body.

    Properties:
        name: Possibly dotted name driving the repetition count
        body: Instructions rendered per repetition
        inverted: Render body once when the count is 0, never otherwise
        is_callable: Forwarded to the handler; has no effect on the count
    """

    name: str
    body: Tuple["Instruction", ...] = ()
    inverted: bool = False
    is_callable: bool = False


Instruction = Union[Text, Arg, Section]


def execute(instructions: Sequence[Instruction], handler: RenderHandler, stack: ScopeStack) -> None:
    """
    Run instructions against the current top of `stack`.

    Raises:
        StructuralError: Propagated from the handler; the stack is left as
            it was when the error fired
    """
    for instruction in instructions:
        if isinstance(instruction, Text):
            handler.on_text(stack.top, instruction.text)
        elif isinstance(instruction, Arg):
            handler.on_arg(stack.top, instruction.name, instruction.escape)
        elif isinstance(instruction, Section):
            _execute_section(instruction, handler, stack)
        else:
            raise TypeError(f"Unsupported instruction type: {type(instruction)}")


def _execute_section(section: Section, handler: RenderHandler, stack: ScopeStack) -> None:
    count = handler.on_section_test(stack.top, section.name, section.is_callable)

    if section.inverted:
        if count == 0:
            stack.push(stack.top.context)
            execute(section.body, handler, stack)
            stack.pop()
        return

    for index in range(count):
        frame = stack.push()
        handler.on_section_start(frame, section.name, index)
        execute(section.body, handler, stack)
        stack.pop()


def render(
    instructions: Sequence[Instruction],
    document: Any,
    options: Optional[RenderOptions] = None,
    sink: Optional[TextSink] = None,
) -> str:
    """
    Render instructions against a document.

    Args:
        instructions: Compiled template
        document: Root Value, or plain Python data converted with from_python
        options: Escaping / diagnostics configuration
        sink: Existing sink to append to; a new one is created if omitted

    Returns:
        Full text of the sink after rendering

    Raises:
        RenderError: If a structural error aborts the render. The text
            emitted so far stays in the sink and is available as `partial`.
    """
    sink = sink if sink is not None else TextSink()
    handler = RenderHandler(sink, options)
    stack = ScopeStack(from_python(document))

    try:
        execute(instructions, handler, stack)
    except StructuralError as e:
        handler.on_error(e)
        raise RenderError(f"Render aborted: {e}", partial=sink.getvalue()) from e

    return sink.getvalue()
