"""
stache: scoped name resolution and section expansion for logic-less templates.

This package binds template names to values in a hierarchical document:

    - Scope chain lookup with nested-section shadowing
    - Dotted paths ("a.b.c") resolved by chain walk, then absolute descent
    - Section repetition counts and per-repetition contexts

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - Template syntax or parsing
    - Template files, folders or partials
    - Escaping rules beyond a replaceable default gate

It consumes compiled instructions through a small callback contract.
"""

from stache.errors import DocumentError, RenderError, StacheError, StructuralError
from stache.instructions import Arg, Section, Text, execute, render
from stache.handler import RenderHandler, RenderOptions, TextSink, html_escape
from stache.resolver import descend, find_in_chain, resolve, split_name
from stache.scope import ScopeFrame, ScopeStack
from stache.sections import section_enter, section_test

__version__ = "0.1.0"

__all__ = [
    "Arg",
    "DocumentError",
    "RenderError",
    "RenderHandler",
    "RenderOptions",
    "ScopeFrame",
    "ScopeStack",
    "Section",
    "StacheError",
    "StructuralError",
    "Text",
    "TextSink",
    "descend",
    "execute",
    "find_in_chain",
    "html_escape",
    "render",
    "resolve",
    "section_enter",
    "section_test",
    "split_name",
]
