"""
Tests for the stache Name Resolver

Phase 1 (chain walk) and phase 2 (absolute descent) are tested on their own
before the combined resolve().

These tests pin the dotted-path rule: once the head of a dotted name is
found, the rest of the path is looked up ONLY inside that value. Ancestor
scopes are never consulted for the tail.
"""

import pytest
from stache.resolver import descend, find_in_chain, resolve, split_name
from stache.scope import ScopeStack
from stache.values import NULL, NumberValue, StringValue, from_python


def build_stack(*contexts):
    """Stack with the first context at the root and the last on top."""
    stack = ScopeStack(from_python(contexts[0]))
    for context in contexts[1:]:
        stack.push(from_python(context))
    return stack


class TestSplitName:
    """Test name splitting."""

    @pytest.mark.parametrize("name, expected", [
        ("user", ("user", [])),
        ("user.name", ("user", ["name"])),
        ("a.b.c", ("a", ["b", "c"])),
        ("a.", ("a", [""])),
        (".a", ("", ["a"])),
        ("a..b", ("a", ["", "b"])),
        ("", ("", [])),
    ])
    def test_split(self, name, expected):
        assert split_name(name) == expected


class TestFindInChain:
    """Test phase 1: scope chain walk."""

    def test_found_in_top_frame(self):
        stack = build_stack({"a": 1}, {"a": 2})
        assert find_in_chain(stack.top, "a") == NumberValue(2)

    def test_found_in_ancestor(self):
        """Names missing locally should resolve from enclosing scopes."""
        stack = build_stack({"count": 3}, {"other": 1}, {"x": 0})
        assert find_in_chain(stack.top, "count") == NumberValue(3)

    def test_nearest_scope_wins(self):
        """Shadowing: the innermost frame holding the key wins."""
        stack = build_stack({"name": "root"}, {"name": "middle"}, {"id": 1})
        assert find_in_chain(stack.top, "name") == StringValue("middle")

    def test_non_map_frames_skipped(self):
        """Frames whose context is not a map should be passed over."""
        stack = build_stack({"name": "root"}, "a string", [1, 2], True)
        assert find_in_chain(stack.top, "name") == StringValue("root")

    def test_missing_everywhere(self):
        stack = build_stack({"a": 1}, {"b": 2})
        assert find_in_chain(stack.top, "c") is None

    def test_key_with_dot_is_literal(self):
        """Phase 1 should not interpret dots in the key."""
        stack = build_stack({"a.b": 1, "a": {"b": 2}})
        assert find_in_chain(stack.top, "a.b") == NumberValue(1)

    def test_null_value_is_found(self):
        """A stored null is a hit, not a miss."""
        stack = build_stack({"a": None}, {"b": 1})
        assert find_in_chain(stack.top, "a") == NULL

    def test_none_frame(self):
        assert find_in_chain(None, "a") is None


class TestDescend:
    """Test phase 2: absolute descent."""

    def test_single_step(self):
        root = from_python({"item": "ok"})
        assert descend(root, ["item"]) == StringValue("ok")

    def test_multiple_steps(self):
        root = from_python({"a": {"b": {"c": 7}}})
        assert descend(root, ["a", "b", "c"]) == NumberValue(7)

    def test_no_segments_returns_root(self):
        root = from_python({"a": 1})
        assert descend(root, []) is root

    def test_missing_key(self):
        root = from_python({"a": {"b": 1}})
        assert descend(root, ["a", "x"]) is None

    def test_non_map_midway(self):
        """A non-map on the path should end the descent with NotFound."""
        root = from_python({"a": [{"b": 1}]})
        assert descend(root, ["a", "b"]) is None

    def test_scalar_root(self):
        assert descend(StringValue("text"), ["length"]) is None

    def test_empty_segment_is_literal_key(self):
        root = from_python({"a": {"": "empty"}})
        assert descend(root, ["a", ""]) == StringValue("empty")


class TestResolve:
    """Test combined resolution."""

    def test_plain_name(self):
        stack = build_stack({"id": 5})
        assert resolve(stack.top, "id") == NumberValue(5)

    def test_plain_name_not_found(self):
        stack = build_stack({"id": 5})
        assert resolve(stack.top, "name") is None

    def test_dotted_from_root_inside_section(self):
        """Dotted head should be found via the chain, tail inside it."""
        stack = build_stack(
            {"nested": {"item": "dot notation success"}, "users": [{"id": 0}]},
            {"id": 0},
        )
        assert resolve(stack.top, "nested.item") == StringValue("dot notation success")

    def test_dotted_head_shadowed(self):
        """The nearest head wins even if a farther one has the tail."""
        stack = build_stack({"a": {"b": "outer"}}, {"a": {"c": "inner"}})
        assert resolve(stack.top, "a.b") is None
        assert resolve(stack.top, "a.c") == StringValue("inner")

    def test_dotted_tail_never_falls_back_to_ancestors(self):
        """Missing nested fields must not resolve against ancestor scopes."""
        stack = build_stack({"item": "ancestor"}, {"nested": {"other": 1}})
        assert resolve(stack.top, "nested.item") is None

    def test_dotted_head_non_map(self):
        """A non-map head yields NotFound even if an ancestor has the tail."""
        stack = build_stack({"b": "ancestor"}, {"a": "scalar"})
        assert resolve(stack.top, "a.b") is None

    def test_no_partial_match_in_ancestor_nested_structure(self):
        """Dotted paths do not partially match an ancestor's nested maps."""
        stack = build_stack(
            {"outer": {"a": {"b": "deep"}}},
            {"x": 1},
        )
        assert resolve(stack.top, "a.b") is None

    def test_trailing_dot(self):
        stack = build_stack({"a": {"": "empty key"}})
        assert resolve(stack.top, "a.") == StringValue("empty key")

    def test_trailing_dot_missing_empty_key(self):
        stack = build_stack({"a": {"b": 1}})
        assert resolve(stack.top, "a.") is None

    def test_leading_dot(self):
        stack = build_stack({"": {"a": "under empty key"}})
        assert resolve(stack.top, ".a") == StringValue("under empty key")

    def test_empty_name(self):
        stack = build_stack({"": "empty"})
        assert resolve(stack.top, "") == StringValue("empty")

    def test_deep_path(self):
        stack = build_stack({"a": {"b": {"c": {"d": 4}}}})
        assert resolve(stack.top, "a.b.c.d") == NumberValue(4)
