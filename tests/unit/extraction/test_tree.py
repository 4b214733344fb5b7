"""
Tests for the fallible JSON tree accessors.
"""

from __future__ import annotations

import pytest

from tubelist.extraction.tree import as_dict, as_int, as_list, as_str, dig, find_first, find_key


class TestDig:
    """Test path traversal through dicts and lists."""

    def test_follows_keys_and_indexes(self) -> None:
        tree = {"a": [{"b": {"c": 5}}]}
        assert dig(tree, "a", 0, "b", "c") == 5

    def test_negative_index(self) -> None:
        assert dig({"a": [1, 2, 3]}, "a", -1) == 3

    def test_missing_key_returns_none(self) -> None:
        assert dig({"a": {}}, "a", "b", "c") is None

    def test_index_out_of_range_returns_none(self) -> None:
        assert dig({"a": []}, "a", 0) is None

    def test_type_mismatch_returns_none(self) -> None:
        assert dig({"a": "string"}, "a", "b") is None
        assert dig({"a": {"0": 1}}, "a", 0) is None

    def test_no_path_returns_node(self) -> None:
        node = {"x": 1}
        assert dig(node) is node


class TestProjections:
    """Test the typed projections."""

    def test_as_dict(self) -> None:
        assert as_dict({"a": 1}) == {"a": 1}
        assert as_dict([1]) is None

    def test_as_list(self) -> None:
        assert as_list([1, 2]) == [1, 2]
        assert as_list(None) == []
        assert as_list({"a": 1}) == []

    def test_as_str(self) -> None:
        assert as_str("x") == "x"
        assert as_str(1) is None

    def test_as_int(self) -> None:
        assert as_int(5) == 5
        assert as_int(5.9) == 5
        assert as_int("260") == 260
        assert as_int("2:30") is None
        assert as_int(True) is None
        assert as_int(None) is None

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_as_int_non_finite(self, value: float) -> None:
        assert as_int(value) is None


class TestFindFirst:
    """Test the iterative depth-first search."""

    def test_returns_first_match_in_document_order(self) -> None:
        tree = {
            "first": {"nested": {"hit": 1}},
            "second": {"hit": 2},
        }
        found = find_first(tree, lambda d: "hit" in d)
        assert found == {"hit": 1}

    def test_parent_tested_before_children(self) -> None:
        tree = {"hit": 0, "child": {"hit": 1}}
        assert find_first(tree, lambda d: "hit" in d) is tree

    def test_lists_are_traversed_in_order(self) -> None:
        tree = [{"skip": 1}, [{"hit": "a"}], {"hit": "b"}]
        assert find_first(tree, lambda d: "hit" in d) == {"hit": "a"}

    def test_no_match_returns_none(self) -> None:
        assert find_first({"a": [1, 2, {"b": 3}]}, lambda d: "z" in d) is None

    def test_deep_nesting_does_not_recurse(self) -> None:
        tree: dict = {}
        node = tree
        for _ in range(5000):
            node["child"] = {}
            node = node["child"]
        node["hit"] = True
        assert find_first(tree, lambda d: d.get("hit") is True) == {"hit": True}


class TestFindKey:
    """Test lookup of a dict stored under a key anywhere in the tree."""

    def test_finds_nested_key(self) -> None:
        tree = {"x": [{"y": {"target": {"v": 1}}}]}
        assert find_key(tree, "target") == {"v": 1}

    def test_ignores_non_dict_values(self) -> None:
        tree = {"target": "string", "other": {"target": {"v": 2}}}
        assert find_key(tree, "target") == {"v": 2}

    def test_missing_key(self) -> None:
        assert find_key({"a": 1}, "target") is None
