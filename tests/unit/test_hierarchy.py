"""
Tests for the pure group hierarchy functions (hierarchy/tree.py).
"""

import copy

import pytest
from inline_snapshot import snapshot

from hierarchy import build_group_tree, collation_key, group_path, iter_tree, render_outline
from tests.helpers import group, shape, shuffled


@pytest.fixture
def projects() -> list:
    """A small workspace: two roots, nested children, one orphan."""
    return [
        group("g3", "Web Dev", "g1"),
        group("g1", "Projects"),
        group("g5", "Frontend", "g3"),
        group("g2", "Archive"),
        group("g4", "Backend", "g3"),
        group("g6", "Mobile", "g1"),
        group("g7", "Orphan", "gone"),
    ]


# ============================================================================
# BUILD TREE
# ============================================================================


class TestBuildGroupTree:
    """Linking, ordering and derived fields."""

    def test_empty(self) -> None:
        assert build_group_tree([]) == []

    def test_siblings_sorted_by_name(self) -> None:
        roots = build_group_tree([group("b", "B"), group("a", "A"), group("c", "C")])
        assert [n.name for n in roots] == ["A", "B", "C"]

    def test_children_follow_parent_id(self, projects: list) -> None:
        roots = build_group_tree(projects)
        by_id = {node.id: node for node in iter_tree(roots)}
        source = {g.id: g for g in projects}

        for node in by_id.values():
            for child in node.children:
                assert source[child.id].parent_id == node.id

    def test_missing_parent_becomes_root(self, projects: list) -> None:
        roots = build_group_tree(projects)
        orphan = next(n for n in roots if n.id == "g7")
        assert orphan.parent_id == "gone"
        assert orphan.depth == 0
        assert orphan.ancestor_names == []

    def test_depth_and_ancestors(self, projects: list) -> None:
        by_id = {n.id: n for n in iter_tree(build_group_tree(projects))}
        assert by_id["g1"].depth == 0
        assert by_id["g3"].depth == 1
        assert by_id["g5"].depth == 2
        assert by_id["g5"].ancestor_names == ["Projects", "Web Dev"]
        assert by_id["g3"].ancestor_names == ["Projects"]

    def test_child_listed_before_parent(self) -> None:
        # Depth must not depend on parents appearing first in the input
        roots = build_group_tree([
            group("c", "C", "b"),
            group("b", "B", "a"),
            group("a", "A"),
        ])
        leaf = roots[0].children[0].children[0]
        assert leaf.depth == 2
        assert leaf.ancestor_names == ["A", "B"]

    @pytest.mark.parametrize("seed", range(10))
    def test_deterministic_under_shuffle(self, projects: list, seed: int) -> None:
        expected = build_group_tree(projects)
        actual = build_group_tree(shuffled(projects, seed))
        assert [n.to_dict() for n in actual] == [n.to_dict() for n in expected]

    def test_input_not_mutated(self, projects: list) -> None:
        before = copy.deepcopy(projects)
        build_group_tree(projects)
        assert projects == before

    def test_fresh_nodes_each_call(self, projects: list) -> None:
        first = build_group_tree(projects)
        second = build_group_tree(projects)
        assert first[0] is not second[0]

    def test_duplicate_names_keep_input_order(self) -> None:
        roots = build_group_tree([group("x2", "Notes"), group("x1", "Notes")])
        assert [n.id for n in roots] == ["x2", "x1"]

    def test_duplicate_id_first_wins(self) -> None:
        roots = build_group_tree([group("a", "First"), group("a", "Second")])
        assert [n.name for n in roots] == ["First"]

    def test_case_insensitive_order(self) -> None:
        roots = build_group_tree([
            group("1", "banana"), group("2", "Apple"), group("3", "cherry"),
        ])
        assert [n.name for n in roots] == ["Apple", "banana", "cherry"]

    def test_accents_sort_with_base_letter(self) -> None:
        roots = build_group_tree([group("1", "Zoo"), group("2", "Éclair"), group("3", "Apple")])
        assert [n.name for n in roots] == ["Apple", "Éclair", "Zoo"]


class TestCycles:
    """Malformed parent links must not lose nodes or loop."""

    def test_self_parent(self) -> None:
        roots = build_group_tree([group("a", "Loop", "a")])
        assert [n.id for n in roots] == ["a"]
        assert roots[0].children == []

    def test_two_node_cycle_promotes_smallest_id(self) -> None:
        roots = build_group_tree([group("b", "B", "a"), group("a", "A", "b")])
        assert shape(roots) == [("A", [("B", [])])]

    def test_cycle_with_tail(self) -> None:
        groups = [
            group("c", "C", "b"),
            group("b", "B", "a"),
            group("a", "A", "b"),
            group("r", "Root"),
        ]
        roots = build_group_tree(groups)
        assert {n.id for n in iter_tree(roots)} == {"a", "b", "c", "r"}
        assert shape(roots) == [("A", [("B", [("C", [])])]), ("Root", [])]

    @pytest.mark.parametrize("seed", range(5))
    def test_cycle_breaking_is_deterministic(self, seed: int) -> None:
        groups = [group("z", "Z", "y"), group("y", "Y", "x"), group("x", "X", "z")]
        assert shape(build_group_tree(shuffled(groups, seed))) == shape(build_group_tree(groups))


# ============================================================================
# PATH
# ============================================================================


class TestGroupPath:

    def test_root_group(self, projects: list) -> None:
        assert group_path("g1", projects) == ["Projects"]

    def test_nested_group(self, projects: list) -> None:
        assert group_path("g5", projects) == ["Projects", "Web Dev", "Frontend"]

    def test_missing_id(self, projects: list) -> None:
        assert group_path("missing-id", projects) == []

    def test_dangling_parent_stops(self, projects: list) -> None:
        assert group_path("g7", projects) == ["Orphan"]

    def test_cycle_terminates(self) -> None:
        groups = [group("a", "A", "b"), group("b", "B", "a")]
        assert group_path("a", groups) == ["B", "A"]


# ============================================================================
# RENDERING
# ============================================================================


class TestOutline:

    def test_iter_tree_is_preorder(self, projects: list) -> None:
        names = [n.name for n in iter_tree(build_group_tree(projects))]
        assert names == ["Archive", "Orphan", "Projects", "Mobile", "Web Dev", "Backend", "Frontend"]

    def test_render_outline(self, projects: list) -> None:
        assert render_outline(build_group_tree(projects)) == snapshot("""\
- Archive
- Orphan
- Projects
  - Mobile
  - Web Dev
    - Backend
    - Frontend\
""")

    def test_render_empty(self) -> None:
        assert render_outline([]) == ""


class TestCollationKey:

    def test_lowercase_before_uppercase_on_tie(self) -> None:
        assert collation_key("apple") < collation_key("Apple")

    def test_case_is_secondary_to_letters(self) -> None:
        assert collation_key("Apple") < collation_key("banana")
