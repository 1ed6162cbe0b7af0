"""
Tests for the structural diff and edit-script replay.

Focus Areas:
1. Empty-tree edge cases and the root-mismatch rebuild
2. Aligned walk: removal of obsolete subtrees and buffered additions
3. Replaying scripts reproduces the desired tree
"""

import random
from typing import NamedTuple

import pytest

from treetransformer.core.tree import Tree
from treetransformer.exceptions import NotALeafError, ParentNotFoundError
from treetransformer.execution.operations import Add, EditScript, Remove
from treetransformer.execution.transformer import (
    apply_script,
    create_subtree,
    diff,
    remove_subtree,
)
from treetransformer.structure.builder import tree_from_string
from treetransformer.structure.serialization import dumps, loads


def copy_tree(tree: Tree) -> Tree:
    return loads(dumps(tree))


def single_node(index: int) -> Tree:
    tree = Tree()
    tree.add_root(index)
    return tree


def random_tree(rng: random.Random, size: int, root: int = 0) -> Tree:
    tree = Tree()
    if size == 0:
        return tree
    tree.add_root(root)
    pool = list(range(1, 40))
    rng.shuffle(pool)
    for child in pool[: size - 1]:
        parent = rng.choice(sorted(tree.taken_indexes))
        tree.add_node(parent, child)
    return tree


class TransformCase(NamedTuple):
    """Pair of tree descriptions to transform between."""

    name: str
    given: str
    desired: str


TRANSFORM_CASES = [
    TransformCase("identical", "[1,2][1,3]", "[1,2][1,3]"),
    TransformCase("empty_to_tree", "", "[1,9][9,8][1,6][6,5][6,2][1,7]"),
    TransformCase("tree_to_empty", "[1,9][9,8][1,6][6,5][6,2][1,7]", ""),
    TransformCase("different_roots", "[1,2][2,3][1,4]", "[5,1][5,2][1,3]"),
    TransformCase("leaf_swap", "[1,9][9,8][1,6][6,5][6,2][1,7]", "[1,9][9,8][1,6][6,5][6,3][1,7]"),
    TransformCase("move_subtree", "[1,2][1,3][3,4][4,5]", "[1,2][1,3][2,4][4,5]"),
    TransformCase("swap_parent_and_child", "[1,2][2,3]", "[1,3][3,2]"),
    TransformCase("grow_deep", "[1,2]", "[1,2][2,3][3,4][4,5][1,6]"),
    TransformCase("prune_to_root_edge", "[1,2][2,3][2,4][1,5][5,6]", "[1,5]"),
]


class TestDiffEdgeCases:
    """Test the empty-tree cases and the root-mismatch rebuild."""

    def test_both_empty(self):
        assert diff(Tree(), Tree()) == EditScript()
        assert diff(None, None) == EditScript()

    def test_none_counts_as_empty(self, sample_tree):
        assert diff(None, sample_tree) == diff(Tree(), sample_tree)
        assert diff(sample_tree, None) == diff(sample_tree, Tree())

    def test_empty_given_builds_top_down(self, sample_tree):
        script = diff(Tree(), sample_tree)
        assert list(script) == [
            Add(1, 9),
            Add(1, 6),
            Add(1, 7),
            Add(9, 8),
            Add(6, 5),
            Add(6, 2),
        ]

    def test_empty_desired_removes_bottom_up(self, sample_tree):
        script = diff(sample_tree, Tree())
        assert list(script) == [Remove(i) for i in [8, 9, 5, 2, 6, 7, 1]]
        assert str(script) == (
            "Remove(8), Remove(9), Remove(5), Remove(2), Remove(6), Remove(7), Remove(1)"
        )

    def test_identical_trees_give_empty_script(self, sample_tree):
        assert diff(sample_tree, sample_tree) == EditScript()
        assert str(diff(sample_tree, copy_tree(sample_tree))) == ""

    def test_root_mismatch_rebuilds_completely(self):
        given = tree_from_string("[1,2][2,3][1,4]")
        desired = tree_from_string("[5,1][5,2][1,3]")
        script = list(diff(given, desired))

        removals = [op for op in script if isinstance(op, Remove)]
        assert script[: len(removals)] == [Remove(i) for i in Tree.get_post_order(given.root)]
        assert script[len(removals) :] == [Add(5, 1), Add(5, 2), Add(1, 3)]

    def test_single_node_trees(self):
        assert list(diff(Tree(), single_node(4))) == [Add(None, 4)]
        assert list(diff(single_node(4), Tree())) == [Remove(4)]
        assert list(diff(single_node(4), single_node(5))) == [Remove(4), Add(None, 5)]
        assert diff(single_node(4), single_node(4)) == EditScript()


class TestAlignedWalk:
    """Test diffs between trees sharing a root."""

    def test_leaf_replacement(self, sample_tree, changed_tree):
        script = diff(sample_tree, changed_tree)
        assert list(script) == [Remove(2), Add(6, 3)]
        assert str(script) == "Remove(2), Add(6, 3)"

    def test_removals_precede_additions(self):
        given = tree_from_string("[1,2][1,3][2,4][3,5]")
        desired = tree_from_string("[1,2][1,3][2,6][3,7]")
        script = list(diff(given, desired))
        assert script == [Remove(4), Remove(5), Add(2, 6), Add(3, 7)]

    def test_obsolete_subtree_removed_post_order(self):
        given = tree_from_string("[1,2][2,3][3,4][2,5]")
        desired = tree_from_string("[1,6]")
        assert list(diff(given, desired)) == [
            Remove(4),
            Remove(3),
            Remove(5),
            Remove(2),
            Add(1, 6),
        ]

    def test_new_subtree_added_top_down(self):
        given = tree_from_string("[1,2]")
        desired = tree_from_string("[1,2][1,3][3,4][3,5][4,6]")
        assert list(diff(given, desired)) == [
            Add(1, 3),
            Add(3, 4),
            Add(3, 5),
            Add(4, 6),
        ]

    def test_moved_node_is_removed_then_readded(self):
        given = tree_from_string("[1,2][1,3][3,4]")
        desired = tree_from_string("[1,2][1,3][2,4]")
        assert list(diff(given, desired)) == [Remove(4), Add(2, 4)]

    def test_inputs_are_not_mutated(self, sample_tree, changed_tree):
        before = (sample_tree.edges(), changed_tree.edges())
        diff(sample_tree, changed_tree)
        assert (sample_tree.edges(), changed_tree.edges()) == before


class TestHelpers:
    """Test subtree removal and creation helpers."""

    def test_remove_subtree(self, sample_tree):
        assert remove_subtree(sample_tree.get_node(6)) == [Remove(5), Remove(2), Remove(6)]
        assert remove_subtree(None) == []

    def test_create_subtree_with_parent(self, sample_tree):
        assert create_subtree(sample_tree.get_node(9), 1) == [Add(1, 9), Add(9, 8)]

    def test_create_subtree_without_parent(self, sample_tree):
        assert create_subtree(sample_tree.get_node(6), None) == [Add(6, 5), Add(6, 2)]
        assert create_subtree(sample_tree.get_node(7), None) == [Add(None, 7)]
        assert create_subtree(None, 1) == []


class TestReplay:
    """Test that replaying a diff reproduces the desired tree."""

    @pytest.mark.parametrize("case", TRANSFORM_CASES, ids=lambda c: c.name)
    def test_replay_reaches_desired(self, case: TransformCase, check_invariants):
        given = tree_from_string(case.given)
        desired = tree_from_string(case.desired)

        result = apply_script(given, diff(given, desired))

        assert result is given
        assert result == desired
        check_invariants(result)

    def test_replay_onto_fresh_copy(self, sample_tree, changed_tree):
        script = diff(sample_tree, changed_tree)
        assert apply_script(copy_tree(sample_tree), script) == changed_tree

    def test_emptying_script_empties_tree(self, sample_tree):
        apply_script(sample_tree, diff(sample_tree, Tree()))
        assert sample_tree.root is None
        assert len(sample_tree) == 0

    @pytest.mark.parametrize("seed", range(25))
    def test_random_pairs(self, seed, check_invariants):
        rng = random.Random(seed)
        root = rng.choice([0, 0, 0, 100])
        given = random_tree(rng, rng.randint(0, 15))
        desired = random_tree(rng, rng.randint(0, 15), root=root)

        assert diff(given, given) == EditScript()
        result = apply_script(given, diff(given, desired))
        assert result == desired
        check_invariants(result)

    def test_invalid_operation_propagates(self, sample_tree):
        with pytest.raises(NotALeafError):
            apply_script(sample_tree, [Remove(1)])
        with pytest.raises(ParentNotFoundError):
            apply_script(sample_tree, [Add(40, 41)])
