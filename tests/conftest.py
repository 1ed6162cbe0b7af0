"""
Shared test fixtures and utilities for the treetransformer test suite.
"""

import pytest

from treetransformer.core.tree import Tree
from treetransformer.structure.builder import tree_from_string

SAMPLE_EDGES = "[1, 9][9, 8][1, 6][6, 5][6, 2][1, 7]"
SAMPLE_EDGES_CHANGED = "[1, 9][9, 8][1, 6][6, 5][6, 3][1, 7]"


def assert_tree_invariants(tree: Tree) -> None:
    """Check the registries of `tree` against its node graph."""
    reachable = {}
    if tree.root is not None:
        assert tree.root.parent is None
        stack = [tree.root]
        while stack:
            node = stack.pop()
            assert node.index not in reachable, f"index {node.index} appears twice"
            reachable[node.index] = node
            for index, child in node.children.items():
                assert child.index == index
                assert child.parent is node
                stack.append(child)

    assert tree.taken_indexes == set(reachable)
    assert set(tree.leaves) == {i for i, n in reachable.items() if not n.children}
    assert len(tree) == len(reachable)


@pytest.fixture
def sample_tree() -> Tree:
    """Tree with root 1, children 9, 6, 7 and grandchildren 8, 5, 2."""
    return tree_from_string(SAMPLE_EDGES)


@pytest.fixture
def changed_tree() -> Tree:
    """`sample_tree` with leaf 2 under 6 replaced by leaf 3."""
    return tree_from_string(SAMPLE_EDGES_CHANGED)


@pytest.fixture
def check_invariants():
    """Return the registry consistency check for use inside tests."""
    return assert_tree_invariants
