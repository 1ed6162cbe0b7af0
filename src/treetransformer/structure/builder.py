"""
Construction of trees from edge lists.

The builders here create a private `Tree`, populate it breadth-first from an
adjacency mapping and hand it out only once it is complete, so a failed build
never exposes a partially populated tree.
"""

from collections import deque
from collections.abc import Iterable

from treetransformer.core.tree import Tree
from treetransformer.core.types import Edge, Index, TreeDefinition
from treetransformer.exceptions import InvalidStructureError, NodeAlreadyExistsError
from treetransformer.parsing.parser import build_tree_definition, parse_edges


def build_tree(root: Index, definition: TreeDefinition) -> Tree:
    """
    Build a tree top-down from `root` following `definition`.

    Params:
        root: Index of the node that becomes the root
        definition: Mapping of parent index to its child indexes

    Returns:
        The fully built tree

    Raises:
        NodeAlreadyExistsError: If an index is a child of several parents
        InvalidStructureError: If some indexes of `definition` are not reachable from `root`
    """
    tree = Tree()
    tree.add_root(root)
    queue = deque([root])
    while queue:
        current = queue.popleft()
        for child in definition.get(current, ()):
            try:
                tree.add_node(current, child)
            except NodeAlreadyExistsError as e:
                raise NodeAlreadyExistsError(
                    e.index, f"Tree building failed! {e}"
                ) from e
            queue.append(child)

    declared = set(definition)
    for children in definition.values():
        declared.update(children)
    unreachable = declared - tree.taken_indexes
    if unreachable:
        raise InvalidStructureError(
            f"Nodes {sorted(unreachable)} are not reachable from root {root}!"
        )
    return tree


def tree_from_edges(edges: Iterable[Edge]) -> Tree:
    """
    Build a tree from `(parent, child)` pairs; no pairs give an empty tree.

    Raises:
        InvalidStructureError: On a cycle, zero or several roots, or unreachable nodes
        NodeAlreadyExistsError: If an index is a child of several parents
    """
    edges = list(edges)
    if not edges:
        return Tree()
    root, definition = build_tree_definition(edges)
    return build_tree(root, definition)


def tree_from_string(text: str | None) -> Tree:
    """
    Build a tree from a bracketed edge list such as `[1,2][2,3][1,4]`.

    Blank or missing text describes the empty tree.

    Params:
        text: Tree description

    Returns:
        The described tree (never None)

    Raises:
        InvalidStructureError: If the format is invalid, the edges form a cycle,
            or the tree is not connected
        InvalidIndexError: If some index is not an integer
        NodeAlreadyExistsError: If an index is introduced by several parents
    """
    if text is None or not text.strip():
        return Tree()
    return tree_from_edges(parse_edges(text))
