"""
Indexed tree structure.

This module contains the `Node` and `Tree` classes. A tree owns a hierarchy of
nodes identified by integer indexes that are unique across the whole tree, and
keeps two derived registries consistent with the node graph on every mutation:
the table of taken indexes and the set of current leaves.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Optional

from treetransformer.core.types import Edge, Index
from treetransformer.exceptions import (
    NodeAlreadyExistsError,
    NotALeafError,
    ParentNotFoundError,
    RootAlreadyExistsError,
)


@dataclass(eq=False)
class Node:
    """Vertex of a `Tree`.

    `parent` is a back-reference only; ownership flows from parent to
    children. Children are kept in insertion order.
    """

    index: Index
    parent: Optional["Node"] = field(default=None, repr=False)
    children: dict[Index, "Node"] = field(default_factory=dict, repr=False)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def is_root(self) -> bool:
        return self.parent is None


class Tree:
    """Rooted tree of uniquely indexed nodes.

    Invariants held before and after every public operation:
    - the node table holds exactly the nodes reachable from `root`;
    - the leaf registry holds exactly the nodes without children;
    - every non-root node's `parent` owns it as a child;
    - no index appears twice.

    An empty tree has no root. The first `add_node` call on an empty tree
    creates the parent index as root implicitly.
    """

    def __init__(self):
        self._root: Node | None = None
        self._nodes: dict[Index, Node] = {}
        self._leaves: dict[Index, Node] = {}

    @property
    def root(self) -> Node | None:
        return self._root

    @property
    def is_empty(self) -> bool:
        return self._root is None

    @property
    def taken_indexes(self) -> frozenset[Index]:
        """Indexes of every node currently in the tree."""
        return frozenset(self._nodes)

    @property
    def leaves(self) -> dict[Index, Node]:
        """Snapshot of the leaf registry, index to node."""
        return dict(self._leaves)

    def add_root(self, index: Index) -> Node:
        """
        Create a childless root in an empty tree.

        Params:
            index: Index of the new root

        Returns:
            The created root node

        Raises:
            RootAlreadyExistsError: If the tree already has a root
        """
        if self._root is not None:
            raise RootAlreadyExistsError(index, self._root.index)
        root = Node(index)
        self._root = root
        self._nodes[index] = root
        self._leaves[index] = root
        return root

    def add_node(self, parent_index: Index, child_index: Index) -> Node:
        """
        Add a node with `child_index` as a child of the node at `parent_index`.

        If the tree is empty, `parent_index` becomes the root. A failing call
        leaves the tree unchanged.

        Params:
            parent_index: Index of the parent node
            child_index: Index of the node to create

        Returns:
            The created child node

        Raises:
            ParentNotFoundError: If the tree is not empty and has no `parent_index`
            NodeAlreadyExistsError: If `child_index` is already anywhere in the tree
        """
        if self._root is None:
            if child_index == parent_index:
                raise NodeAlreadyExistsError(child_index)
            parent = None
        else:
            parent = self._nodes.get(parent_index)
            if parent is None:
                raise ParentNotFoundError(parent_index)
            if child_index in self._nodes:
                raise NodeAlreadyExistsError(child_index)

        if parent is None:
            parent = self.add_root(parent_index)

        child = Node(child_index, parent=parent)
        parent.children[child_index] = child
        self._nodes[child_index] = child
        self._leaves[child_index] = child
        # parent is no longer a leaf
        self._leaves.pop(parent_index, None)
        return child

    def remove_node(self, index: Index) -> None:
        """
        Remove the leaf at `index` from the tree.

        Removing the root empties the tree. A parent left without children
        becomes a leaf again.

        Params:
            index: Index of the node to remove

        Raises:
            NotALeafError: If the node has children or is not in the tree
        """
        node = self._leaves.get(index)
        if node is None:
            raise NotALeafError(index)

        parent = node.parent
        if parent is None:
            self._root = None
        else:
            del parent.children[index]
            if not parent.children:
                self._leaves[parent.index] = parent
            node.parent = None
        del self._nodes[index]
        del self._leaves[index]

    def get_node(self, index: Index) -> Node | None:
        """Return the node at `index`, or None if it is not in the tree."""
        return self._nodes.get(index)

    @staticmethod
    def get_post_order(node: Node | None) -> list[Index]:
        """
        Return the indexes of the subtree at `node`, every descendant before its parent.

        Children are visited in insertion order. An explicit stack keeps deep
        trees within reach regardless of the interpreter recursion limit.

        Params:
            node: Subtree root, or None

        Returns:
            Indexes in post-order; empty when `node` is None
        """
        if node is None:
            return []
        order: list[Index] = []
        stack: list[tuple[Node, bool]] = [(node, False)]
        while stack:
            current, expanded = stack.pop()
            if expanded:
                order.append(current.index)
                continue
            stack.append((current, True))
            for child in reversed(list(current.children.values())):
                stack.append((child, False))
        return order

    def edges(self) -> list[Edge]:
        """Return every `(parent, child)` pair, top-down in breadth-first order."""
        result: list[Edge] = []
        if self._root is None:
            return result
        queue = deque([self._root])
        while queue:
            current = queue.popleft()
            for child in current.children.values():
                result.append((current.index, child.index))
                queue.append(child)
        return result

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, index: object) -> bool:
        return index in self._nodes

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Tree):
            return NotImplemented
        if self._root is None or other._root is None:
            return self._root is None and other._root is None
        if self._root.index != other._root.index:
            return False

        # walk pairs of nodes sharing an index, matching children by index
        queue = deque([(self._root, other._root)])
        while queue:
            mine, theirs = queue.popleft()
            if mine.children.keys() != theirs.children.keys():
                return False
            for index, child in mine.children.items():
                queue.append((child, theirs.children[index]))
        return True

    __hash__ = None  # mutable

    def __str__(self) -> str:
        if self._root is None:
            return ""
        lines = [f"└──{self._root.index}"]
        stack: list[tuple[Node, int, bool]] = []
        self._push_children(stack, self._root, 1)
        while stack:
            node, depth, last = stack.pop()
            branch = "└──" if last else "├──"
            lines.append(f"{'   ' * depth}{branch}{node.index}")
            self._push_children(stack, node, depth + 1)
        return "\n".join(lines) + "\n"

    @staticmethod
    def _push_children(
        stack: list[tuple[Node, int, bool]], node: Node, depth: int
    ) -> None:
        children = list(node.children.values())
        for position in range(len(children) - 1, -1, -1):
            stack.append((children[position], depth, position == len(children) - 1))

    def __repr__(self) -> str:
        root = None if self._root is None else self._root.index
        return f"Tree(root={root}, size={len(self)})"
