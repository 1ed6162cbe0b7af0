"""
Structural diff between two trees.

`diff` walks a given and a desired tree in lockstep and produces an edit
script of `Remove` and `Add` operations that turns the given tree into one
structurally equal to the desired tree. Removals come first, each obsolete
subtree torn down bottom-up. Additions follow, each new subtree built top-down,
so every `Add` names a parent that already exists when it is replayed.

The script is correct but not guaranteed minimal: a subtree moved under a
different parent is removed and recreated rather than detected as a move.
"""

from collections import deque
from collections.abc import Iterable

from treetransformer.core.tree import Node, Tree
from treetransformer.core.types import Index
from treetransformer.execution.operations import Add, EditOperation, EditScript, Remove


def remove_subtree(node: Node | None) -> list[Remove]:
    """Return removals for the subtree at `node`, its root last."""
    return [Remove(index) for index in Tree.get_post_order(node)]


def create_subtree(node: Node | None, parent_index: Index | None) -> list[Add]:
    """
    Return additions recreating the subtree at `node`, top-down.

    Params:
        node: Root of the subtree to create
        parent_index: Index the subtree is attached to; None when `node`
            becomes the root of an empty tree

    Returns:
        Additions in breadth-first order. Without a parent, the root is created
        implicitly by its first child edge, or by a root `Add` when it has no
        children.
    """
    if node is None:
        return []
    additions: list[Add] = []
    if parent_index is not None:
        additions.append(Add(parent_index, node.index))
    elif not node.children:
        return [Add(None, node.index)]

    queue = deque([node])
    while queue:
        current = queue.popleft()
        for child in current.children.values():
            additions.append(Add(current.index, child.index))
            queue.append(child)
    return additions


def diff(given: Tree | None, desired: Tree | None) -> EditScript:
    """
    Compute the edit script transforming `given` into `desired`.

    Both trees are read-only here. None is treated as the empty tree. Trees
    with different roots are rebuilt from scratch: `given` is removed entirely,
    then `desired` is created entirely.

    Params:
        given: Tree the script applies to
        desired: Tree the script should produce

    Returns:
        The edit script; empty when the trees are structurally equal
    """
    given_root = given.root if given is not None else None
    desired_root = desired.root if desired is not None else None

    if given_root is None and desired_root is None:
        return EditScript()
    if given_root is None:
        return EditScript.of(create_subtree(desired_root, None))
    if desired_root is None:
        return EditScript.of(remove_subtree(given_root))
    if given_root.index != desired_root.index:
        return EditScript.of(
            remove_subtree(given_root) + create_subtree(desired_root, None)
        )

    removals: list[Remove] = []
    additions: list[Add] = []
    # pairs of (desired, given) nodes sharing an index under parents sharing an index
    queue = deque([(desired_root, given_root)])
    while queue:
        desired_node, given_node = queue.popleft()
        missing = dict(desired_node.children)
        for index, child in given_node.children.items():
            counterpart = missing.pop(index, None)
            if counterpart is None:
                removals.extend(remove_subtree(child))
            else:
                queue.append((counterpart, child))
        # buffered so that no addition runs before all removals
        for child in missing.values():
            additions.extend(create_subtree(child, desired_node.index))

    return EditScript.of([*removals, *additions])


def apply_script(tree: Tree, script: Iterable[EditOperation]) -> Tree:
    """
    Replay `script` against `tree` in place.

    Params:
        tree: Tree to mutate
        script: Operations to replay, in order

    Returns:
        The same `tree`, for chaining

    Raises:
        TreeTransformerError: If an operation does not apply to the current tree
    """
    for operation in script:
        if isinstance(operation, Remove):
            tree.remove_node(operation.index)
        elif operation.parent is None:
            tree.add_root(operation.child)
        else:
            tree.add_node(operation.parent, operation.child)
    return tree
