"""
Tree Transformer - structural edit scripts between indexed trees

Tree Transformer maintains rooted trees of uniquely indexed nodes and computes
the sequence of node removals and additions that turns one tree into another.
"""

from importlib.metadata import version

from treetransformer.core import Node, Tree
from treetransformer.execution import Add, EditScript, Remove, apply_script, diff
from treetransformer.structure import tree_from_edges, tree_from_string

__version__ = version("tree-transformer")

__all__ = [
    "__version__",
    "Node",
    "Tree",
    "Add",
    "Remove",
    "EditScript",
    "apply_script",
    "diff",
    "tree_from_edges",
    "tree_from_string",
]
