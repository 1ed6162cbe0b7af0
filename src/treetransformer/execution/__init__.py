"""
Tree transformation.

This package holds the edit operations and the structural diff that produces
them, along with the replay of a script against a tree.
"""

from treetransformer.execution.operations import (
    Add,
    EditOperation,
    EditScript,
    Remove,
)
from treetransformer.execution.transformer import (
    apply_script,
    create_subtree,
    diff,
    remove_subtree,
)

__all__ = [
    "Add",
    "EditOperation",
    "EditScript",
    "Remove",
    "apply_script",
    "create_subtree",
    "diff",
    "remove_subtree",
]
