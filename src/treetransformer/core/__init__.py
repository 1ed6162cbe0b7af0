"""
Core tree transformer components.

This package provides the indexed tree structure and the type aliases shared
by the parsing, construction and transformation layers.
"""

from treetransformer.core.tree import Node, Tree
from treetransformer.core.types import Edge, Index, TreeDefinition

__all__ = [
    "Node",
    "Tree",
    "Edge",
    "Index",
    "TreeDefinition",
]
