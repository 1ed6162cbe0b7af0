"""
Tree construction and persistence.

This package builds trees from edge lists and reads and writes them in the
line-oriented `.tt` format and as edge-list text files.
"""

from treetransformer.structure.builder import (
    build_tree,
    tree_from_edges,
    tree_from_string,
)
from treetransformer.structure.serialization import (
    EXTENSION,
    check_extension,
    deserialize_tree,
    dumps,
    loads,
    read_tree_file,
    serialize_tree,
)

__all__ = [
    "build_tree",
    "tree_from_edges",
    "tree_from_string",
    "EXTENSION",
    "check_extension",
    "deserialize_tree",
    "dumps",
    "loads",
    "read_tree_file",
    "serialize_tree",
]
