"""
Tree transformer parsing components.

This package reads bracketed edge lists and rendered edit scripts.
"""

from treetransformer.parsing.parser import (
    build_tree_definition,
    check_bracket_format,
    extract_edges,
    parse_edge,
    parse_edges,
    parse_edit_script,
    parse_index,
)

__all__ = [
    "build_tree_definition",
    "check_bracket_format",
    "extract_edges",
    "parse_edge",
    "parse_edges",
    "parse_edit_script",
    "parse_index",
]
