"""
Tree transformer exception classes.

This package provides all exception types used throughout the tree transformer
for consistent error handling and reporting.
"""

from treetransformer.exceptions.core import (
    InvalidFileExtensionError,
    InvalidIndexError,
    InvalidStructureError,
    NodeAlreadyExistsError,
    NotALeafError,
    ParentNotFoundError,
    RootAlreadyExistsError,
    TreeTransformerError,
)

__all__ = [
    "TreeTransformerError",
    "ParentNotFoundError",
    "NodeAlreadyExistsError",
    "RootAlreadyExistsError",
    "NotALeafError",
    "InvalidStructureError",
    "InvalidIndexError",
    "InvalidFileExtensionError",
]
