"""
Core type definitions for the tree transformer.

This module contains fundamental type aliases used throughout the package
for type safety and consistency.
"""

Index = int

Edge = tuple[Index, Index]

# parent index -> child indexes, in first-seen order
TreeDefinition = dict[Index, list[Index]]
