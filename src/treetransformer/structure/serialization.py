"""
Persistence of trees.

Two on-disk formats are supported:

- The line format (extension `.tt`): the root index on the first line, then one
  `<parent>:<child1>,<child2>,...` line per node that has children, in
  breadth-first order. Leaves get no line of their own. An empty tree is an
  empty document.
- Edge-list text files holding a bracketed description such as
  `[1,2][2,3][1,4]`, possibly spread over several lines.
"""

import logging
import re
from collections import deque
from pathlib import Path

from treetransformer.core.tree import Tree
from treetransformer.exceptions import (
    InvalidFileExtensionError,
    InvalidStructureError,
)
from treetransformer.parsing.parser import parse_index
from treetransformer.structure.builder import tree_from_string

logger = logging.getLogger(__name__)

EXTENSION = ".tt"

_WHITESPACE = re.compile(r"\s+")


def dumps(tree: Tree) -> str:
    """Render `tree` in the line format."""
    if tree.root is None:
        return ""
    lines = [str(tree.root.index)]
    queue = deque([tree.root])
    while queue:
        current = queue.popleft()
        if not current.children:
            continue
        lines.append(
            f"{current.index}:" + ",".join(str(child) for child in current.children)
        )
        queue.extend(current.children.values())
    return "\n".join(lines) + "\n"


def loads(text: str) -> Tree:
    """
    Read a tree from the line format.

    Blank lines and whitespace are ignored, and a trailing comma after the last
    child is accepted.

    Params:
        text: Serialized tree

    Returns:
        The deserialized tree

    Raises:
        InvalidIndexError: If the root or some index is not an integer
        InvalidStructureError: If a line is not of the form `parent:children`
        ParentNotFoundError: If a line names a parent not yet in the tree
        NodeAlreadyExistsError: If an index is listed twice
    """
    tree = Tree()
    lines = [_WHITESPACE.sub("", line) for line in text.splitlines()]
    lines = [line for line in lines if line]
    if not lines:
        return tree

    tree.add_root(parse_index(lines[0], "root"))
    for line in lines[1:]:
        parts = line.split(":")
        if len(parts) != 2:
            raise InvalidStructureError(f"Line {line!r} is not of the form parent:children!")
        parent = parse_index(parts[0], "parent")
        children = parts[1].split(",")
        if children and children[-1] == "":
            children.pop()
        if not children:
            raise InvalidStructureError(f"Line {line!r} lists no children!")
        for child in children:
            tree.add_node(parent, parse_index(child, "child"))
    return tree


def check_extension(path: str | Path, extension: str = EXTENSION) -> Path:
    """
    Return `path` as a `Path` if it ends with `extension`.

    Raises:
        InvalidFileExtensionError: If it does not
    """
    path = Path(path)
    if not str(path).endswith(extension):
        raise InvalidFileExtensionError(str(path), extension)
    return path


def serialize_tree(tree: Tree, path: str | Path, extension: str = EXTENSION) -> None:
    """
    Write `tree` in the line format to `path`.

    Raises:
        InvalidFileExtensionError: If `path` does not end with `extension`
        OSError: If the file cannot be written
    """
    target = check_extension(path, extension)
    target.write_text(dumps(tree), encoding="utf-8")
    logger.debug("Saved tree with %d nodes to %s", len(tree), target)


def deserialize_tree(path: str | Path, extension: str = EXTENSION) -> Tree:
    """
    Read a tree in the line format from `path`.

    Raises:
        InvalidFileExtensionError: If `path` does not end with `extension`
        OSError: If the file cannot be read
        TreeTransformerError: If the content is not a valid serialized tree
    """
    source = check_extension(path, extension)
    tree = loads(source.read_text(encoding="utf-8"))
    logger.debug("Loaded tree with %d nodes from %s", len(tree), source)
    return tree


def read_tree_file(path: str | Path) -> Tree:
    """
    Read a tree from an edge-list text file.

    Lines are joined without separators before parsing.

    Raises:
        OSError: If the file cannot be read
        TreeTransformerError: If the content is not a valid tree description
    """
    source = Path(path)
    with source.open(encoding="utf-8") as handle:
        text = "".join(line.rstrip("\r\n") for line in handle)
    tree = tree_from_string(text)
    logger.debug("Read tree with %d nodes from %s", len(tree), source)
    return tree
