"""
Parser for textual tree and edit-script descriptions.

Trees are described as bracketed edge lists such as `[1,2][2,3][1,4]`, where
each group holds a `parent,child` pair. Edit scripts use the rendering of
`treetransformer.execution.operations`, e.g. `Remove(2), Add(6, 3)`.
"""

import re
from collections.abc import Iterable

from treetransformer.core.types import Edge, Index, TreeDefinition
from treetransformer.exceptions import InvalidIndexError, InvalidStructureError
from treetransformer.execution.operations import Add, EditOperation, EditScript, Remove

INDEX_PATTERN = re.compile(r"[+-]?[0-9]+")
EDGE_PATTERN = re.compile(r"\[(?P<edge>[^\[\]]*)\]")
INSTRUCTION_PATTERN = re.compile(r"(?P<name>[A-Za-z]+)\s*\((?P<arguments>[^()]*)\)")
LEADING_SEPARATOR_PATTERN = re.compile(r"[\s,]*")
SCRIPT_SEPARATOR_PATTERN = re.compile(r"\s*[,\n][\s,]*")


def check_bracket_format(text: str) -> bool:
    """
    Check that brackets in `text` alternate open/close without nesting.

    Outside of bracket groups only whitespace is allowed, so `[1,2]1,3]` and
    `aaa[1,2]` are both rejected.

    Params:
        text: Tree description to check

    Returns:
        True if the description is well-formed, False otherwise
    """
    stack: list[str] = []
    for char in text:
        if char == "[":
            if stack:
                return False
            stack.append(char)
        elif char == "]":
            if not stack:
                return False
            stack.pop()
        elif not stack and not char.isspace():
            return False
    return not stack


def extract_edges(text: str) -> list[str]:
    """Return the trimmed contents of every bracket group, e.g. `["1, 2", "1, 3"]`."""
    return [match.group("edge").strip() for match in EDGE_PATTERN.finditer(text)]


def parse_index(token: str, context: str = "node") -> Index:
    """
    Parse a single integer index.

    Params:
        token: Text expected to hold an optionally signed integer
        context: What the index identifies, used in error messages

    Returns:
        The parsed index

    Raises:
        InvalidIndexError: If `token` is not an integer
    """
    stripped = token.strip()
    if not INDEX_PATTERN.fullmatch(stripped):
        raise InvalidIndexError(token, context)
    return int(stripped)


def parse_edge(edge: str) -> Edge:
    """
    Split an edge body such as `"1, 2"` into a `(parent, child)` pair.

    Raises:
        InvalidStructureError: If the edge does not hold exactly two elements
        InvalidIndexError: If either element is not an integer
    """
    elements = re.sub(r"\s+", "", edge).split(",")
    if len(elements) != 2:
        raise InvalidStructureError(f"Edge [{edge}] is invalid!")
    return parse_index(elements[0], "parent"), parse_index(elements[1], "child")


def parse_edges(text: str) -> list[Edge]:
    """
    Parse a full bracketed edge list.

    Raises:
        InvalidStructureError: If the bracket format is invalid or an edge is malformed
        InvalidIndexError: If an element is not an integer
    """
    if not check_bracket_format(text):
        raise InvalidStructureError("Brackets are not matched!")
    return [parse_edge(edge) for edge in extract_edges(text)]


def build_tree_definition(edges: Iterable[Edge]) -> tuple[Index, TreeDefinition]:
    """
    Build the adjacency mapping of an edge list and select its root.

    An edge whose child was already recorded as a parent of its parent is a
    cycle. The root is the only index never seen as a child.

    Params:
        edges: `(parent, child)` pairs

    Returns:
        Tuple of the root index and a mapping of parent index to child indexes

    Raises:
        InvalidStructureError: On a cycle, or when zero or several roots remain
    """
    definition: TreeDefinition = {}
    seen_edges: set[Edge] = set()
    children_seen: set[Index] = set()
    # dict keeps candidates in first-seen order
    root_candidates: dict[Index, None] = {}

    for parent, child in edges:
        if (child, parent) in seen_edges:
            raise InvalidStructureError(
                f"Edge [{parent}, {child}] introduces a cycle!"
            )
        siblings = definition.setdefault(parent, [])
        if (parent, child) not in seen_edges:
            seen_edges.add((parent, child))
            siblings.append(child)

        if parent not in children_seen:
            root_candidates[parent] = None
        # a child of any node cannot be the root
        root_candidates.pop(child, None)
        children_seen.add(child)

    if not root_candidates:
        raise InvalidStructureError("No root can be selected!")
    if len(root_candidates) > 1:
        raise InvalidStructureError(
            "Tree is not connected and multiple roots exist: "
            f"{sorted(root_candidates)}"
        )
    return next(iter(root_candidates)), definition


def _build_operation(name: str, arguments: str) -> EditOperation:
    values = arguments.split(",")
    kind = name.lower()
    if kind == "add" and len(values) == 2:
        return Add(parse_index(values[0], "parent"), parse_index(values[1], "child"))
    if kind == "add" and len(values) == 1:
        return Add(None, parse_index(values[0], "root"))
    if kind == "remove" and len(values) == 1:
        return Remove(parse_index(values[0]))
    raise InvalidStructureError(
        f"Instruction {name}({arguments}) is not supported!", subject="edit script"
    )


def parse_edit_script(text: str) -> EditScript:
    """
    Parse a rendered edit script back into operations.

    Instructions are case-insensitive and must be separated by at least one
    comma or newline, so both `Remove(2), Add(6, 3)` and one instruction per
    line are accepted, but `Remove(2)Add(6, 3)` is not.

    Params:
        text: Rendered edit script

    Returns:
        The parsed `EditScript`; empty for blank text

    Raises:
        InvalidStructureError: If an instruction is malformed or unknown
        InvalidIndexError: If an argument is not an integer
    """
    operations: list[EditOperation] = []
    position = LEADING_SEPARATOR_PATTERN.match(text).end()
    while position < len(text):
        match = INSTRUCTION_PATTERN.match(text, position)
        if match is None:
            fragment = text[position : position + 20]
            raise InvalidStructureError(
                f"Cannot read instruction at {fragment!r}", subject="edit script"
            )
        operations.append(_build_operation(match.group("name"), match.group("arguments")))
        separator = SCRIPT_SEPARATOR_PATTERN.match(text, match.end())
        if separator is not None:
            position = separator.end()
        elif text[match.end() :].strip():
            raise InvalidStructureError(
                f"Missing separator after {match.group(0)!r}", subject="edit script"
            )
        else:
            break
    return EditScript.of(operations)
