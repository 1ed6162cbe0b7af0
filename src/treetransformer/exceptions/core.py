"""
Exception classes for tree construction, mutation and transformation.

This module defines specific exception types for the different error conditions
that can occur while building, editing, parsing and persisting trees.
"""


class TreeTransformerError(Exception):
    """Base exception for all tree transformer errors."""

    pass


class ParentNotFoundError(TreeTransformerError):
    """Raised when a node is added under a parent that is not in the tree."""

    def __init__(self, index: int):
        """
        Initialize the exception.

        Params:
            index: The missing parent index
        """
        self.index = index
        super().__init__(
            f"Cannot add node to {index}! It is not present in the tree!"
        )


class NodeAlreadyExistsError(TreeTransformerError):
    """Raised when an index is introduced that is already taken in the tree."""

    def __init__(self, index: int, message: str | None = None):
        """
        Initialize the exception.

        Params:
            index: The duplicated node index
            message: Optional message overriding the default one
        """
        self.index = index
        super().__init__(
            message or f"Cannot add node {index}! It is already present in the tree!"
        )


class RootAlreadyExistsError(NodeAlreadyExistsError):
    """Raised when a root is created in a tree that already has one."""

    def __init__(self, index: int, existing_root: int):
        """
        Initialize the exception.

        Params:
            index: The index that was requested as the new root
            existing_root: Index of the root already present
        """
        self.existing_root = existing_root
        super().__init__(
            index,
            f"Cannot add root {index}! Tree already has root {existing_root}!",
        )


class NotALeafError(TreeTransformerError):
    """Raised when removing a node that has children or is not in the tree.

    Both conditions share one kind: a node that does not exist is not a leaf
    of the tree either.
    """

    def __init__(self, index: int):
        """
        Initialize the exception.

        Params:
            index: The index that could not be removed
        """
        self.index = index
        super().__init__(f"Cannot remove node {index}! It is not a leaf!")


class InvalidStructureError(TreeTransformerError, ValueError):
    """Raised when a textual description cannot be read as a single tree or script."""

    def __init__(self, reason: str, subject: str = "tree structure"):
        """
        Initialize the exception.

        Params:
            reason: Why the structure was rejected
            subject: What was being read, used in the message
        """
        self.reason = reason
        self.subject = subject
        super().__init__(f"Incorrect {subject} provided! {reason}".rstrip())


class InvalidIndexError(TreeTransformerError, ValueError):
    """Raised when a token expected to be an integer index fails to parse."""

    def __init__(self, token: str, context: str = "node"):
        """
        Initialize the exception.

        Params:
            token: The offending text
            context: What the token was expected to identify
        """
        self.token = token
        self.context = context
        super().__init__(f"Invalid {context} index provided: {token!r}")


class InvalidFileExtensionError(TreeTransformerError, ValueError):
    """Raised when a tree file path does not carry the expected extension."""

    def __init__(self, path: str, expected: str):
        """
        Initialize the exception.

        Params:
            path: The rejected path
            expected: The extension every tree file must end with
        """
        self.path = path
        self.expected = expected
        super().__init__(
            f"Incorrect file format for {path}! Only {expected} files are supported!"
        )
