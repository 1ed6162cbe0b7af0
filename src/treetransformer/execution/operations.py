"""
Edit operations produced by the transformer.

An edit script is an ordered sequence of `Add` and `Remove` instructions that,
replayed against one tree, yields another.
"""

from collections.abc import Iterable, Iterator

from attrs import field, frozen

from treetransformer.core.types import Index

SEPARATOR = ", "


@frozen
class Add:
    """Create `child` under `parent`; a None parent creates `child` as the root."""

    parent: Index | None
    child: Index

    def __str__(self) -> str:
        if self.parent is None:
            return f"Add({self.child})"
        return f"Add({self.parent}, {self.child})"


@frozen
class Remove:
    """Remove the leaf `index`."""

    index: Index

    def __str__(self) -> str:
        return f"Remove({self.index})"


EditOperation = Add | Remove


@frozen
class EditScript:
    operations: tuple[EditOperation, ...] = field(default=(), converter=tuple)

    @classmethod
    def of(cls, operations: Iterable[EditOperation]) -> "EditScript":
        return cls(tuple(operations))

    @property
    def additions(self) -> list[Add]:
        return [op for op in self.operations if isinstance(op, Add)]

    @property
    def removals(self) -> list[Remove]:
        return [op for op in self.operations if isinstance(op, Remove)]

    def __iter__(self) -> Iterator[EditOperation]:
        return iter(self.operations)

    def __len__(self) -> int:
        return len(self.operations)

    def __bool__(self) -> bool:
        return bool(self.operations)

    def __str__(self) -> str:
        return SEPARATOR.join(str(op) for op in self.operations)
