"""Custom exception types for transform tree loading and editing."""

from __future__ import annotations

from pathlib import Path


class FrameTreeError(Exception):
    """Base exception for all transform tree errors."""

    pass


class DecodeError(FrameTreeError):
    """The tree file could not be read or does not match the file format."""

    def __init__(self, message: str, path: str | Path | None = None):
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"{self.path}: {message}"
        super().__init__(message)


class DuplicateNameError(FrameTreeError):
    """Two nodes share the same name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Duplicate node name: {name!r}")


class UnknownParentError(FrameTreeError):
    """A node references a parent name absent from the tree."""

    def __init__(self, name: str, child: str | None = None):
        self.name = name
        self.child = child
        if child is None:
            super().__init__(f"Unknown parent: {name!r}")
        else:
            super().__init__(f"Unknown parent {name!r} referenced by node {child!r}")


class UnknownNodeError(FrameTreeError, KeyError):
    """Name lookup miss."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No node named {name!r}")

    def __str__(self) -> str:
        return self.args[0]


class InvalidHandleError(FrameTreeError, IndexError):
    """Handle does not refer to a node in the store."""

    def __init__(self, handle: int, size: int):
        self.handle = handle
        super().__init__(f"Invalid node handle {handle} (store has {size} nodes)")


class CycleError(FrameTreeError):
    """Re-parenting would make a node its own ancestor."""

    def __init__(self, handle: int, parent: int):
        self.handle = handle
        self.parent = parent
        super().__init__(f"Setting parent of node {handle} to {parent} would create a cycle")


__all__ = [
    "FrameTreeError",
    "DecodeError",
    "DuplicateNameError",
    "UnknownParentError",
    "UnknownNodeError",
    "InvalidHandleError",
    "CycleError",
]
