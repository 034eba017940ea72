"""Conversion between tree files and in-memory transform trees."""

from __future__ import annotations

from pathlib import Path

from ..core import config
from ..core.config import CURRENT_VERSION, FileNode, FileTree
from ..core.errors import UnknownParentError
from ..core.frames import Isometry
from ..core.logging import get_logger
from .store import TransformTree

logger = get_logger(__name__)


def from_file_tree(ftree: FileTree) -> TransformTree:
    """Build a transform tree from a decoded tree file.

    Every node is created as a root first, in file order, so parents can be
    linked by name regardless of where they appear in the file. World
    transforms are computed once at the end.

    Args:
        ftree: Decoded tree file

    Returns:
        TransformTree with no dirty nodes

    Raises:
        DuplicateNameError: If two nodes share a name
        UnknownParentError: If a parent name is not in the file
        CycleError: If the parent links form a cycle
    """
    tree = TransformTree()
    for fnode in ftree.nodes:
        tree.add_node(fnode.name, Isometry.from_euler(fnode.t, fnode.r))

    name_map = tree.name_hash()

    for fnode in ftree.nodes:
        if fnode.parent is None:
            continue
        if fnode.parent not in name_map:
            raise UnknownParentError(fnode.parent, fnode.name)
        tree.set_parent(name_map[fnode.name], name_map[fnode.parent])
        logger.debug("Linked node", {"node": fnode.name, "parent": fnode.parent})

    tree.update_world()
    return tree


def to_file_tree(tree: TransformTree, version: int = CURRENT_VERSION) -> FileTree:
    """Describe a transform tree in file form, one entry per node in handle order."""
    nodes = []
    for node in tree:
        parent = tree.nodes[node.parent].name if node.parent is not None else None
        nodes.append(
            FileNode(
                name=node.name,
                parent=parent,
                t=tuple(float(v) for v in node.local.translation),
                r=tuple(float(v) for v in node.local.euler()),
            )
        )
    return FileTree(version=version, nodes=nodes)


def load_transform_tree(path: str | Path) -> TransformTree:
    """Load a tree file and convert it into a transform tree.

    Raises:
        DecodeError: If the file cannot be read or parsed
        DuplicateNameError: If two nodes share a name
        UnknownParentError: If a parent name is not in the file
        CycleError: If the parent links form a cycle
    """
    ftree = config.load(path)
    tree = from_file_tree(ftree)
    logger.info(
        "Loaded transform tree",
        {"path": str(path), "nodes": len(tree), "roots": len(tree.roots())},
    )
    return tree


__all__ = [
    "from_file_tree",
    "to_file_tree",
    "load_transform_tree",
]
