"""Node store for a hierarchy of rigid-body transforms.

Nodes live in a flat list and are addressed by their index (handle). Handles
are assigned at creation and never reused; nodes cannot be removed, only
re-parented.

Each node caches its world transform. Edits mark the affected subtree dirty
and ``update_world`` recomputes the stale entries, parents before children.
A dirty node's descendants are always dirty too.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass, field

from ..core.errors import (
    CycleError,
    DuplicateNameError,
    InvalidHandleError,
    UnknownNodeError,
)
from ..core.frames import Isometry
from ..core.types import NodeId


@dataclass
class TNode:
    """A single frame in the tree."""

    name: str
    local: Isometry
    parent: NodeId | None = None
    children: list[NodeId] = field(default_factory=list)
    world: Isometry = field(default_factory=Isometry.identity)
    dirty: bool = True


class TransformTree:
    """Forest of named frames with cached world transforms."""

    def __init__(self) -> None:
        self.nodes: list[TNode] = []

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[TNode]:
        return iter(self.nodes)

    def _check(self, handle: NodeId) -> None:
        if not 0 <= handle < len(self.nodes):
            raise InvalidHandleError(handle, len(self.nodes))

    def node(self, handle: NodeId) -> TNode:
        self._check(handle)
        return self.nodes[handle]

    # ------------------------------------------------------------------
    # Construction and linking
    # ------------------------------------------------------------------

    def add_node(self, name: str, local: Isometry, parent: NodeId | None = None) -> NodeId:
        """Append a node, for input that is already sorted parents-first.

        ``parent`` is honoured only if it is an existing handle, i.e. smaller
        than the new node's handle. Anything else makes the node a root. This
        never raises; callers building from untrusted data validate parents
        themselves or use :meth:`insert`.

        Args:
            name: Node name
            local: Transform relative to the parent (or world for a root)
            parent: Handle of an already inserted parent

        Returns:
            Handle of the new node
        """
        handle = len(self.nodes)
        node = TNode(name=name, local=local.copy())
        self.nodes.append(node)

        if parent is not None and 0 <= parent < handle:
            p = self.nodes[parent]
            p.children.append(handle)
            node.parent = parent
            if p.dirty:
                # Parent world is stale; leave this one for update_world
                return handle
            node.world = p.world @ node.local
        else:
            node.world = node.local.copy()
        node.dirty = False
        return handle

    def insert(self, name: str, local: Isometry, parent: NodeId | None = None) -> NodeId:
        """Append a node under any existing parent.

        Raises:
            InvalidHandleError: If ``parent`` is not in the store
        """
        if parent is not None:
            self._check(parent)
        handle = self.add_node(name, local)
        if parent is not None:
            self.set_parent(handle, parent)
        return handle

    def is_ancestor(self, ancestor: NodeId, handle: NodeId) -> bool:
        """True if ``ancestor`` is ``handle`` or lies on its path to the root."""
        current: NodeId | None = handle
        while current is not None:
            if current == ancestor:
                return True
            current = self.nodes[current].parent
        return False

    def set_parent(self, handle: NodeId, parent: NodeId | None) -> None:
        """Move a node under a new parent, or make it a root with ``None``.

        The node and its whole subtree are marked dirty.

        Raises:
            InvalidHandleError: If a handle is not in the store
            CycleError: If ``parent`` is ``handle`` or one of its descendants
        """
        self._check(handle)
        if parent is not None:
            self._check(parent)
            if self.is_ancestor(handle, parent):
                raise CycleError(handle, parent)

        node = self.nodes[handle]
        if node.parent is not None:
            siblings = self.nodes[node.parent].children
            siblings[:] = [c for c in siblings if c != handle]
            node.parent = None
        if parent is not None:
            self.nodes[parent].children.append(handle)
            node.parent = parent
        self.mark_dirty(handle)

    def set_local(self, handle: NodeId, local: Isometry) -> None:
        """Replace a node's local transform and invalidate its subtree."""
        self._check(handle)
        self.nodes[handle].local = local.copy()
        self.mark_dirty(handle)

    # ------------------------------------------------------------------
    # Cached world transforms
    # ------------------------------------------------------------------

    def mark_dirty(self, handle: NodeId) -> None:
        """Mark a node and its descendants dirty, breadth first.

        Nodes that are already dirty are skipped along with their subtrees,
        which are dirty already.
        """
        self._check(handle)
        queue = deque([handle])
        while queue:
            n = queue.popleft()
            node = self.nodes[n]
            if not node.dirty:
                node.dirty = True
                queue.extend(node.children)

    def update_world(self) -> None:
        """Recompute the world transform of every dirty node.

        Depth-first from each root, carrying the parent's current world
        transform. Sibling order is not significant.
        """
        stack: list[tuple[NodeId, Isometry]] = [
            (r, Isometry.identity()) for r in self.roots()
        ]
        while stack:
            handle, parent_world = stack.pop()
            node = self.nodes[handle]
            if node.dirty:
                node.world = parent_world @ node.local
                node.dirty = False
            for child in node.children:
                stack.append((child, node.world))

    def is_dirty(self) -> bool:
        return any(node.dirty for node in self.nodes)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def name_hash(self) -> dict[str, NodeId]:
        """Map every node name to its handle.

        Raises:
            DuplicateNameError: On the first name that appears twice
        """
        mapping: dict[str, NodeId] = {}
        for handle, node in enumerate(self.nodes):
            if node.name in mapping:
                raise DuplicateNameError(node.name)
            mapping[node.name] = handle
        return mapping

    def lookup(self, name: str) -> NodeId:
        """Handle of the node called ``name``.

        Raises:
            DuplicateNameError: If the tree holds two nodes with the same name
            UnknownNodeError: If no node has that name
        """
        handle = self.name_hash().get(name)
        if handle is None:
            raise UnknownNodeError(name)
        return handle

    def roots(self) -> list[NodeId]:
        return [h for h, node in enumerate(self.nodes) if node.parent is None]

    def descendants(self, handle: NodeId) -> list[NodeId]:
        """Handles below ``handle`` in breadth-first order, excluding itself."""
        self._check(handle)
        result: list[NodeId] = []
        queue = deque(self.nodes[handle].children)
        while queue:
            n = queue.popleft()
            result.append(n)
            queue.extend(self.nodes[n].children)
        return result

    def path_to_root(self, handle: NodeId) -> list[NodeId]:
        """Handles from the root down to ``handle``, inclusive."""
        self._check(handle)
        path: list[NodeId] = []
        current: NodeId | None = handle
        while current is not None:
            path.append(current)
            current = self.nodes[current].parent
        path.reverse()
        return path

    def world(self, handle: NodeId) -> Isometry:
        """World transform of a node, refreshing stale entries first."""
        self._check(handle)
        if self.nodes[handle].dirty:
            self.update_world()
        return self.nodes[handle].world

    def relative(self, source: NodeId, target: NodeId) -> Isometry:
        """Transform of ``target`` expressed in the frame of ``source``."""
        return self.world(source).inverse() @ self.world(target)

    def __repr__(self) -> str:
        return f"TransformTree(nodes={len(self.nodes)}, roots={len(self.roots())})"


__all__ = [
    "TNode",
    "TransformTree",
]
