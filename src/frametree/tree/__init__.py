"""Transform tree store and conversion from tree files."""

from .convert import from_file_tree, load_transform_tree, to_file_tree
from .store import TNode, TransformTree

__all__ = [
    "TNode",
    "TransformTree",
    "from_file_tree",
    "to_file_tree",
    "load_transform_tree",
]
