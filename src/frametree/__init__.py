"""Transform tree package.

Maintain a named hierarchy of rigid-body transforms, each relative to a parent
frame, and compute every node's transform relative to the world frame.
"""

__version__ = "0.1.0"

__all__ = [
    "cli",
    "core",
    "tree",
]
