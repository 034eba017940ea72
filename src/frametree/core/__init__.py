"""Core module with types, units, frames, errors, logging, and file config."""

from .frames import Isometry, compose_chain, identity

__all__ = [
    "Isometry",
    "compose_chain",
    "identity",
]
