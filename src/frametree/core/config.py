"""Tree file models and I/O.

Pydantic models for the on-disk description of a transform tree, with JSON and
YAML I/O. Nodes refer to their parents by name, never by handle, so a file can
be written by hand in any order.

Loading here is purely syntactic: duplicate names and dangling parents are
detected when the file is converted into a tree.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import DecodeError
from .logging import get_logger
from .types import EulerXYZ, Vector3

logger = get_logger(__name__)

CURRENT_VERSION = 1

YAML_SUFFIXES = (".yaml", ".yml")


class FileNode(BaseModel):
    """One node of a tree file."""

    name: str = Field(description="Unique node name")
    parent: str | None = Field(default=None, description="Parent node name, null for a root")
    t: Vector3 = Field(
        default=(0.0, 0.0, 0.0), description="Translation (x, y, z) relative to the parent"
    )
    r: EulerXYZ = Field(
        default=(0.0, 0.0, 0.0),
        description="Rotation as intrinsic XYZ Euler angles (roll, pitch, yaw) in radians",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject empty names."""
        if not v:
            raise ValueError("Node name must not be empty")
        return v


class FileTree(BaseModel):
    """Complete tree file: format version plus nodes in file order."""

    version: int = Field(description="File format version")
    nodes: list[FileNode] = Field(default_factory=list, description="Tree nodes")


def parse(data: Any, path: str | Path | None = None) -> FileTree:
    """Validate already-decoded data against the file schema.

    Args:
        data: Object decoded from JSON or YAML
        path: Source path, used in error messages

    Returns:
        FileTree

    Raises:
        DecodeError: If the data does not match the schema
    """
    try:
        ftree = FileTree.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"invalid tree file: {e}", path) from e

    if ftree.version > CURRENT_VERSION:
        logger.warning(
            "Tree file version is newer than supported",
            {"path": str(path) if path else None, "version": ftree.version},
        )
    return ftree


def loads(text: str, fmt: str = "json") -> FileTree:
    """Decode a tree from a JSON or YAML string.

    Args:
        text: File content
        fmt: "json" or "yaml"

    Returns:
        FileTree

    Raises:
        DecodeError: If the text is malformed or does not match the schema
    """
    try:
        if fmt == "json":
            data = json.loads(text)
        elif fmt == "yaml":
            data = yaml.safe_load(text)
        else:
            raise ValueError(f"Unsupported format: {fmt}")
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DecodeError(f"malformed {fmt}: {e}") from e
    return parse(data)


def load(path: str | Path) -> FileTree:
    """Load a tree file from JSON or YAML.

    ``.json`` is read as JSON and ``.yaml``/``.yml`` as YAML. Any other
    suffix is tried as YAML first, then as JSON.

    Args:
        path: Path to tree file

    Returns:
        FileTree

    Raises:
        DecodeError: If the file cannot be read or parsed
    """
    path = Path(path)

    try:
        with open(path, encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        raise DecodeError(f"cannot read file: {e.strerror or e}", path) from e
    except UnicodeDecodeError as e:
        raise DecodeError(f"not valid UTF-8: {e}", path) from e

    suffix = path.suffix.lower()
    try:
        if suffix in YAML_SUFFIXES:
            data = yaml.safe_load(content)
        elif suffix == ".json":
            data = json.loads(content)
        else:
            try:
                data = yaml.safe_load(content)
            except yaml.YAMLError:
                data = json.loads(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DecodeError(f"malformed content: {e}", path) from e

    logger.debug("Decoded tree file", {"path": str(path)})
    return parse(data, path)


def dumps(ftree: FileTree, indent: int = 2) -> str:
    """Serialize a tree as JSON text."""
    return json.dumps(ftree.model_dump(mode="json"), indent=indent)


def save(ftree: FileTree, path: str | Path) -> None:
    """Save a tree file as YAML or JSON depending on the suffix.

    Args:
        ftree: Tree to save
        path: Output file path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = ftree.model_dump(mode="json")

    with open(path, "w", encoding="utf-8") as f:
        if path.suffix.lower() in YAML_SUFFIXES:
            yaml.safe_dump(data, f, default_flow_style=None, sort_keys=False)
        else:
            json.dump(data, f, indent=2)
            f.write("\n")


__all__ = [
    "CURRENT_VERSION",
    "FileNode",
    "FileTree",
    "parse",
    "loads",
    "load",
    "dumps",
    "save",
]
