import json
import math
import random
from pathlib import Path

import numpy as np
import pytest

from frametree.core.config import FileNode, FileTree

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"


@pytest.fixture(autouse=True)
def seed_rng() -> None:
    random.seed(0)
    np.random.seed(0)


@pytest.fixture()
def examples_dir() -> Path:
    return EXAMPLES_DIR


@pytest.fixture()
def arm_lidar() -> FileTree:
    return FileTree(
        version=1,
        nodes=[
            FileNode(name="arm_base", parent=None, t=(0.0, 0.0, 0.0), r=(0.0, 0.0, 0.0)),
            FileNode(name="lidar", parent="arm_base", t=(0.5, 0.0, 0.0), r=(math.pi / 2, 0.0, 0.0)),
        ],
    )


@pytest.fixture()
def write_tree(tmp_path: Path):  # type: ignore[no-untyped-def]
    """Write a raw tree document to a temporary JSON file and return its path."""

    def _write(data: dict, name: str = "tree.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return path

    return _write
