"""Tests for converting tree files into transform trees and back."""

from __future__ import annotations

import math
from pathlib import Path

import numpy as np
import pytest

from frametree.core.config import FileNode, FileTree, load
from frametree.core.errors import (
    CycleError,
    DecodeError,
    DuplicateNameError,
    UnknownParentError,
)
from frametree.core.frames import Isometry, compose_chain
from frametree.tree.convert import from_file_tree, load_transform_tree, to_file_tree

ABS_TOL = 1e-9


def _tuples(ftree: FileTree) -> dict[str, tuple]:
    return {n.name: (n.parent, n.t, n.r) for n in ftree.nodes}


def test_arm_lidar_scenario(arm_lidar: FileTree):
    tree = from_file_tree(arm_lidar)

    assert len(tree) == 2
    base, lidar = tree.lookup("arm_base"), tree.lookup("lidar")
    assert tree.nodes[base].world.allclose(Isometry.identity())

    world = tree.nodes[lidar].world
    np.testing.assert_allclose(world.translation, [0.5, 0.0, 0.0], atol=ABS_TOL)
    np.testing.assert_allclose(
        world.rotation, [[1.0, 0.0, 0.0], [0.0, 0.0, -1.0], [0.0, 1.0, 0.0]], atol=ABS_TOL
    )
    assert world.allclose(tree.nodes[lidar].local)


def test_no_dirty_nodes_after_conversion(examples_dir: Path):
    tree = load_transform_tree(examples_dir / "robot_arm.yaml")

    assert not tree.is_dirty()


def test_order_independent_parents(examples_dir: Path):
    """Children listed before their parents still link, and handles follow file order."""
    tree = load_transform_tree(examples_dir / "robot_arm.yaml")

    names = [n.name for n in tree]
    assert names == ["gripper", "wrist", "forearm", "shoulder", "base", "camera"]
    assert tree.roots() == [tree.lookup("base")]
    assert tree.path_to_root(tree.lookup("gripper")) == [
        tree.lookup(n) for n in ("base", "shoulder", "forearm", "wrist", "gripper")
    ]

    for handle, node in enumerate(tree):
        expected = compose_chain(tree.nodes[n].local for n in tree.path_to_root(handle))
        assert node.world.allclose(expected), node.name

    camera = tree.nodes[tree.lookup("camera")].world
    np.testing.assert_allclose(camera.translation, [1.1, 2.0, 0.5], atol=ABS_TOL)


def test_round_trip(examples_dir: Path):
    ftree = load(examples_dir / "robot_arm.yaml")
    back = to_file_tree(from_file_tree(ftree))

    original, restored = _tuples(ftree), _tuples(back)
    assert original.keys() == restored.keys()
    for name, (parent, t, r) in original.items():
        r_parent, r_t, r_r = restored[name]
        assert r_parent == parent
        np.testing.assert_allclose(r_t, t, atol=ABS_TOL)
        np.testing.assert_allclose(r_r, r, atol=ABS_TOL)


def test_round_trip_after_reparent(arm_lidar: FileTree):
    tree = from_file_tree(arm_lidar)
    tree.set_parent(tree.lookup("lidar"), None)

    back = to_file_tree(tree)

    assert back.version == 1
    assert [n.parent for n in back.nodes] == [None, None]


def test_duplicate_name():
    ftree = FileTree(version=1, nodes=[FileNode(name="x"), FileNode(name="y"), FileNode(name="x")])

    with pytest.raises(DuplicateNameError) as excinfo:
        from_file_tree(ftree)
    assert excinfo.value.name == "x"


def test_unknown_parent():
    ftree = FileTree(
        version=1,
        nodes=[FileNode(name="a"), FileNode(name="b", parent="ghost")],
    )

    with pytest.raises(UnknownParentError) as excinfo:
        from_file_tree(ftree)
    assert excinfo.value.name == "ghost"
    assert excinfo.value.child == "b"


def test_cyclic_file():
    ftree = FileTree(
        version=1,
        nodes=[
            FileNode(name="a", parent="b"),
            FileNode(name="b", parent="a"),
        ],
    )

    with pytest.raises(CycleError):
        from_file_tree(ftree)


def test_self_parent():
    ftree = FileTree(version=1, nodes=[FileNode(name="a", parent="a")])

    with pytest.raises(CycleError):
        from_file_tree(ftree)


def test_empty_tree():
    tree = from_file_tree(FileTree(version=1, nodes=[]))

    assert len(tree) == 0
    assert to_file_tree(tree).nodes == []


def test_load_wraps_decode_failure(tmp_path: Path):
    path = tmp_path / "broken.json"
    path.write_text("{")

    with pytest.raises(DecodeError):
        load_transform_tree(path)


def test_rotation_converted_intrinsic_xyz():
    r = (0.1, 0.2, 0.3)
    tree = from_file_tree(FileTree(version=1, nodes=[FileNode(name="a", r=r)]))

    expected = Isometry.from_euler((0.0, 0.0, 0.0), r)
    assert tree.nodes[0].local.allclose(expected)
    np.testing.assert_allclose(tree.nodes[0].world.euler(), r, atol=ABS_TOL)


def test_nested_rotations_compose():
    """A child offset along Y under a parent rolled 90 degrees ends up along Z."""
    ftree = FileTree(
        version=1,
        nodes=[
            FileNode(name="child", parent="root", t=(0.0, 1.0, 0.0)),
            FileNode(name="root", r=(math.pi / 2, 0.0, 0.0)),
        ],
    )

    tree = from_file_tree(ftree)

    np.testing.assert_allclose(
        tree.nodes[tree.lookup("child")].world.translation, [0.0, 0.0, 1.0], atol=ABS_TOL
    )
