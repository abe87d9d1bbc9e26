"""Unit tests for building directory-contents trees."""

import os
from unittest.mock import patch

import pytest

from dircontents.dir_tree.builder import DirTreeBuilder, build_dir_tree
from dircontents.dir_tree.dir_tree_node import DirTreeNode
from dircontents.dir_tree.render import render_dir_tree
from dircontents.file_system.permission_action import PermissionAction
from dircontents.file_system.provider import LocalFileSystem
from dircontents.types import SymlinkKind


def child(node, name):
    return next(c for c in node.children if c.name == name)


def test_build_plain_tree(plain_tree):
    tree = build_dir_tree(plain_tree)
    assert tree is not None
    assert tree.fs_path == str(plain_tree)
    assert tree.is_dir
    assert [c.name for c in tree.children] == ["docs", "main.py", "src"]

    helpers = child(child(child(tree, "src"), "util"), "helpers.py")
    assert helpers.is_file
    assert helpers.fs_path == os.path.join(str(plain_tree), "src", "util", "helpers.py")
    assert helpers.value == helpers.fs_path


def test_build_plain_tree_drawing(plain_tree):
    assert render_dir_tree(build_dir_tree(plain_tree)) == "\n".join(
        [
            "project",
            "├── docs",
            "│   └── readme.md",
            "├── main.py",
            "└── src",
            "    ├── app.py",
            "    └── util",
            "        └── helpers.py",
        ]
    )


def test_build_is_stable(plain_tree):
    assert build_dir_tree(plain_tree).as_tuple() == build_dir_tree(plain_tree).as_tuple()


def test_build_symlink_tree(symlink_tree):
    root = str(symlink_tree)
    expected = DirTreeNode.directory(
        root,
        [
            DirTreeNode.directory(
                os.path.join(root, "A"),
                [
                    DirTreeNode.internal_symlink(os.path.join(root, "A", "A"), "../A", "test/A"),
                    DirTreeNode.internal_symlink(os.path.join(root, "A", "B"), "../B", "test/B"),
                    DirTreeNode.file(os.path.join(root, "A", "a"), os.path.join(root, "A", "a")),
                ],
            ),
            DirTreeNode.directory(
                os.path.join(root, "B"),
                [
                    DirTreeNode.internal_symlink(os.path.join(root, "B", "A"), "../A", "test/A"),
                    DirTreeNode.file(os.path.join(root, "B", "b"), os.path.join(root, "B", "b")),
                ],
            ),
            DirTreeNode.external_symlink(
                os.path.join(root, "C"),
                "../C",
                [DirTreeNode.file(os.path.join(root, "C", "c"), os.path.join(root, "C", "c"))],
            ),
        ],
    )
    assert build_dir_tree(symlink_tree).as_tuple() == expected.as_tuple()


def test_symlink_to_ancestor_is_internal(tmp_path, make_symlink):
    root = tmp_path / "root"
    (root / "sub").mkdir(parents=True)
    make_symlink("..", root / "sub" / "up")
    make_symlink("../..", root / "sub" / "top")

    tree = build_dir_tree(root)

    sub = child(tree, "sub")
    up = child(sub, "up")
    assert up.symlink_kind == SymlinkKind.INTERNAL
    assert up.resolved_path == "root"
    assert up.children == ()
    # ../.. leaves the scanned hierarchy and is listed, but its copy of root is not re-entered
    top = child(sub, "top")
    assert top.symlink_kind == SymlinkKind.EXTERNAL
    nested_root = child(top, "root")
    assert nested_root.is_dir
    nested_up = child(child(nested_root, "sub"), "up")
    assert nested_up.is_internal


def test_self_loop_terminates(tmp_path, make_symlink):
    root = tmp_path / "root"
    root.mkdir()
    make_symlink(".", root / "self")

    tree = build_dir_tree(root)

    loop = child(tree, "self")
    assert loop.is_internal
    assert loop.symlink_target == "."
    assert loop.resolved_path == "root"


def test_symlink_to_sibling_file_is_internal(tmp_path, make_symlink):
    root = tmp_path / "root"
    (root / "d").mkdir(parents=True)
    (root / "d" / "f").write_text("data")
    make_symlink("f", root / "d" / "g")

    g = child(child(build_dir_tree(root), "d"), "g")

    assert g.is_internal
    assert g.resolved_path == "root/d/f"


def test_symlink_to_unvisited_file_is_external_leaf(tmp_path, make_symlink):
    root = tmp_path / "root"
    (root / "d").mkdir(parents=True)
    (root / "d" / "f").write_text("data")
    make_symlink("d/f", root / "link")

    link = child(build_dir_tree(root), "link")

    assert link.is_external
    assert link.symlink_target == "d/f"
    assert link.children == ()


def test_internal_symlink_inside_external_target(tmp_path, make_symlink):
    root = tmp_path / "test"
    root.mkdir()
    (tmp_path / "C").mkdir()
    (tmp_path / "C" / "c").write_text("c")
    make_symlink("../C", root / "C")
    make_symlink(".", tmp_path / "C" / "again")

    external = child(build_dir_tree(root), "C")

    again = child(external, "again")
    assert again.is_internal
    assert again.resolved_path == "test/C"


def test_broken_symlink_is_omitted(tmp_path, make_symlink):
    root = tmp_path / "root"
    root.mkdir()
    (root / "kept").write_text("x")
    make_symlink("nowhere", root / "dangling")

    tree = build_dir_tree(root)

    assert [c.name for c in tree.children] == ["kept"]


def test_missing_root_returns_none(tmp_path):
    assert build_dir_tree(tmp_path / "does-not-exist") is None


def test_file_root(tmp_path):
    path = tmp_path / "single.txt"
    path.write_text("x")

    tree = build_dir_tree(path)

    assert tree.is_file
    assert tree.value == str(path)


def test_trailing_separator_is_stripped(plain_tree):
    tree = build_dir_tree(str(plain_tree) + os.sep)
    assert tree.fs_path == str(plain_tree)
    assert tree.name == "project"


def test_vanished_entry_is_skipped(plain_tree):
    vanished = os.path.join(str(plain_tree), "main.py")
    real_exists = LocalFileSystem.exists

    def exists(self, path):
        return False if path == vanished else real_exists(self, path)

    with patch.object(LocalFileSystem, "exists", exists):
        tree = build_dir_tree(plain_tree)

    assert [c.name for c in tree.children] == ["docs", "src"]


def test_directory_vanishing_while_listed_is_skipped(plain_tree):
    docs = os.path.join(str(plain_tree), "docs")
    real_list = LocalFileSystem.list_directory

    def list_directory(self, path):
        if path == docs:
            raise FileNotFoundError(path)
        return real_list(self, path)

    with patch.object(LocalFileSystem, "list_directory", list_directory):
        tree = build_dir_tree(plain_tree)

    assert [c.name for c in tree.children] == ["main.py", "src"]


def test_permission_error_propagates_by_default(plain_tree):
    with patch.object(LocalFileSystem, "list_directory", side_effect=PermissionError("denied")):
        with pytest.raises(PermissionError):
            build_dir_tree(plain_tree)


def test_permission_error_ignored(plain_tree, caplog):
    src = os.path.join(str(plain_tree), "src")
    real_list = LocalFileSystem.list_directory

    def list_directory(self, path):
        if path == src:
            raise PermissionError("denied")
        return real_list(self, path)

    with patch.object(LocalFileSystem, "list_directory", list_directory):
        tree = DirTreeBuilder(permission_action=PermissionAction.IGNORE).build(plain_tree)

    src_node = child(tree, "src")
    assert src_node.is_dir
    assert src_node.children == ()
    assert "Cannot list" in caplog.text


def test_other_os_errors_propagate(plain_tree):
    with patch.object(LocalFileSystem, "canonicalize", side_effect=OSError("I/O error")):
        with pytest.raises(OSError, match="I/O error"):
            build_dir_tree(plain_tree)


def test_custom_provider_is_used(plain_tree):
    provider = LocalFileSystem()
    with patch.object(provider, "list_directory", wraps=provider.list_directory) as listing:
        DirTreeBuilder(provider).build(plain_tree)
    listed = {call.args[0] for call in listing.call_args_list}
    assert str(plain_tree) in listed


def test_stat_permission_error_propagates(plain_tree):
    denied = os.path.join(str(plain_tree), "main.py")
    real_stat = os.stat

    def guarded_stat(path, *args, **kwargs):
        if os.fspath(path) == denied:
            raise PermissionError(13, "Permission denied", denied)
        return real_stat(path, *args, **kwargs)

    with patch("os.stat", guarded_stat):
        with pytest.raises(PermissionError):
            build_dir_tree(plain_tree)


def test_symlink_loop_entry_is_skipped(tmp_path, make_symlink):
    root = tmp_path / "root"
    root.mkdir()
    (root / "kept").write_text("x")
    make_symlink("spin", root / "spin")

    tree = build_dir_tree(root)

    assert [c.name for c in tree.children] == ["kept"]
