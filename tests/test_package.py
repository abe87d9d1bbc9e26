"""Tests for the package-level API."""

import logging

import dircontents
from dircontents import DirTreeNode, NodeKind, SymlinkKind, build_dir_tree, render_dir_tree


def test_version_is_exposed():
    assert isinstance(dircontents.__version__, str)


def test_library_logger_has_null_handler():
    handlers = logging.getLogger("dircontents").handlers
    assert any(isinstance(handler, logging.NullHandler) for handler in handlers)


def test_public_api(symlink_tree, symlink_tree_drawing):
    tree = build_dir_tree(symlink_tree)
    assert isinstance(tree, DirTreeNode)
    assert tree.kind == NodeKind.DIRECTORY
    assert tree.children[-1].symlink_kind == SymlinkKind.EXTERNAL
    assert render_dir_tree(tree) == symlink_tree_drawing


def test_enum_values():
    assert NodeKind("symlink") is NodeKind.SYMLINK
    assert SymlinkKind.INTERNAL == "internal"
    assert SymlinkKind.EXTERNAL == "external"
