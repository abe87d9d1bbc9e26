"""Recursive directory listings that survive symlink loops.

This package builds in-memory trees of directory hierarchies, telling apart symlinks
that point back into the scanned hierarchy from those that leave it, and provides
navigation, filtering, pruning and text drawing of the result.
"""

import logging
from importlib.metadata import PackageNotFoundError, version

from .dir_tree import (
    DirTree,
    DirTreeNode,
    build_dir_tree,
    dereference_symlinks,
    filter_dir_tree,
    filter_map_dir_tree,
    print_dir_tree,
    prune_dir_tree,
    render_dir_tree,
    walk_contents,
    walk_dir_tree,
)
from .types import NodeKind, SymlinkKind

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Expose the version for programmatic use
try:
    __version__ = version("dircontents")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "DirTree",
    "DirTreeNode",
    "NodeKind",
    "SymlinkKind",
    "build_dir_tree",
    "dereference_symlinks",
    "filter_dir_tree",
    "filter_map_dir_tree",
    "print_dir_tree",
    "prune_dir_tree",
    "render_dir_tree",
    "walk_contents",
    "walk_dir_tree",
]
