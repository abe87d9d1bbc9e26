"""Directory-contents trees with symlink cycle detection.

This package provides the tree model and the operations on it: building a tree from
the filesystem, dereferencing symlinks, walking paths, filtering, pruning and drawing.
"""

from .builder import DirTreeBuilder, build_dir_tree
from .dereference import dereference_symlinks, resolve_internal_symlink
from .dir_tree import DirTree
from .dir_tree_node import DirTreeNode, copy_dir_tree
from .filtering import (
    cat_optional_dir_tree,
    filter_dir_tree,
    filter_map_dir_tree,
    fold_dir_tree,
    iter_values,
    map_dir_tree,
    prune_dir_tree,
)
from .render import label_dir_tree, print_dir_tree, render_dir_tree, stream_dir_tree
from .walk import walk_contents, walk_dir_tree

__all__ = [
    "DirTree",
    "DirTreeBuilder",
    "DirTreeNode",
    "build_dir_tree",
    "cat_optional_dir_tree",
    "copy_dir_tree",
    "dereference_symlinks",
    "filter_dir_tree",
    "filter_map_dir_tree",
    "fold_dir_tree",
    "iter_values",
    "label_dir_tree",
    "map_dir_tree",
    "print_dir_tree",
    "prune_dir_tree",
    "render_dir_tree",
    "resolve_internal_symlink",
    "stream_dir_tree",
    "walk_contents",
    "walk_dir_tree",
]
