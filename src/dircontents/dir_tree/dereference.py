"""One-level dereferencing of symlinks in directory-contents trees."""

import logging
from typing import Optional

from dircontents.dir_tree.dir_tree_node import DirTreeNode, copy_dir_tree
from dircontents.dir_tree.walk import split_segments, walk_dir_tree

logger = logging.getLogger(__name__)


def dereference_symlinks(tree: DirTreeNode) -> DirTreeNode:
    """De-reference one layer of symlinks.

    External symlinks become directories with the same children. Internal symlinks
    are looked up in ``tree`` and replaced by a copy of the node they point to; the
    copy keeps the paths of the original location. Links that cannot be resolved are
    kept as they are. Symlinks inside a substituted subtree are not resolved again.

    The input tree is not modified.

    Example:
        Given::

            tmp
            ├── A
            │   └── a
            └── C
                └── A -> ../A

        this function produces::

            tmp
            ├── A
            │   └── a
            └── C
                └── A
                    └── a
    """
    return _dereference(tree, tree)


def resolve_internal_symlink(node: DirTreeNode, tree: DirTreeNode) -> Optional[DirTreeNode]:
    """Find the node an internal symlink points to within ``tree``.

    ``resolved_path`` starts with the scan root's basename. Paths that do not are
    taken to be relative to the root's contents and get the basename prepended.

    Returns:
        The target node from ``tree``, or None if nothing lives at that path.
    """
    segments = split_segments(node.resolved_path)
    if not segments or segments[0] != tree.name:
        segments = [tree.name] + segments
    return walk_dir_tree("/".join(segments), tree)


def _dereference(top: DirTreeNode, node: DirTreeNode) -> DirTreeNode:
    if node.is_file:
        return DirTreeNode.file(node.fs_path, node.value)
    if node.is_internal:
        target = resolve_internal_symlink(node, top)
        if target is None:
            logger.debug("Leaving %s -> %s unresolved", node.fs_path, node.symlink_target)
            return DirTreeNode.internal_symlink(node.fs_path, node.symlink_target, node.resolved_path)
        return copy_dir_tree(target)
    return DirTreeNode.directory(node.fs_path, [_dereference(top, child) for child in node.children])
