"""Navigation of directory-contents trees by relative path."""

import os
import re
from typing import List, Optional, Sequence

from dircontents.dir_tree.dir_tree_node import DirTreeNode
from dircontents.types import PathType

_SEPARATORS = re.compile(r"[/\\]" if os.sep == "\\" else r"/")


def split_segments(path: PathType) -> List[str]:
    """Split a relative path into its non-empty segments.

    ``.`` and ``..`` are returned as ordinary segments; they are not interpreted.

    Example:
        >>> split_segments("src/System/")
        ['src', 'System']
        >>> split_segments("a/../b")
        ['a', '..', 'b']
    """
    return [segment for segment in _SEPARATORS.split(os.fspath(path)) if segment]


def walk_dir_tree(path: PathType, tree: DirTreeNode) -> Optional[DirTreeNode]:
    """Walk ``path`` starting at ``tree`` itself and return the node at the end of the route.

    The first segment names ``tree``'s own entry, so for a tree built from ``src``
    the path ``"src/System"`` yields the ``System`` node. Directories and external
    symlinks route through to their children, taking the first child in order for
    which the rest of the walk succeeds. Files and internal symlinks only match as
    the final segment; internal symlinks are never followed.

    This function does not dereference symlinks, nor does it handle the special
    paths ``.`` and ``..``.

    Args:
        path: Slash-separated path relative to the parent of ``tree``.
        tree: Node to start from.

    Returns:
        The matching node from ``tree`` (not a copy), or None if no route matches.

    Example:
        >>> tree = DirTreeNode.directory("src", [
        ...     DirTreeNode.directory("src/System", [DirTreeNode.file("src/System/Contents.py", None)])
        ... ])
        >>> walk_dir_tree("src/System", tree).name
        'System'
        >>> walk_dir_tree("src/Missing", tree) is None
        True
    """
    return _walk(split_segments(path), tree)


def walk_contents(path: PathType, tree: DirTreeNode) -> Optional[DirTreeNode]:
    """Like walk_dir_tree but skips the outermost containing directory.

    Useful for walking paths relative to the root directory that was scanned:
    for a tree built from ``src``, ``walk_contents("System", tree)`` yields the
    ``System`` node. An empty path matches the first entry of the contents. Files and
    internal symlinks have no contents, so nothing matches.
    """
    if not tree.is_container:
        return None
    return _first_match(split_segments(path), tree.children)


def _walk(segments: Sequence[str], node: DirTreeNode) -> Optional[DirTreeNode]:
    if not segments:
        return node
    head, rest = segments[0], segments[1:]
    if node.name != head:
        return None
    if not rest:
        return node
    if node.is_container:
        return _first_match(rest, node.children)
    return None


def _first_match(segments: Sequence[str], candidates: Sequence[DirTreeNode]) -> Optional[DirTreeNode]:
    for candidate in candidates:
        found = _walk(segments, candidate)
        if found is not None:
            return found
    return None
