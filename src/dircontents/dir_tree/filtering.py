"""Mapping, folding, filtering and pruning of directory-contents trees.

Filtering works on file values only. Directories and external symlinks always survive
filtering, even when they lose every child; ``prune_dir_tree`` removes them
afterwards if that is wanted. An internal symlink survives filtering only when the
node it points to, looked up in the unfiltered tree, would survive the same filter.
The symlink itself is kept as a symlink; it is never replaced by its target.

Because a filter can drop the root itself (a file root whose value is rejected), the
filtering functions return ``Optional[DirTreeNode]``.
"""

import logging
from typing import Any, Callable, Iterator, Optional, Set, TypeVar

from dircontents.dir_tree.dereference import resolve_internal_symlink
from dircontents.dir_tree.dir_tree_node import DirTreeNode

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Leaf marker for values removed by a filter, distinct from a legitimate None value
_ABSENT = object()


def map_dir_tree(tree: DirTreeNode, f: Callable[[Any], Any]) -> DirTreeNode:
    """Apply ``f`` to every file value, keeping the structure.

    Files are visited in child order, depth first, so ``f`` may have side effects
    that depend on that order.

    Example:
        >>> tree = DirTreeNode.directory("d", [DirTreeNode.file("d/f", "d/f")])
        >>> map_dir_tree(tree, len).children[0].value
        3
    """
    if tree.is_file:
        return DirTreeNode.file(tree.fs_path, f(tree.value))
    if tree.is_internal:
        return DirTreeNode.internal_symlink(tree.fs_path, tree.symlink_target, tree.resolved_path)
    children = [map_dir_tree(child, f) for child in tree.children]
    if tree.is_external:
        return DirTreeNode.external_symlink(tree.fs_path, tree.symlink_target, children)
    return DirTreeNode.directory(tree.fs_path, children)


def iter_values(tree: DirTreeNode) -> Iterator[Any]:
    """Yield file values in child order, depth first. Internal symlinks contribute nothing."""
    if tree.is_file:
        yield tree.value
        return
    for child in tree.children:
        yield from iter_values(child)


def fold_dir_tree(tree: DirTreeNode, f: Callable[[T, Any], T], initial: T) -> T:
    """Left fold of ``f`` over the file values of ``tree``."""
    result = initial
    for value in iter_values(tree):
        result = f(result, value)
    return result


def filter_map_dir_tree(tree: DirTreeNode, f: Callable[[Any], Optional[Any]]) -> Optional[DirTreeNode]:
    """Map ``f`` over file values, dropping files for which it returns None.

    ``f`` runs exactly once per file, in child order. If it raises, the exception
    propagates and no tree is produced.

    Args:
        tree: Tree to filter. It is not modified.
        f: Function from a file value to a new value, or None to drop the file.

    Returns:
        The filtered tree, or None if the root itself was dropped.

    Example:
        >>> tree = DirTreeNode.directory("d", [
        ...     DirTreeNode.file("d/a.py", "d/a.py"),
        ...     DirTreeNode.file("d/b.txt", "d/b.txt"),
        ... ])
        >>> kept = filter_map_dir_tree(tree, lambda v: v.upper() if v.endswith(".py") else None)
        >>> [child.value for child in kept.children]
        ['D/A.PY']
    """
    return _wither(map_dir_tree(tree, lambda value: _absent_if_none(f(value))))


def filter_dir_tree(tree: DirTreeNode, predicate: Callable[[Any], bool]) -> Optional[DirTreeNode]:
    """Keep only the files whose value satisfies ``predicate``. See filter_map_dir_tree."""
    return _wither(map_dir_tree(tree, lambda value: value if predicate(value) else _ABSENT))


def cat_optional_dir_tree(tree: DirTreeNode) -> Optional[DirTreeNode]:
    """Drop files whose value is None, keeping the rest unchanged. See filter_map_dir_tree."""
    return _wither(map_dir_tree(tree, _absent_if_none))


def prune_dir_tree(tree: DirTreeNode) -> Optional[DirTreeNode]:
    """Remove directories and external symlinks left without children.

    Children are pruned first, so a directory containing only empty directories is
    removed as well. Files and internal symlinks are never removed.

    Returns:
        The pruned tree, or None if the root itself was empty.

    Example:
        >>> tree = DirTreeNode.directory("d", [
        ...     DirTreeNode.directory("d/empty"),
        ...     DirTreeNode.file("d/f", "d/f"),
        ... ])
        >>> [child.name for child in prune_dir_tree(tree).children]
        ['f']
        >>> prune_dir_tree(DirTreeNode.directory("d")) is None
        True
    """
    if tree.is_file:
        return DirTreeNode.file(tree.fs_path, tree.value)
    if tree.is_internal:
        return DirTreeNode.internal_symlink(tree.fs_path, tree.symlink_target, tree.resolved_path)
    children = [pruned for pruned in (prune_dir_tree(child) for child in tree.children) if pruned is not None]
    if not children:
        return None
    if tree.is_external:
        return DirTreeNode.external_symlink(tree.fs_path, tree.symlink_target, children)
    return DirTreeNode.directory(tree.fs_path, children)


def _absent_if_none(value: Any) -> Any:
    return _ABSENT if value is None else value


def _wither(marked: DirTreeNode) -> Optional[DirTreeNode]:
    return _filter_node(marked, marked)


def _filter_node(top: DirTreeNode, node: DirTreeNode) -> Optional[DirTreeNode]:
    if node.is_file:
        if node.value is _ABSENT:
            return None
        return DirTreeNode.file(node.fs_path, node.value)
    if node.is_internal:
        if not _target_survives(top, node, set()):
            logger.debug("Dropping %s -> %s: target does not survive filtering", node.fs_path, node.symlink_target)
            return None
        return DirTreeNode.internal_symlink(node.fs_path, node.symlink_target, node.resolved_path)
    children = [kept for kept in (_filter_node(top, child) for child in node.children) if kept is not None]
    if node.is_external:
        return DirTreeNode.external_symlink(node.fs_path, node.symlink_target, children)
    return DirTreeNode.directory(node.fs_path, children)


def _target_survives(top: DirTreeNode, symlink: DirTreeNode, visiting: Set[int]) -> bool:
    """Whether the target of an internal symlink would remain after filtering ``top``."""
    if id(symlink) in visiting:
        return False
    visiting.add(id(symlink))
    target = resolve_internal_symlink(symlink, top)
    if target is None:
        return False
    if target.is_file:
        return target.value is not _ABSENT
    if target.is_internal:
        return _target_survives(top, target, visiting)
    return True
