"""Lazily built directory-contents tree with counting, iteration and drawing helpers.

This module provides the DirTree class, an object wrapper around the free functions
of this package for callers that want to build once and query repeatedly.
"""

import os
from typing import Iterator, Optional, Tuple

from dircontents.dir_tree.builder import build_dir_tree
from dircontents.dir_tree.dir_tree_node import DirTreeNode
from dircontents.dir_tree.render import FileLabel, stream_dir_tree
from dircontents.dir_tree.walk import walk_contents, walk_dir_tree
from dircontents.file_system.permission_action import PermissionAction
from dircontents.file_system.provider import FileSystemProvider
from dircontents.types import PathType, SymlinkKind


class DirTree:
    """A directory-contents tree rooted at a path, built on first access.

    The tree is built lazily on first access and can be refreshed to reflect filesystem
    changes. A root that does not exist is not an error: ``get_tree`` then returns None
    and every count is zero.

    Symbolic Link Behavior:
        Symlinks whose target was already visited on the current branch are kept as
        internal symlinks and never followed. All other symlinks are followed and their
        contents listed as external symlinks. Symlink counts include both kinds.

    Permission Handling:
        Directories that cannot be listed are handled in two ways:
        - RAISE (default): The PermissionError propagates out of the build
        - IGNORE: The directory is kept without children

    Attributes:
        root_path (str): The path that is scanned.
        provider (Optional[FileSystemProvider]): Filesystem queries, local filesystem if None.
        permission_action (PermissionAction): How to handle permission errors.

    Example:
        >>> tree = DirTree("test")  # doctest: +SKIP
        >>> print(tree.get_tree_representation())  # doctest: +SKIP
        test
        ├── A
        │   ├── A -> ../A
        │   ├── B -> ../B
        │   └── a
        ├── B
        │   ├── A -> ../A
        │   └── b
        └── C -> ../C
            └── c
    """

    def __init__(
        self,
        root_path: PathType,
        provider: Optional[FileSystemProvider] = None,
        permission_action: PermissionAction = PermissionAction.RAISE,
    ) -> None:
        self.root_path = os.fspath(root_path)
        self.provider = provider
        self.permission_action = permission_action
        self._tree: Optional[DirTreeNode] = None
        self._built = False
        self._file_count: int = 0
        self._directory_count: int = 0
        self._symlink_count: int = 0

    def get_tree(self) -> Optional[DirTreeNode]:
        """Get the root node, building the tree if it hasn't been built yet.

        Returns:
            The root node, or None if the root path does not exist.

        Raises:
            PermissionError: If a directory cannot be listed and permission_action is RAISE.
        """
        if not self._built:
            self._build_tree()
        return self._tree

    def _build_tree(self) -> None:
        self._tree = build_dir_tree(self.root_path, self.provider, self.permission_action)
        self._built = True
        self._count_nodes()

    def _count_nodes(self) -> None:
        """Count files, directories (excluding the root) and symlinks of the current tree."""
        self._file_count = 0
        self._directory_count = 0
        self._symlink_count = 0
        if self._tree is None:
            return
        for node in self._tree.descendants:
            if node.is_file:
                self._file_count += 1
            elif node.is_dir:
                self._directory_count += 1
            else:
                self._symlink_count += 1

    def get_file_count(self) -> int:
        """Get the number of files in the tree, including files reached through external symlinks."""
        self.get_tree()
        return self._file_count

    def get_directory_count(self) -> int:
        """Get the number of directories in the tree, excluding the root."""
        self.get_tree()
        return self._directory_count

    def get_symlink_count(self) -> int:
        """Get the number of internal and external symlinks in the tree."""
        self.get_tree()
        return self._symlink_count

    def iterate_files(self) -> Iterator[Tuple[str, str]]:
        """Iterate over all files in the tree in child order.

        Yields:
            Pairs of (fs_path, relative_path), the relative path being relative to the root.

        Example:
            >>> tree = DirTree("src")  # doctest: +SKIP
            >>> for fs_path, rel_path in tree.iterate_files():  # doctest: +SKIP
            ...     print(rel_path)
            main.py
            utils/helpers.py
        """
        tree = self.get_tree()
        if tree is None:
            return
        for node in tree.descendants:
            if node.is_file:
                yield node.fs_path, self._relative(node)

    def iterate_symlinks(self) -> Iterator[Tuple[str, str, str, SymlinkKind]]:
        """Iterate over all symlinks in the tree.

        Yields:
            Tuples of (fs_path, relative_path, target, kind) for each symlink.
        """
        tree = self.get_tree()
        if tree is None:
            return
        for node in tree.descendants:
            if node.is_symlink:
                yield node.fs_path, self._relative(node), node.symlink_target, node.symlink_kind

    def _relative(self, node: DirTreeNode) -> str:
        return "/".join(ancestor.name for ancestor in node.path[1:])

    def walk(self, path: PathType) -> Optional[DirTreeNode]:
        """Walk ``path``, whose first segment is the root's own name. See walk_dir_tree."""
        tree = self.get_tree()
        return walk_dir_tree(path, tree) if tree is not None else None

    def walk_contents(self, path: PathType) -> Optional[DirTreeNode]:
        """Walk ``path`` relative to the root's contents. See walk_contents."""
        tree = self.get_tree()
        return walk_contents(path, tree) if tree is not None else None

    def stream_tree_representation(self, label_file: Optional[FileLabel] = None) -> Iterator[str]:
        """Generate the tree drawing one line at a time. Yields nothing for a missing root."""
        tree = self.get_tree()
        if tree is None:
            return
        yield from stream_dir_tree(tree, label_file)

    def get_tree_representation(self, label_file: Optional[FileLabel] = None) -> str:
        """Get the complete tree drawing as a string."""
        return "\n".join(self.stream_tree_representation(label_file))

    def refresh(self) -> None:
        """Rebuild the tree to reflect the current filesystem state."""
        self._tree = None
        self._built = False
        self._build_tree()
