"""Recursive construction of directory-contents trees with symlink cycle detection.

Modeled after the linux ``tree`` command invoked with ``-l`` (follow symlinks), the
builder lists a directory hierarchy while refusing to descend into a symlink whose
target has already been visited on the current branch.

For example, given this directory and symlink structure (as shown by ``tree -l``)::

    test
    ├── A
    │   ├── a
    │   ├── A -> ../A  [recursive, not followed]
    │   └── B -> ../B
    │       ├── A -> ../A  [recursive, not followed]
    │       └── b
    ├── B
    │   ├── A -> ../A  [recursive, not followed]
    │   └── b
    └── C -> ../C
        └── c

the builder produces the following (as rendered by ``render_dir_tree``)::

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

``A/B`` is not expanded here, unlike ``tree -l``: its target ``test/B`` is a sibling
of ``A`` and siblings are registered as visited before any of them is descended into.
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, List, Optional

from dircontents.dir_tree.dir_tree_node import DirTreeNode
from dircontents.file_system.permission_action import PermissionAction
from dircontents.file_system.provider import FileSystemProvider, LocalFileSystem
from dircontents.types import PathType

logger = logging.getLogger(__name__)

# canonical path -> path used to reach it
SeenMap = Dict[str, str]


@dataclass(frozen=True)
class _ScanRoot:
    path: str
    canonical: str
    basename: str


class DirTreeBuilder:
    """Builds DirTreeNode trees from the filesystem seen through a provider.

    Cycle detection is path based. While descending, the builder carries a map from
    canonical path to the path used to reach it. Before recursing into a directory's
    entries, the canonical forms of all of its non-symlink entries and of the directory
    itself are added to that map. A symlink whose canonical target is already in the map
    is recorded as an internal symlink and not followed; any other symlink is listed
    like a directory and recorded as external.

    Symlink entries are deliberately left out of the map: canonicalizing them would
    resolve through the link and mark its target as visited before it is ever reached.

    Attributes:
        provider (FileSystemProvider): Source of all filesystem queries.
        permission_action (PermissionAction): What to do when a directory cannot be listed.

    Example:
        >>> builder = DirTreeBuilder()  # doctest: +SKIP
        >>> tree = builder.build("test")  # doctest: +SKIP
        >>> [child.name for child in tree.children]  # doctest: +SKIP
        ['A', 'B', 'C']
    """

    def __init__(
        self,
        provider: Optional[FileSystemProvider] = None,
        permission_action: PermissionAction = PermissionAction.RAISE,
    ) -> None:
        self.provider = provider if provider is not None else LocalFileSystem()
        self.permission_action = permission_action

    def build(self, root: PathType) -> Optional[DirTreeNode]:
        """Recursively list the contents of ``root``.

        Args:
            root: Path to scan. Usually a directory; a file or symlink root is allowed
                and produces a single-node or symlink tree.

        Returns:
            The root node, or None if ``root`` does not exist when it is inspected.

        Raises:
            PermissionError: If a directory cannot be listed and permission_action is RAISE.
            OSError: Any other filesystem failure reported by the provider.
        """
        root_path = _strip_trailing_separators(os.fspath(root))
        if not self.provider.exists(root_path):
            logger.debug("Scan root %s does not exist", root_path)
            return None
        scan_root = _ScanRoot(
            path=root_path,
            canonical=self.provider.canonicalize(root_path),
            basename=os.path.basename(root_path),
        )
        return self._create_node(root_path, {}, scan_root)

    def _create_node(self, path: str, seen: SeenMap, scan_root: _ScanRoot) -> Optional[DirTreeNode]:
        """Recursively create the node for ``path`` and everything below it."""
        try:
            if not self.provider.exists(path):
                logger.debug("Skipping %s: path does not exist", path)
                return None
            canon = self.provider.canonicalize(path)
            is_dir = self.provider.is_directory(path)

            if self.provider.is_symbolic_link(path):
                target = self.provider.read_symbolic_link_target(path)
                if canon in seen:
                    resolved = self._resolve_internal(path, target, canon, seen, scan_root)
                    logger.debug("Symlink %s -> %s re-enters %s, not following", path, target, resolved)
                    return DirTreeNode.internal_symlink(path, target, resolved)
                children = self._create_children(path, canon, seen, scan_root) if is_dir else []
                return DirTreeNode.external_symlink(path, target, children)

            if is_dir:
                return DirTreeNode.directory(path, self._create_children(path, canon, seen, scan_root))

            return DirTreeNode.file(path, path)
        except FileNotFoundError:
            # Listed by the parent but gone by the time it was inspected
            logger.debug("Skipping %s: path vanished during traversal", path)
            return None

    def _create_children(self, path: str, canon: str, seen: SeenMap, scan_root: _ScanRoot) -> List[DirTreeNode]:
        try:
            names = self.provider.list_directory(path)
        except PermissionError as e:
            if self.permission_action == PermissionAction.RAISE:
                raise
            logger.warning("Cannot list %s, keeping it without contents: %s", path, e)
            return []

        child_paths = [os.path.join(path, name) for name in names]
        entries: SeenMap = {}
        for child_path in child_paths:
            if not self.provider.is_symbolic_link(child_path):
                entries[self.provider.canonicalize(child_path)] = child_path

        # Entries already on the branch keep the path they were first reached by
        child_seen: SeenMap = {**entries, **seen}
        child_seen[canon] = path

        children = []
        for child_path in child_paths:
            child = self._create_node(child_path, child_seen, scan_root)
            if child is not None:
                children.append(child)
        return children

    def _resolve_internal(self, path: str, target: str, canon: str, seen: SeenMap, scan_root: _ScanRoot) -> str:
        """Express the target of an internal symlink relative to the scan root's parent."""
        canon_target = self.provider.canonicalize(os.path.join(os.path.dirname(path), target))
        relative = _relative_to(scan_root.canonical, canon_target)
        if relative is None:
            # Reached through an external symlink, so only the traversal path locates it
            original = seen.get(canon_target, seen[canon])
            relative = os.path.relpath(original, scan_root.path)
            if relative == os.curdir:
                relative = ""
        parts = [scan_root.basename] + [part for part in relative.split(os.sep) if part]
        return "/".join(parts)


def build_dir_tree(
    root: PathType,
    provider: Optional[FileSystemProvider] = None,
    permission_action: PermissionAction = PermissionAction.RAISE,
) -> Optional[DirTreeNode]:
    """Recursively list the contents of ``root`` as a DirTreeNode tree.

    File leaves carry their own path as value. See DirTreeBuilder for the cycle
    detection rules.

    Returns:
        The root node, or None if ``root`` does not exist.
    """
    return DirTreeBuilder(provider, permission_action).build(root)


def _strip_trailing_separators(path: str) -> str:
    stripped = path.rstrip("/" + os.sep)
    return stripped if stripped else path


def _relative_to(canonical_root: str, canonical_path: str) -> Optional[str]:
    if canonical_path == canonical_root:
        return ""
    prefix = canonical_root.rstrip(os.sep) + os.sep
    if canonical_path.startswith(prefix):
        return canonical_path[len(prefix):]
    return None
