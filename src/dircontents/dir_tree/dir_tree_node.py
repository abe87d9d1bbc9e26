"""Node representation for directory-contents trees."""

import os
from typing import Any, Iterable, Optional, Tuple

from anytree import Node

from dircontents.exceptions import MalformedTreeError
from dircontents.types import NodeKind, PathType, SymlinkKind


class DirTreeNode(Node):  # type: ignore
    """Node class representing one entry of a scanned directory hierarchy.

    Extends anytree.Node. Every node is exactly one of:

    - a directory, owning an ordered list of children;
    - a file, carrying an arbitrary leaf ``value`` (the builder stores the path itself);
    - a symlink, either ``INTERNAL`` (its target was already visited, so only the
      resolved location is recorded and it never has children) or ``EXTERNAL`` (its
      target was listed like a directory and the contents are its children).

    anytree already uses ``path`` for the tuple of nodes from the root, so the
    filesystem path used to reach the entry lives in ``fs_path``. ``name`` is its
    basename and is what path walking and rendering match against.

    Trees are treated as immutable values. The transform functions in this package
    build new nodes rather than re-parenting existing ones.

    Attributes:
        name (str): Basename of ``fs_path``.
        fs_path (str): Path used to reach the entry during traversal (not necessarily canonical).
        kind (NodeKind): Which of the three node shapes this is.
        value (Any): Leaf payload of a file node, None otherwise.
        symlink_kind (Optional[SymlinkKind]): Classification of a symlink node.
        symlink_target (Optional[str]): Literal link text, e.g. ``"../B"``.
        resolved_path (Optional[str]): For internal symlinks, the target location
            relative to the scan root's parent (``"root/A/a"``).

    Example:
        >>> root = DirTreeNode.directory("test", [DirTreeNode.file("test/a", "test/a")])
        >>> root.name
        'test'
        >>> [child.name for child in root.children]
        ['a']
        >>> root.children[0].is_file
        True
    """

    def __init__(
        self,
        fs_path: PathType,
        kind: NodeKind,
        parent: Optional["DirTreeNode"] = None,
        children: Optional[Iterable["DirTreeNode"]] = None,
        value: Any = None,
        symlink_kind: Optional[SymlinkKind] = None,
        symlink_target: Optional[str] = None,
        resolved_path: Optional[str] = None,
    ) -> None:
        """Initialize a DirTreeNode.

        Prefer the named constructors (``directory``, ``file``, ``internal_symlink``,
        ``external_symlink``), which only accept the fields relevant to each kind.

        Raises:
            MalformedTreeError: If the fields do not fit ``kind``.
        """
        fs_path = os.fspath(fs_path)
        self.fs_path = fs_path
        self.kind = kind
        self.value = value
        self.symlink_kind = symlink_kind
        self.symlink_target = symlink_target
        self.resolved_path = resolved_path
        self._validate()
        super().__init__(os.path.basename(fs_path), parent, list(children) if children else None)

    @classmethod
    def directory(cls, fs_path: PathType, children: Iterable["DirTreeNode"] = ()) -> "DirTreeNode":
        return cls(fs_path, NodeKind.DIRECTORY, children=children)

    @classmethod
    def file(cls, fs_path: PathType, value: Any) -> "DirTreeNode":
        return cls(fs_path, NodeKind.FILE, value=value)

    @classmethod
    def internal_symlink(cls, fs_path: PathType, target: str, resolved_path: str) -> "DirTreeNode":
        return cls(
            fs_path,
            NodeKind.SYMLINK,
            symlink_kind=SymlinkKind.INTERNAL,
            symlink_target=target,
            resolved_path=resolved_path,
        )

    @classmethod
    def external_symlink(
        cls, fs_path: PathType, target: str, children: Iterable["DirTreeNode"] = ()
    ) -> "DirTreeNode":
        return cls(
            fs_path,
            NodeKind.SYMLINK,
            children=children,
            symlink_kind=SymlinkKind.EXTERNAL,
            symlink_target=target,
        )

    def _validate(self) -> None:
        if self.kind == NodeKind.SYMLINK:
            if self.symlink_kind is None or self.symlink_target is None:
                raise MalformedTreeError(self.fs_path, "symlinks need a kind and a target")
            if self.symlink_kind == SymlinkKind.INTERNAL and self.resolved_path is None:
                raise MalformedTreeError(self.fs_path, "internal symlinks need a resolved path")
        elif self.symlink_kind is not None or self.symlink_target is not None or self.resolved_path is not None:
            raise MalformedTreeError(self.fs_path, f"{self.kind.value} nodes carry no symlink data")

    def _pre_attach(self, parent: Node) -> None:
        # anytree hook, runs for both `child.parent = p` and `p.children = [...]`
        if isinstance(parent, DirTreeNode) and not parent.is_container:
            raise MalformedTreeError(parent.fs_path, f"{parent.name} is a leaf and cannot have children")

    @property
    def is_dir(self) -> bool:
        return self.kind == NodeKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.kind == NodeKind.FILE

    @property
    def is_symlink(self) -> bool:
        return self.kind == NodeKind.SYMLINK

    @property
    def is_internal(self) -> bool:
        return self.symlink_kind == SymlinkKind.INTERNAL

    @property
    def is_external(self) -> bool:
        return self.symlink_kind == SymlinkKind.EXTERNAL

    @property
    def is_container(self) -> bool:
        """True for nodes whose children are part of the tree (directories and external symlinks)."""
        return self.is_dir or self.is_external

    def as_tuple(self) -> Tuple[Any, ...]:
        """Return a nested tuple describing this subtree.

        Two trees are structurally equal when their snapshots compare equal. anytree
        nodes compare by identity, so tests and callers use this instead of ``==``.

        Example:
            >>> DirTreeNode.directory("d", [DirTreeNode.file("d/f", 1)]).as_tuple()
            ('directory', 'd', None, (('file', 'd/f', 1, ()),))
        """
        if self.is_file:
            payload: Any = self.value
        elif self.is_internal:
            payload = (self.symlink_target, self.resolved_path)
        else:
            payload = self.symlink_target
        return (self.kind.value, self.fs_path, payload, tuple(child.as_tuple() for child in self.children))

    def __repr__(self) -> str:
        if self.is_symlink:
            return f"DirTreeNode({self.symlink_kind.value} symlink {self.fs_path!r} -> {self.symlink_target!r})"
        return f"DirTreeNode({self.kind.value} {self.fs_path!r})"


def copy_dir_tree(node: DirTreeNode) -> DirTreeNode:
    """Make an independent structural copy of ``node`` and everything below it."""
    if node.is_file:
        return DirTreeNode.file(node.fs_path, node.value)
    if node.is_internal:
        return DirTreeNode.internal_symlink(node.fs_path, node.symlink_target, node.resolved_path)
    children = [copy_dir_tree(child) for child in node.children]
    if node.is_external:
        return DirTreeNode.external_symlink(node.fs_path, node.symlink_target, children)
    return DirTreeNode.directory(node.fs_path, children)
