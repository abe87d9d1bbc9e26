"""Text drawings of directory-contents trees."""

import sys
from typing import Any, Callable, Iterator, Optional, TextIO

from anytree import ContStyle, Node, RenderTree

from dircontents.dir_tree.dir_tree_node import DirTreeNode

FileLabel = Callable[[str, Any], str]


def _name_only(name: str, value: Any) -> str:
    return name


def label_dir_tree(tree: DirTreeNode, label_file: Optional[FileLabel] = None) -> Node:
    """Convert ``tree`` into a plain anytree.Node tree whose names are display labels.

    Directories are labelled with their basename, files with ``label_file(name, value)``
    and symlinks of either kind with ``"name -> target"``.
    """
    label = label_file or _name_only
    if tree.is_file:
        return Node(label(tree.name, tree.value))
    if tree.is_symlink:
        text = f"{tree.name} -> {tree.symlink_target}"
    else:
        text = tree.name
    return Node(text, children=[label_dir_tree(child, label) for child in tree.children])


def stream_dir_tree(tree: DirTreeNode, label_file: Optional[FileLabel] = None) -> Iterator[str]:
    """Generate the drawing of ``tree`` one line at a time.

    The root label is on the first line. Every other entry is indented under its
    parent and connected with ``├── `` (more siblings follow) or ``└── `` (last
    sibling), with ``│   `` continuing the parent's line and four spaces under a
    last child.

    Example:
        >>> tree = DirTreeNode.directory("System", [
        ...     DirTreeNode.directory("System/Directory", [
        ...         DirTreeNode.file("System/Directory/Contents.py", None),
        ...     ]),
        ... ])
        >>> for line in stream_dir_tree(tree):
        ...     print(line)
        System
        └── Directory
            └── Contents.py
    """
    for prefix, _, node in RenderTree(label_dir_tree(tree, label_file), style=ContStyle()):
        yield f"{prefix}{node.name}"


def render_dir_tree(tree: DirTreeNode, label_file: Optional[FileLabel] = None) -> str:
    """Produce a tree drawing (using only text) of a DirTreeNode hierarchy.

    Args:
        tree: Tree to draw.
        label_file: Optional function from ``(basename, value)`` to the label of a file.
            Defaults to the basename.

    Returns:
        The drawing as a single newline-separated string without a trailing newline.
    """
    return "\n".join(stream_dir_tree(tree, label_file))


def print_dir_tree(tree: DirTreeNode, label_file: Optional[FileLabel] = None, file: Optional[TextIO] = None) -> None:
    """Write the drawing of ``tree`` followed by a newline to ``file`` (stdout by default)."""
    print(render_dir_tree(tree, label_file), file=file if file is not None else sys.stdout)
