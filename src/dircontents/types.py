from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class NodeKind(str, Enum):
    """Enumeration of node kinds in a directory-contents tree.

    Attributes:
        DIRECTORY: Directory whose contents were listed
        FILE: Any non-directory leaf
        SYMLINK: Symbolic link, see SymlinkKind for the two flavours
    """

    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"


class SymlinkKind(str, Enum):
    """Classification of a symbolic link relative to the traversal that found it.

    Attributes:
        INTERNAL: Target was already visited on the current branch. Stored symbolically.
        EXTERNAL: Target lies outside the visited set. Listed like a directory.
    """

    INTERNAL = "internal"
    EXTERNAL = "external"
