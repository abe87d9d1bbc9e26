"""Filesystem query interface consumed by the tree builder."""

import errno
import os
import stat
from abc import ABC, abstractmethod
from typing import List

_MISSING = (FileNotFoundError, NotADirectoryError)


class FileSystemProvider(ABC):
    """
    Abstract base class defining the filesystem queries needed to build a tree.

    The builder never touches the filesystem directly. Every existence check, listing,
    symlink inspection and canonicalization goes through a provider, which keeps the
    traversal logic independent of where the hierarchy actually lives. Implementations
    are expected to let their own errors (``PermissionError``, other ``OSError``)
    propagate; the builder decides which of them it tolerates.

    All paths are plain strings. Paths handed to a provider are the paths used to reach
    an entry during traversal and are not necessarily canonical.

    Example:
        >>> provider = LocalFileSystem()
        >>> provider.exists("/")
        True
        >>> provider.is_symbolic_link("/")
        False
    """

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Return True if ``path`` exists, following symlinks (broken links do not exist)."""

    @abstractmethod
    def is_directory(self, path: str) -> bool:
        """Return True if ``path`` is a directory or a symlink to one."""

    @abstractmethod
    def is_symbolic_link(self, path: str) -> bool:
        """Return True if ``path`` itself is a symbolic link."""

    @abstractmethod
    def list_directory(self, path: str) -> List[str]:
        """
        List the entry names of a directory.

        Args:
            path (str): A path for which ``is_directory`` is True.

        Returns:
            List[str]: Bare entry names (no ``.`` or ``..``) in a stable order.
        """

    @abstractmethod
    def canonicalize(self, path: str) -> str:
        """Resolve ``.``, ``..`` and symlinks, producing an absolute, deduplicated path."""

    @abstractmethod
    def read_symbolic_link_target(self, path: str) -> str:
        """Return the literal text stored in the symbolic link at ``path``."""


class LocalFileSystem(FileSystemProvider):
    """Provider backed by the local filesystem through ``os`` and ``os.path``.

    Directory listings are sorted by name so that repeated builds of an unchanged
    hierarchy produce identical trees. Only a missing path (or a missing parent
    directory) answers False; permission and I/O errors from ``stat`` propagate.
    Symlink loops such as ``a -> a`` count as missing, like dangling links.
    """

    def exists(self, path: str) -> bool:
        try:
            os.stat(path)
        except _MISSING:
            return False
        except OSError as e:
            if e.errno == errno.ELOOP:
                return False
            raise
        return True

    def is_directory(self, path: str) -> bool:
        try:
            return stat.S_ISDIR(os.stat(path).st_mode)
        except _MISSING:
            return False

    def is_symbolic_link(self, path: str) -> bool:
        try:
            return stat.S_ISLNK(os.lstat(path).st_mode)
        except _MISSING:
            return False

    def list_directory(self, path: str) -> List[str]:
        return sorted(os.listdir(path))

    def canonicalize(self, path: str) -> str:
        return os.path.realpath(path)

    def read_symbolic_link_target(self, path: str) -> str:
        return os.readlink(path)
