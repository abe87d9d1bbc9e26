"""Filesystem access used while building directory-contents trees."""

from .permission_action import PermissionAction
from .provider import FileSystemProvider, LocalFileSystem

__all__ = [
    "FileSystemProvider",
    "LocalFileSystem",
    "PermissionAction",
]
