"""Permission action enum for handling permission errors during directory listing."""

from enum import Enum


class PermissionAction(str, Enum):
    """Action to take when a directory cannot be listed because access is denied.

    Values:
        RAISE: Let the PermissionError propagate and abort the build (default behavior)
        IGNORE: Keep the directory in the tree without children and log a warning
    """

    RAISE = "raise"
    IGNORE = "ignore"
