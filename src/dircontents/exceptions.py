class DirTreeError(Exception):
    """
    Base class for errors raised by dircontents itself.

    Failures reported by the filesystem (permission denied, I/O errors) are not wrapped
    in this hierarchy; they propagate unchanged as ``OSError`` subclasses.
    """

    pass


class MalformedTreeError(DirTreeError):
    """
    Exception raised when a tree node is built or attached in an inconsistent way.

    Files and internal symlinks are leaves. Attaching children to either of them, or
    constructing a node whose fields do not match its kind, raises this error.

    Attributes:
        fs_path (str): Path of the offending node.
        reason (str): Short description of the inconsistency.

    Example:
        >>> error = MalformedTreeError("root/a", "files cannot have children")
        >>> str(error)
        'Malformed tree node root/a: files cannot have children'
    """

    def __init__(self, fs_path: str, reason: str) -> None:
        """
        Initialize the exception with the offending node path and the reason.

        Args:
            fs_path (str): Path of the node that could not be built or attached.
            reason (str): Description of what is inconsistent.
        """
        self.fs_path = fs_path
        self.reason = reason
        super().__init__(f"Malformed tree node {fs_path}: {reason}")
