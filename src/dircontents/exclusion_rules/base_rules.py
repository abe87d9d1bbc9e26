import os
from abc import ABC, abstractmethod
from typing import Optional

from dircontents.dir_tree.dir_tree_node import DirTreeNode
from dircontents.dir_tree.filtering import filter_dir_tree


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for file exclusion rules.

    Implementations decide, for a path relative to the root of a scanned hierarchy,
    whether the file at that path should be left out. ``filter_tree`` applies the rules
    to a tree built by the builder, whose file values are their own paths.

    Example:
        >>> from dircontents.exclusion_rules.git_rules import GitIgnoreExclusionRules
        >>> git_rules = GitIgnoreExclusionRules()
        >>> git_rules.add_rule('*.pyc')
        >>> git_rules.exclude('pkg/test.pyc')
        True
        >>> git_rules.exclude('pkg/test.py')
        False
    """

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Determine if a given path should be excluded.

        Args:
            path (str): Path relative to the scanned root, using ``/`` as separator.

        Returns:
            bool: True if the path should be excluded, False if it should be kept.
        """

    def filter_tree(self, tree: DirTreeNode) -> Optional[DirTreeNode]:
        """
        Drop every file of ``tree`` whose path matches these rules.

        File values are taken to be paths, as stored by the builder, and are matched
        relative to the root's path. Directories are kept even when emptied; prune the
        result to remove them.

        Args:
            tree (DirTreeNode): Tree whose file values are filesystem paths.

        Returns:
            Optional[DirTreeNode]: The filtered tree, None if the root itself was a matching file.
        """
        root = tree.fs_path if tree.is_container else os.path.dirname(tree.fs_path)

        def keep(value: str) -> bool:
            relative = os.path.relpath(value, root).replace(os.sep, "/")
            return not self.exclude(relative)

        return filter_dir_tree(tree, keep)


def exclude_from_dir_tree(tree: DirTreeNode, rules: BaseExclusionRules) -> Optional[DirTreeNode]:
    """Apply ``rules`` to ``tree``. See BaseExclusionRules.filter_tree."""
    return rules.filter_tree(tree)
