"""Exclusion rules for filtering files out of directory-contents trees."""

from .base_rules import BaseExclusionRules, exclude_from_dir_tree
from .git_rules import GitIgnoreExclusionRules

__all__ = [
    "BaseExclusionRules",
    "GitIgnoreExclusionRules",
    "exclude_from_dir_tree",
]
