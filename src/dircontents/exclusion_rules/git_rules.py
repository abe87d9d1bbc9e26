"""Exclusion rules using .gitignore pattern syntax."""

from os import PathLike
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pathspec import GitIgnoreSpec

from dircontents.types import PathType

from .base_rules import BaseExclusionRules


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Exclusion rules using .gitignore pattern syntax.

    Matching is delegated to the pathspec library and follows Git's own rules: globs,
    directory patterns ending in ``/``, negation with ``!``, ``**`` and comments.
    Rules accumulate in the order they are loaded or added, so a later negation can
    re-include what an earlier pattern excluded.

    Attributes:
        spec (GitIgnoreSpec): Compiled matcher for all rules loaded so far.

    Example:
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_rule("build/")
        >>> rules.exclude("build/output.txt")
        True
        >>> rules.exclude("src/main.py")
        False
    """

    def __init__(self, rules_files: Optional[Union[PathType, Sequence[PathType]]] = None):
        """Initialize GitIgnoreExclusionRules, optionally from one or more rules files.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        self._lines: List[str] = []
        self.spec = GitIgnoreSpec.from_lines(self._lines)

        if rules_files is not None:
            self.load_rules(rules_files)

    def exclude(self, path: str) -> bool:
        return self.spec.match_file(path)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Append the patterns of one or more .gitignore-style files.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")
            self._lines.extend(path.read_text().splitlines())
        self.spec = GitIgnoreSpec.from_lines(self._lines)

    def add_rule(self, rule: str) -> None:
        """Append a single pattern, e.g. ``"*.pyc"`` or ``"!keep.pyc"``."""
        self._lines.append(rule)
        self.spec = GitIgnoreSpec.from_lines(self._lines)
