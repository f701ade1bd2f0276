"""Exclusion rules using .gitignore pattern syntax."""

from os import PathLike
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern  # type: ignore

from dir2sheet.types import PathType

from .base_rules import BaseExclusionRules


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Exclusion rules using .gitignore pattern syntax.

    These rules complement the exclusion-list file when literal paths are not enough,
    e.g. to drop every "*.log" file or every "__pycache__/" directory from a report.
    Matching is delegated to the pathspec library, so the usual .gitignore syntax is
    available: globs, directory patterns ending in "/", negations starting with "!",
    "**" and comment lines.

    Rules from several files and individually added patterns are combined in the
    order they arrive; later negations can re-include earlier exclusions.

    Attributes:
        spec (PathSpec): Compiled pattern matcher from the pathspec library.

    Example:
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_rule("*.log")
        >>> rules.add_rule("cache/")
        >>> rules.exclude("logs/app.log")
        True
        >>> rules.exclude("cache/")
        True
        >>> rules.exclude("cache/data.bin")
        True
        >>> rules.exclude("src/app.py")
        False

    Note:
        Directory patterns such as "cache/" only match directory paths that carry
        a trailing slash, which is how the tree walker passes directories in.
    """

    def __init__(self, rules_files: Optional[Union[PathType, Sequence[PathType]]] = None):
        """Initialize GitIgnoreExclusionRules with patterns from specified files.

        Args:
            rules_files: Path(s) to the file(s) containing .gitignore patterns.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        self._patterns: List[GitWildMatchPattern] = []
        self.spec = PathSpec([])

        if rules_files is not None:
            self.load_rules(rules_files)

    def exclude(self, path: str) -> bool:
        """Check a root-relative, forward-slash path against the loaded patterns.

        Returns:
            bool: True if the last pattern matching the path is not a negation.
        """
        return self.spec.match_file(path)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Load and append .gitignore patterns from one or more files.

        Args:
            rules_files: Path(s) to file(s) containing .gitignore patterns.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")

            with open(path, "r", encoding="utf-8") as f:
                lines = f.read().splitlines()

            self._extend(PathSpec.from_lines(GitWildMatchPattern, lines).patterns)

    def add_rule(self, rule: str) -> None:
        """Append a single .gitignore pattern, e.g. "*.pyc", "dist/" or "!keep.txt"."""
        self._extend([GitWildMatchPattern(rule)])

    def has_rules(self) -> bool:
        return bool(self._patterns)

    def _extend(self, patterns: Sequence[GitWildMatchPattern]) -> None:
        # PathSpec compiles its patterns on construction, so rebuild it
        self._patterns.extend(patterns)
        self.spec = PathSpec(list(self._patterns))
